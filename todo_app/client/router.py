from typing import Dict, List, Optional

from todo_app.client.session import Session

LOGIN_PATH = "/login"
DASHBOARD_PATH = "/"


class Route:
    def __init__(self, path: str, name: str, requires_auth: bool = False, requires_guest: bool = False):
        self.path = path
        self.name = name
        self.requires_auth = requires_auth
        self.requires_guest = requires_guest

    def __repr__(self):
        return f"Route({self.path!r}, {self.name!r})"


ROUTES: List[Route] = [
    Route("/", "Dashboard", requires_auth=True),
    Route("/login", "Login", requires_guest=True),
    Route("/register", "Register", requires_guest=True),
    Route("/profile", "Profile", requires_auth=True),
]

_BY_PATH: Dict[str, Route] = {route.path: route for route in ROUTES}


def resolve(path: str) -> Route:
    """Look up a route; unknown paths fall through to the dashboard."""
    normalized = "/" + path.strip("/")
    return _BY_PATH.get(normalized, _BY_PATH[DASHBOARD_PATH])


def guard(target: Route, session: Session) -> Optional[str]:
    """Return the path to redirect to, or None to let the navigation proceed."""
    if target.requires_auth and not session.is_authenticated:
        return LOGIN_PATH
    if target.requires_guest and session.is_authenticated:
        return DASHBOARD_PATH
    return None


def navigate(path: str, session: Session) -> Route:
    """Resolve ``path`` and follow guard redirects to the route actually shown."""
    route = resolve(path)
    for _ in range(len(ROUTES)):
        redirect = guard(route, session)
        if redirect is None:
            return route
        route = resolve(redirect)
    return route
