from typing import Optional


class Session:
    """Client-side login state handed to ``ApiClient`` and the route guard.

    Token presence alone decides whether the client counts as logged in;
    expiry is left to the server.
    """

    def __init__(self, token: Optional[str] = None, user: Optional[dict] = None):
        self.token = token
        self.user = user

    @property
    def is_authenticated(self) -> bool:
        return bool(self.token)

    def store(self, token: str, user: Optional[dict]) -> None:
        self.token = token
        self.user = user

    def clear(self) -> None:
        self.token = None
        self.user = None

    def __repr__(self):
        return f"Session(authenticated={self.is_authenticated}, user={(self.user or {}).get('email')!r})"
