import pytest
from todo_app.client import Session, guard, navigate, resolve


@pytest.fixture
def guest():
    return Session()


@pytest.fixture
def member():
    return Session(token="some-token", user={"id": 1})


@pytest.mark.parametrize("path", ["/", "/profile"])
def test_auth_routes_send_guests_to_login(guest, path):
    assert guard(resolve(path), guest) == "/login"
    assert navigate(path, guest).name == "Login"


@pytest.mark.parametrize("path", ["/login", "/register"])
def test_guest_routes_send_members_to_dashboard(member, path):
    assert guard(resolve(path), member) == "/"
    assert navigate(path, member).name == "Dashboard"


@pytest.mark.parametrize(
    "path,name",
    [("/", "Dashboard"), ("/profile", "Profile")],
)
def test_members_reach_auth_routes(member, path, name):
    assert guard(resolve(path), member) is None
    assert navigate(path, member).name == name


@pytest.mark.parametrize("path,name", [("/login", "Login"), ("/register", "Register")])
def test_guests_reach_guest_routes(guest, path, name):
    assert guard(resolve(path), guest) is None
    assert navigate(path, guest).name == name


def test_unknown_paths_fall_back_to_dashboard(guest, member):
    assert resolve("/does/not/exist").name == "Dashboard"
    assert navigate("/does/not/exist", member).name == "Dashboard"
    assert navigate("/does/not/exist", guest).name == "Login"


def test_token_presence_is_the_only_signal():
    # no user and a bogus token still counts as logged in
    assert navigate("/profile", Session(token="expired-or-not")).name == "Profile"


def test_session_clear_changes_navigation(member):
    member.clear()
    assert navigate("/", member).name == "Login"
