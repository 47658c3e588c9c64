from fastapi import APIRouter, Depends
from todo_app.models.user import User
from todo_app.routers.deps import get_auth_service, get_current_user, get_token
from todo_app.schemas.user import AuthResponse, UserCreate, UserLogin, UserOut, UserUpdate
from todo_app.services.auth_service import AuthService

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/register", response_model=AuthResponse, status_code=201)
def register(payload: UserCreate, auth: AuthService = Depends(get_auth_service)):
    user, token = auth.register(payload)
    return {"user": user, "token": token}


@router.post("/login", response_model=AuthResponse)
def login(payload: UserLogin, auth: AuthService = Depends(get_auth_service)):
    user, token = auth.login(payload.email, payload.password)
    return {"user": user, "token": token}


@router.get("/user", response_model=UserOut)
def read_user(user: User = Depends(get_current_user)):
    return user


@router.put("/user", response_model=UserOut)
def update_user(payload: UserUpdate, user: User = Depends(get_current_user), auth: AuthService = Depends(get_auth_service)):
    return auth.update_profile(user, payload)


@router.post("/logout")
def logout(token: str = Depends(get_token), auth: AuthService = Depends(get_auth_service)):
    auth.logout(token)
    return {"message": "Logged out successfully"}


# Kept for clients that still call GET /user directly
legacy_router = APIRouter(tags=["auth"])


@legacy_router.get("/user", response_model=UserOut)
def read_user_legacy(user: User = Depends(get_current_user)):
    return user
