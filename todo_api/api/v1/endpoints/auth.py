from fastapi import APIRouter, Depends, status
from sqlmodel import Session

from ....core.config import Settings
from ....db.session import get_session
from ....models.user import User
from ....schemas.user import AuthResponse, UserCreate, UserLogin, UserResponse, UserUpdate
from ....services import auth as auth_service
from ...deps import get_current_user, get_settings

router = APIRouter()


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def register(
    user_create: UserCreate,
    session: Session = Depends(get_session),
    settings: Settings = Depends(get_settings),
):
    user, access_token = auth_service.register_user(session, user_create, settings)
    return {"success": True, "access_token": access_token, "data": user}


@router.post("/login", response_model=AuthResponse)
def login(
    user_credentials: UserLogin,
    session: Session = Depends(get_session),
    settings: Settings = Depends(get_settings),
):
    user, access_token = auth_service.authenticate_user(session, user_credentials, settings)
    return {"success": True, "access_token": access_token, "data": user}


@router.get("/me", response_model=UserResponse)
def get_current_user_profile(current_user: User = Depends(get_current_user)):
    return {"success": True, "data": current_user}


@router.put("/me", response_model=UserResponse)
def update_current_user_profile(
    user_update: UserUpdate,
    current_user: User = Depends(get_current_user),
    session: Session = Depends(get_session),
):
    user = auth_service.update_profile(session, current_user, user_update)
    return {"success": True, "data": user}
