from typing import Optional

from fastapi import Depends, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlmodel import Session

from ..core.config import Settings
from ..core.errors import AuthenticationError
from ..db.session import get_session
from ..models.user import User
from ..services.auth import resolve_token

# Missing headers are reported through AuthenticationError, not FastAPI's default
security = HTTPBearer(auto_error=False)


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_current_user(
    token: Optional[HTTPAuthorizationCredentials] = Depends(security),
    session: Session = Depends(get_session),
    settings: Settings = Depends(get_settings),
) -> User:
    if token is None:
        raise AuthenticationError("Not authorized to access this route")

    return resolve_token(session, token.credentials, settings)
