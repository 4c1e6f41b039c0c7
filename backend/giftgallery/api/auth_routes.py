"""Authentication API endpoints.

    POST /api/auth/register  create account
    POST /api/auth/login     authenticate and receive JWT
    GET  /api/auth/me        current user info
"""

import logging

from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from ..core.auth import AuthContext, require_auth
from ..core.config import Settings
from ..core.token_factory import create_token
from ..database import get_db
from ..exceptions import AuthenticationError
from ..schemas.envelope import ok_envelope
from ..schemas.user import LoginRequest, LoginResponse, RegisterRequest, UserResponse
from ..services import auth_service
from ..services.credential_store import CredentialStore
from .deps import get_credentials, get_settings

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["Authentication"])


@router.post("/register", status_code=201, summary="Register a new user")
def register_user(
    body: RegisterRequest,
    db: Session = Depends(get_db),
    credentials: CredentialStore = Depends(get_credentials),
):
    user = auth_service.register_user(db, credentials, body.email, body.password, body.display_name)
    return ok_envelope(data=UserResponse.model_validate(user)).to_content()


@router.post("/login", summary="Authenticate and receive JWT")
def login(
    body: LoginRequest,
    request: Request,
    db: Session = Depends(get_db),
    credentials: CredentialStore = Depends(get_credentials),
    settings: Settings = Depends(get_settings),
):
    client_ip = request.client.host if request.client else None
    user = auth_service.authenticate(db, credentials, body.email, body.password, ip_address=client_ip)
    token = create_token(
        subject=user.user_id,
        secret=settings.jwt_secret_key,
        algorithm=settings.jwt_algorithm,
        expires_hours=settings.jwt_expires_hours,
    )
    data = LoginResponse(token=token, user=UserResponse.model_validate(user))
    return ok_envelope(data=data).to_content()


@router.get("/me", summary="Get current user info")
def get_me(auth: AuthContext = Depends(require_auth), db: Session = Depends(get_db)):
    user = auth_service.get_user_by_id(db, auth.user_id)
    if user is None:
        raise AuthenticationError("User not found")
    return ok_envelope(data=UserResponse.model_validate(user)).to_content()
