"""Authentication router: registration, login and the current-user lookup."""

from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.orm import Session

from projecthub.core.database import get_db
from projecthub.core.middleware.rate_limit import limiter
from projecthub.modules.users import UserService
from projecthub.modules.users.models import User
from projecthub.modules.users.schemas import (
    AuthResponse,
    MeResponse,
    UserCreate,
    UserDetail,
    UserLogin,
    UserOut,
)
from projecthub.oauth2 import create_access_token, get_current_user

router = APIRouter(prefix="/auth", tags=["Authentication"])


def _auth_response(user: User) -> AuthResponse:
    return AuthResponse(
        token=create_access_token({"user_id": user.id}),
        user=UserOut.model_validate(user),
    )


@router.post(
    "/register", status_code=status.HTTP_201_CREATED, response_model=AuthResponse
)
@limiter.limit("10/hour")
def register_user(
    request: Request,
    payload: UserCreate,
    db: Session = Depends(get_db),
):
    """Create an account and return a token for it."""
    new_user = UserService(db).create_user(payload)
    return _auth_response(new_user)


@router.post("/login", response_model=AuthResponse)
@limiter.limit("6/minute")
def login(
    request: Request,
    credentials: UserLogin,
    db: Session = Depends(get_db),
):
    user = UserService(db).authenticate(credentials.email, credentials.password)
    return _auth_response(user)


@router.get("/me", response_model=MeResponse)
def read_current_user(current_user: User = Depends(get_current_user)):
    return MeResponse(user=UserDetail.model_validate(current_user))
