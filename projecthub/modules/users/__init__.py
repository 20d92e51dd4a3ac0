"""User domain package exports."""

from .models import User
from .schemas import AuthResponse, UserCreate, UserLogin, UserOut
from .service import UserService

__all__ = [
    "User",
    "UserCreate",
    "UserLogin",
    "UserOut",
    "AuthResponse",
    "UserService",
]
