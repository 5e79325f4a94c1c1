"""User domain exports."""
from .entity import User, UserRole, parse_role
from .repository import UserRepository
from .service import PasswordService

__all__ = ["User", "UserRole", "parse_role", "UserRepository", "PasswordService"]
