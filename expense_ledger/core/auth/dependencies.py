from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session
from typing import Iterable, List, Optional

from expense_ledger.config.database import get_db
from expense_ledger.shared.database.models import User, UserRole
from expense_ledger.core.auth.service import AuthService

security = HTTPBearer(auto_error=False)

# Roles allowed to create, update and delete expenses
EXPENSE_MANAGER_ROLES = [
    UserRole.FACILITIES_TEAM.value,
    UserRole.FINANCE_TEAM.value,
    UserRole.ADMIN.value,
]

class AuthenticationError(HTTPException):
    def __init__(self, detail: str = "Could not validate credentials"):
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=detail,
            headers={"WWW-Authenticate": "Bearer"},
        )

class AuthorizationError(HTTPException):
    def __init__(self, detail: str = "Not enough permissions"):
        super().__init__(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=detail
        )

async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: Session = Depends(get_db)
) -> User:
    """Resolve the authenticated user from the bearer token"""

    if credentials is None:
        raise AuthenticationError("Missing bearer token")

    payload = AuthService.verify_token(credentials.credentials)
    if payload is None:
        raise AuthenticationError("Invalid or expired token")

    user_id = payload.get("user_id")
    if user_id is None:
        raise AuthenticationError("Invalid token payload")

    user = db.query(User).filter(User.id == str(user_id)).first()

    if user is None:
        raise AuthenticationError("User not found")

    if not user.is_active:
        raise AuthenticationError("Inactive user")

    return user

def has_required_role(role: Optional[str], allowed_roles: Iterable[str]) -> bool:
    """Whether a caller with `role` may use an endpoint restricted to `allowed_roles`"""
    if role is None:
        return False
    return role in set(allowed_roles)

def require_roles(allowed_roles: List[str]):
    """Factory for a dependency that requires one of the given roles"""
    def role_checker(current_user: User = Depends(get_current_user)) -> User:
        if not has_required_role(current_user.role, allowed_roles):
            raise AuthorizationError(
                f"Role '{current_user.role}' is not allowed. Allowed roles: {allowed_roles}"
            )
        return current_user
    return role_checker

def get_expense_manager(current_user: User = Depends(require_roles(EXPENSE_MANAGER_ROLES))) -> User:
    """Dependency for users that can modify expenses"""
    return current_user
