from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from pydantic import ValidationError
from sqlalchemy.orm import Session
from typing import AbstractSet, Optional

from app.config.database import get_db
from app.shared.database.models import User
from app.core.auth.service import AuthService
from app.core.auth.roles import Role
from app.core.auth.schemas import TokenPayload

security = HTTPBearer(auto_error=False)

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
    """Obtener usuario actual desde el token"""
    if credentials is None:
        raise AuthenticationError("Token requerido")

    payload = AuthService.verify_token(credentials.credentials)
    if payload is None:
        raise AuthenticationError("Token inválido o expirado")

    try:
        token = TokenPayload(**payload)
    except ValidationError:
        raise AuthenticationError("Payload del token inválido")

    user = db.query(User).filter(User.id == token.user_id).first()

    if user is None:
        raise AuthenticationError("Usuario no encontrado")

    if not user.is_active:
        raise AuthenticationError("Usuario inactivo")

    return user

def user_role(user: User) -> Optional[Role]:
    try:
        return Role(user.role)
    except ValueError:
        return None

def require_roles(allowed_roles: AbstractSet[Role]):
    """Factory para crear dependency que requiere uno de los roles dados"""
    def role_checker(current_user: User = Depends(get_current_user)) -> User:
        if user_role(current_user) not in allowed_roles:
            allowed = sorted(role.value for role in allowed_roles)
            raise AuthorizationError(
                f"Rol '{current_user.role}' no autorizado. Roles permitidos: {allowed}"
            )
        return current_user
    return role_checker

def get_current_organization_id(
    org_id: str,
    current_user: User = Depends(get_current_user)
) -> str:
    """
    Organización confiable de la request: el org_id del path, siempre que
    coincida con la organización del usuario autenticado.
    """
    if current_user.organization_id != org_id:
        raise AuthorizationError(
            f"No tienes permisos para acceder a la organización {org_id}"
        )
    return org_id
