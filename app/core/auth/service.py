# app/core/auth/service.py
from datetime import datetime, timedelta
from typing import Any, Dict, Optional
import logging

from jose import jwt, JWTError
from passlib.context import CryptContext
from sqlalchemy.orm import Session

from app.config.settings import settings
from app.shared.database.models import User

logger = logging.getLogger(__name__)

# bcrypt solo considera los primeros 72 bytes
_BCRYPT_MAX_BYTES = 72

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def _truncate(password: str) -> str:
    return password.encode('utf-8')[:_BCRYPT_MAX_BYTES].decode('utf-8', 'ignore')


class AuthService:
    """Emisión y verificación de tokens, hashing de contraseñas"""

    @staticmethod
    def verify_password(plain_password: str, hashed_password: str) -> bool:
        try:
            return pwd_context.verify(_truncate(plain_password), hashed_password)
        except ValueError as e:
            logger.warning(f"Hash de contraseña ilegible: {e}")
            return False

    @staticmethod
    def get_password_hash(password: str) -> str:
        return pwd_context.hash(_truncate(password))

    @staticmethod
    def build_claims(user: User) -> Dict[str, Any]:
        """Claims del token: identidad, rol y organización del usuario"""
        return {
            "user_id": user.id,
            "employee_id": user.employee_id,
            "role": user.role,
            "organization_id": user.organization_id,
        }

    @staticmethod
    def create_access_token(data: dict, expires_delta: Optional[timedelta] = None) -> str:
        """
        Crear token de acceso firmado.

        Todo token debe llevar organization_id: el gate compara ese valor
        con la organización del path en cada request.
        """
        if "organization_id" not in data:
            raise ValueError("organization_id es requerido en el token")

        expire = datetime.utcnow() + (
            expires_delta or timedelta(minutes=settings.access_token_expire_minutes)
        )
        to_encode = {**data, "exp": expire}
        return jwt.encode(to_encode, settings.secret_key, algorithm=settings.algorithm)

    @staticmethod
    def verify_token(token: str) -> Optional[dict]:
        """Decodificar token; None si la firma o la expiración no son válidas"""
        try:
            return jwt.decode(token, settings.secret_key, algorithms=[settings.algorithm])
        except JWTError:
            return None

    @classmethod
    def authenticate(cls, db: Session, username: str, password: str) -> Optional[User]:
        """Buscar usuario por username y validar contraseña"""
        user = db.query(User).filter(User.username == username).first()
        if user is None or not cls.verify_password(password, user.password_hash):
            logger.warning(f"Login fallido para username={username}")
            return None
        return user
