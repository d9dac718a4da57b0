from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import OAuth2PasswordRequestForm
from sqlalchemy.orm import Session

from app.config.database import get_db
from app.core.auth.service import AuthService
from app.core.auth.schemas import UserLogin, TokenResponse, UserResponse
from app.shared.database.models import User
from app.core.auth.dependencies import get_current_user

router = APIRouter()


def _issue_token(db: Session, username: str, password: str) -> TokenResponse:
    user = AuthService.authenticate(db, username, password)

    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Usuario o contraseña incorrectos",
            headers={"WWW-Authenticate": "Bearer"},
        )

    if not user.is_active:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Usuario inactivo"
        )

    access_token = AuthService.create_access_token(data=AuthService.build_claims(user))

    return TokenResponse(
        access_token=access_token,
        token_type="bearer",
        user=UserResponse.model_validate(user)
    )


@router.post("/login", response_model=TokenResponse)
async def login(
    form_data: OAuth2PasswordRequestForm = Depends(),
    db: Session = Depends(get_db)
):
    """
    Endpoint de login para obtener token de acceso

    **Parámetros:**
    - **username**: Username del usuario
    - **password**: Contraseña del usuario

    **Returns:**
    - Token de acceso JWT (incluye rol y organización)
    - Información del usuario
    """
    return _issue_token(db, form_data.username, form_data.password)


@router.post("/login-json", response_model=TokenResponse)
async def login_json(
    user_login: UserLogin,
    db: Session = Depends(get_db)
):
    """
    Endpoint de login alternativo que acepta JSON

    **Body:**
    ```json
        {
            "username": "manager.org1",
            "password": "manager123"
        }
    ```
    """
    return _issue_token(db, user_login.username, user_login.password)


@router.get("/me", response_model=UserResponse)
async def get_current_user_info(
    current_user: User = Depends(get_current_user)
):
    """
    Obtener información del usuario actual

    **Headers requeridos:**
    - Authorization: Bearer {token}
    """
    return current_user
