from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import OAuth2PasswordRequestForm
from sqlalchemy.orm import Session
import logging

from app.config.database import get_db
from app.core.auth.service import AuthService
from app.core.auth.schemas import UserLogin, TokenResponse, UserResponse
from app.shared.database.models import User
from app.core.auth.dependencies import get_current_user

logger = logging.getLogger(__name__)

router = APIRouter()


def _authenticate(db: Session, email: str, password: str) -> User:
    user = db.query(User).filter(User.email == email).first()

    if not user or not AuthService.verify_password(password, user.password_hash):
        logger.warning(f"⛔ Login fallido para {email}")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Email o contraseña incorrectos",
            headers={"WWW-Authenticate": "Bearer"},
        )

    if not user.is_active:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Usuario inactivo"
        )

    return user


def _token_response(user: User) -> TokenResponse:
    access_token = AuthService.create_access_token(data={
        "user_id": user.id,
        "email": user.email,
        "role": user.role
    })
    logger.info(f"🔐 Login exitoso - usuario {user.id} ({user.role})")
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
    - **username**: Email del usuario
    - **password**: Contraseña del usuario
    """
    user = _authenticate(db, form_data.username, form_data.password)
    return _token_response(user)


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
            "email": "user@example.com",
            "password": "password123"
        }
    ```
    """
    user = _authenticate(db, user_login.email, user_login.password)
    return _token_response(user)


@router.get("/me", response_model=UserResponse)
async def get_current_user_info(current_user: User = Depends(get_current_user)):
    """Obtener información del usuario actual"""
    return UserResponse.model_validate(current_user)
