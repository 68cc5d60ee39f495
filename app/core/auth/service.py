from datetime import datetime, timedelta
from typing import Optional
import logging

from jose import jwt, JWTError
from passlib.context import CryptContext
from app.config.settings import settings

logger = logging.getLogger(__name__)

# Password context
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

class AuthService:
    """Servicio de autenticación"""

    @staticmethod
    def verify_password(plain_password: str, hashed_password: str) -> bool:
        """Verificar contraseña"""
        try:
            # bcrypt solo considera los primeros 72 bytes
            encoded_password = plain_password.encode('utf-8')[:72].decode('utf-8', errors='ignore')
            return pwd_context.verify(encoded_password, hashed_password)
        except Exception as e:
            logger.warning(f"⚠️ Error verificando contraseña: {str(e)}")
            return False

    @staticmethod
    def get_password_hash(password: str) -> str:
        """Generar hash de contraseña"""
        encoded_password = password.encode('utf-8')[:72].decode('utf-8', errors='ignore')
        return pwd_context.hash(encoded_password)

    @staticmethod
    def create_access_token(data: dict, expires_delta: Optional[timedelta] = None) -> str:
        """Crear token de acceso"""
        to_encode = data.copy()

        if expires_delta:
            expire = datetime.utcnow() + expires_delta
        else:
            expire = datetime.utcnow() + timedelta(minutes=settings.access_token_expire_minutes)

        to_encode.update({"exp": expire})

        if "user_id" not in to_encode:
            raise ValueError("user_id es requerido en el token")

        return jwt.encode(to_encode, settings.secret_key, algorithm=settings.algorithm)

    @staticmethod
    def verify_token(token: str) -> Optional[dict]:
        """Verificar y decodificar token"""
        try:
            return jwt.decode(token, settings.secret_key, algorithms=[settings.algorithm])
        except JWTError:
            return None
