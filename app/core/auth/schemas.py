from pydantic import BaseModel, Field

class UserLogin(BaseModel):
    """Schema para login de usuario"""
    email: str = Field(..., description="Email del usuario")
    password: str = Field(..., min_length=6, description="Contraseña del usuario")

    class Config:
        json_schema_extra = {
            "example": {
                "email": "manager@stockflow.local",
                "password": "manager123"
            }
        }

class UserResponse(BaseModel):
    """Schema para respuesta de usuario"""
    id: int
    email: str
    first_name: str
    last_name: str
    role: str
    is_active: bool

    class Config:
        from_attributes = True
        json_schema_extra = {
            "example": {
                "id": 1,
                "email": "manager@stockflow.local",
                "first_name": "Juan",
                "last_name": "Pérez",
                "role": "manager",
                "is_active": True
            }
        }

class TokenResponse(BaseModel):
    """Schema para respuesta de token"""
    access_token: str
    token_type: str = "bearer"
    user: UserResponse
