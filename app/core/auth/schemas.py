from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime

class UserLogin(BaseModel):
    """Schema para login de usuario"""
    username: str = Field(..., min_length=1, description="Username del usuario")
    password: str = Field(..., min_length=6, description="Contraseña del usuario")

    class Config:
        json_schema_extra = {
            "example": {
                "username": "manager.org1",
                "password": "manager123"
            }
        }

class UserResponse(BaseModel):
    """Schema para respuesta de usuario"""
    id: str
    username: str
    employee_id: str
    role: str
    organization_id: str
    is_active: bool

    class Config:
        from_attributes = True
        json_schema_extra = {
            "example": {
                "id": "0b6f3c52-1f8a-4b55-9f0e-0d1f3c0a9a11",
                "username": "manager.org1",
                "employee_id": "E7",
                "role": "manager",
                "organization_id": "org1",
                "is_active": True
            }
        }

class TokenResponse(BaseModel):
    """Schema para respuesta de token"""
    access_token: str
    token_type: str = "bearer"
    user: UserResponse

class TokenPayload(BaseModel):
    """Schema para payload del token"""
    user_id: str
    employee_id: str
    role: str
    organization_id: str
    exp: Optional[datetime] = None
