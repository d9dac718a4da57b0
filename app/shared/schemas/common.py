# app/shared/schemas/common.py
from pydantic import BaseModel

class ErrorResponse(BaseModel):
    """Cuerpo estándar de las respuestas de error"""
    error: str
    message: str

    class Config:
        json_schema_extra = {
            "example": {
                "error": "Validation Error",
                "message": "employee_id is required"
            }
        }
