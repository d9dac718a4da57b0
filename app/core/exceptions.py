# app/core/exceptions.py
"""
Excepciones tipadas del dominio de ventas.

El servicio lanza estas excepciones y la capa HTTP las traduce a una
respuesta {"error", "message"} con el status correspondiente.
"""

from typing import Any, Dict

from fastapi import status


class SalesError(Exception):
    """Excepción base para los fallos tipados del servicio de ventas"""

    error = "Error"
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        return {"error": self.error, "message": self.message}


class SaleValidationError(SalesError):
    """Entrada malformada o campo requerido ausente"""

    error = "Validation Error"
    status_code = status.HTTP_400_BAD_REQUEST


class InvalidRangeError(SaleValidationError):
    """Rango de fechas malformado o invertido"""

    error = "Invalid Date Range"


class SaleNotFoundError(SalesError):
    error = "Not Found"
    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, sale_id: str):
        self.sale_id = sale_id
        super().__init__(f"Sale not found with id: {sale_id}")


class InternalError(SalesError):
    """Fallo inesperado de persistencia o de ejecución"""

    error = "Internal Server Error"
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
