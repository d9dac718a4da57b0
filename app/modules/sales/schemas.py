# app/modules/sales/schemas.py
from pydantic import BaseModel, Field
from typing import Optional
from decimal import Decimal
from datetime import datetime

# Igual que las columnas Numeric(12, 2) de la tabla sales
AMOUNT_MAX_DIGITS = 12
AMOUNT_DECIMAL_PLACES = 2


class SaleCreateRequest(BaseModel):
    # Siempre se sobreescribe con el org_id del path
    organization_id: Optional[str] = Field(None, description="Ignorado: se toma del path")
    employee_id: str = Field(..., description="Empleado que realizó la venta")
    product_name: str = Field(..., description="Producto vendido")
    gun: Optional[str] = Field(None, max_length=50, description="Pistola / surtidor")
    sales_in_liters: Decimal = Field(
        Decimal("0"), max_digits=AMOUNT_MAX_DIGITS, decimal_places=AMOUNT_DECIMAL_PLACES,
        description="Litros vendidos"
    )
    sales_in_rupees: Decimal = Field(
        Decimal("0"), max_digits=AMOUNT_MAX_DIGITS, decimal_places=AMOUNT_DECIMAL_PLACES,
        description="Monto total de la venta"
    )
    cash_received: Decimal = Field(
        Decimal("0"), max_digits=AMOUNT_MAX_DIGITS, decimal_places=AMOUNT_DECIMAL_PLACES,
        description="Cobrado en efectivo"
    )
    phone_pay: Decimal = Field(
        Decimal("0"), max_digits=AMOUNT_MAX_DIGITS, decimal_places=AMOUNT_DECIMAL_PLACES,
        description="Cobrado por UPI"
    )
    credit_card: Decimal = Field(
        Decimal("0"), max_digits=AMOUNT_MAX_DIGITS, decimal_places=AMOUNT_DECIMAL_PLACES,
        description="Cobrado con tarjeta"
    )
    short_collections: Decimal = Field(
        Decimal("0"), max_digits=AMOUNT_MAX_DIGITS, decimal_places=AMOUNT_DECIMAL_PLACES,
        description="Faltante de cobro"
    )
    notes: Optional[str] = Field(None, description="Notas adicionales")

    class Config:
        json_schema_extra = {
            "example": {
                "employee_id": "emp1",
                "product_name": "Diesel",
                "gun": "G2",
                "sales_in_liters": "40.00",
                "sales_in_rupees": "3832.00",
                "cash_received": "2000.00",
                "phone_pay": "1832.00",
                "credit_card": "0",
                "short_collections": "0"
            }
        }


class SaleUpdateRequest(BaseModel):
    """Solo los campos mutables; cualquier otro campo del body se ignora"""
    product_name: Optional[str] = None
    gun: Optional[str] = Field(None, max_length=50)
    sales_in_liters: Optional[Decimal] = Field(
        None, max_digits=AMOUNT_MAX_DIGITS, decimal_places=AMOUNT_DECIMAL_PLACES
    )
    sales_in_rupees: Optional[Decimal] = Field(
        None, max_digits=AMOUNT_MAX_DIGITS, decimal_places=AMOUNT_DECIMAL_PLACES
    )
    cash_received: Optional[Decimal] = Field(
        None, max_digits=AMOUNT_MAX_DIGITS, decimal_places=AMOUNT_DECIMAL_PLACES
    )
    phone_pay: Optional[Decimal] = Field(
        None, max_digits=AMOUNT_MAX_DIGITS, decimal_places=AMOUNT_DECIMAL_PLACES
    )
    credit_card: Optional[Decimal] = Field(
        None, max_digits=AMOUNT_MAX_DIGITS, decimal_places=AMOUNT_DECIMAL_PLACES
    )
    short_collections: Optional[Decimal] = Field(
        None, max_digits=AMOUNT_MAX_DIGITS, decimal_places=AMOUNT_DECIMAL_PLACES
    )
    notes: Optional[str] = None


class SaleResponse(BaseModel):
    id: str
    organization_id: str
    employee_id: str
    product_name: str
    gun: Optional[str] = None
    sales_in_liters: Decimal
    sales_in_rupees: Decimal
    cash_received: Decimal
    phone_pay: Decimal
    credit_card: Decimal
    short_collections: Decimal
    notes: Optional[str] = None
    status: str
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
