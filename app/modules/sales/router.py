# app/modules/sales/router.py
from typing import List, Optional
from fastapi import APIRouter, Depends, Header, Query, Response, status
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from app.config.database import get_db
from app.core.auth.dependencies import require_roles, get_current_organization_id
from app.core.auth.roles import SALES_READ_ROLES, SALES_WRITE_ROLES
from app.shared.schemas.common import ErrorResponse
from .service import SalesService
from .schemas import SaleCreateRequest, SaleUpdateRequest, SaleResponse

router = APIRouter()

ERROR_RESPONSES = {
    400: {"model": ErrorResponse},
    404: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
}


def _not_found(sale_id: str) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_404_NOT_FOUND,
        content=ErrorResponse(
            error="Not Found",
            message=f"Sale not found with id: {sale_id}"
        ).model_dump()
    )


@router.post(
    "",
    response_model=SaleResponse,
    status_code=status.HTTP_201_CREATED,
    responses=ERROR_RESPONSES
)
def create_sale(
    sale_data: SaleCreateRequest,
    current_user = Depends(require_roles(SALES_READ_ROLES)),
    org_id: str = Depends(get_current_organization_id),
    db: Session = Depends(get_db)
):
    """
    Registrar una venta

    - organization_id se toma del path, nunca del body
    - Devuelve la venta creada con su id generado
    """
    return SalesService(db).create_sale(org_id, sale_data)


@router.get("", response_model=List[SaleResponse], responses=ERROR_RESPONSES)
def get_all_sales(
    current_user = Depends(require_roles(SALES_READ_ROLES)),
    org_id: str = Depends(get_current_organization_id),
    db: Session = Depends(get_db)
):
    """Todas las ventas activas de la organización"""
    return SalesService(db).get_all_sales(org_id)


@router.get("/by-date", response_model=List[SaleResponse], responses=ERROR_RESPONSES)
def get_sales_by_date_range(
    from_: Optional[str] = Query(None, alias="from", description="Inicio ISO-8601, inclusive"),
    to: Optional[str] = Query(None, description="Fin ISO-8601, inclusive"),
    current_user = Depends(require_roles(SALES_READ_ROLES)),
    org_id: str = Depends(get_current_organization_id),
    db: Session = Depends(get_db)
):
    """
    Ventas por rango de fechas

    Ejemplo: `/by-date?from=2025-10-01T00:00:00&to=2025-10-31T23:59:59`
    """
    return SalesService(db).get_sales_by_date_range(org_id, from_, to)


@router.get("/{sale_id}", response_model=SaleResponse, responses=ERROR_RESPONSES)
def get_sale_by_id(
    sale_id: str,
    current_user = Depends(require_roles(SALES_READ_ROLES)),
    org_id: str = Depends(get_current_organization_id),
    db: Session = Depends(get_db)
):
    sale = SalesService(db).get_sale_by_id(org_id, sale_id)
    if sale is None:
        return _not_found(sale_id)
    return sale


@router.put("/{sale_id}", response_model=SaleResponse, responses=ERROR_RESPONSES)
def update_sale(
    sale_id: str,
    update_data: SaleUpdateRequest,
    current_user = Depends(require_roles(SALES_WRITE_ROLES)),
    org_id: str = Depends(get_current_organization_id),
    db: Session = Depends(get_db)
):
    """Actualizar los campos mutables de una venta (solo owner y manager)"""
    updated = SalesService(db).update_sale(org_id, sale_id, update_data)
    if updated is None:
        return _not_found(sale_id)
    return updated


@router.delete(
    "/{sale_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses=ERROR_RESPONSES
)
def delete_sale(
    sale_id: str,
    employee_id: Optional[str] = Header(None, alias="X-Employee-Id"),
    current_user = Depends(require_roles(SALES_WRITE_ROLES)),
    org_id: str = Depends(get_current_organization_id),
    db: Session = Depends(get_db)
):
    """
    Eliminar una venta (soft delete)

    El header opcional `X-Employee-Id` identifica a quién la elimina;
    sin header se registra SYSTEM.
    """
    SalesService(db).delete_sale(org_id, sale_id, employee_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
