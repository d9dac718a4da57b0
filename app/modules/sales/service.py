# app/modules/sales/service.py
from contextlib import contextmanager
from datetime import datetime, timezone
from decimal import Decimal
from typing import Any, Dict, List, Optional, Union
import logging

from dateutil.parser import isoparse
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from .repository import SalesRepository, STATUS_ACTIVE
from .schemas import SaleCreateRequest, SaleUpdateRequest, SaleResponse
from app.core.exceptions import (
    SaleValidationError, InvalidRangeError, SaleNotFoundError, InternalError
)
from app.shared.database.models import Sale

logger = logging.getLogger(__name__)

SYSTEM_ACTOR = "SYSTEM"
MAX_NOTES_LENGTH = 500
# Tolerancia al conciliar cobros contra el total
COLLECTION_TOLERANCE = Decimal("0.01")

AMOUNT_FIELDS = (
    "sales_in_liters", "sales_in_rupees",
    "cash_received", "phone_pay", "credit_card", "short_collections",
)
COLLECTION_FIELDS = ("cash_received", "phone_pay", "credit_card", "short_collections")
REQUIRED_TEXT_FIELDS = ("employee_id", "product_name")


def utcnow() -> datetime:
    """Hora actual en UTC, sin tzinfo (así se persiste)"""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def resolve_actor(actor: Optional[str]) -> str:
    """Actor que elimina: el valor recibido o SYSTEM si viene vacío"""
    if actor is None or not actor.strip():
        return SYSTEM_ACTOR
    return actor.strip()


def parse_range_bound(name: str, value: Union[str, datetime, None]) -> datetime:
    """
    Convertir un límite del rango a datetime UTC naive.

    Acepta datetimes o strings ISO-8601 (con o sin offset).
    Los valores con zona horaria se convierten a UTC.
    """
    if value is None or (isinstance(value, str) and not value.strip()):
        raise InvalidRangeError(f"'{name}' is required")

    if isinstance(value, str):
        raw = value.strip()
        try:
            value = isoparse(raw)
        except (ValueError, OverflowError):
            raise InvalidRangeError(f"'{name}' is not a valid ISO-8601 date-time: {raw}")
    elif not isinstance(value, datetime):
        raise InvalidRangeError(f"'{name}' must be a date-time")

    if value.tzinfo is not None:
        try:
            value = value.astimezone(timezone.utc).replace(tzinfo=None)
        except (ValueError, OverflowError):
            raise InvalidRangeError(f"'{name}' is out of the supported date-time range")
    return value


def _cause(error: SQLAlchemyError) -> str:
    """Mensaje de la causa inmediata, sin el SQL ni los parámetros"""
    orig = getattr(error, "orig", None)
    return str(orig if orig is not None else error).splitlines()[0]


class SalesService:
    """
    Ciclo de vida de ventas de una organización.

    Los roles ya fueron validados por el gate antes de llegar aquí. El
    servicio valida, verifica existencia y traduce fallos de persistencia a
    InternalError. "Ausente" se representa con None.
    """

    def __init__(self, db: Session):
        self.db = db
        self.repository = SalesRepository(db)

    def create_sale(self, organization_id: str, sale_data: SaleCreateRequest) -> SaleResponse:
        """Crear venta; organization_id siempre viene del path"""
        sale_data = sale_data.model_copy(update={"organization_id": organization_id})
        fields = sale_data.model_dump()
        logger.info(f"Creando venta para org={organization_id} employee={fields.get('employee_id')}")

        for name in REQUIRED_TEXT_FIELDS:
            if isinstance(fields.get(name), str):
                fields[name] = fields[name].strip()
        self._validate_fields(fields)
        self._validate_collections(fields)

        now = utcnow()
        sale = Sale(**fields, status=STATUS_ACTIVE, created_at=now, updated_at=now)

        with self._store_errors("create sale"):
            sale = self.repository.put(sale)

        logger.info(f"Venta {sale.id} creada para org={organization_id}")
        return SaleResponse.model_validate(sale)

    def get_all_sales(self, organization_id: str) -> List[SaleResponse]:
        with self._store_errors("fetch sales"):
            sales = self.repository.list_by_org(organization_id)

        logger.info(f"{len(sales)} ventas obtenidas para org={organization_id}")
        return [SaleResponse.model_validate(sale) for sale in sales]

    def get_sales_by_date_range(
        self,
        organization_id: str,
        start: Union[str, datetime, None],
        end: Union[str, datetime, None]
    ) -> List[SaleResponse]:
        """Ventas con created_at en [start, end], ambos límites inclusive"""
        start_at = parse_range_bound("from", start)
        end_at = parse_range_bound("to", end)
        if start_at > end_at:
            raise InvalidRangeError(
                f"'from' ({start_at.isoformat()}) must not be after 'to' ({end_at.isoformat()})"
            )

        with self._store_errors("fetch sales by date"):
            sales = self.repository.list_by_org_and_range(organization_id, start_at, end_at)

        logger.info(
            f"{len(sales)} ventas para org={organization_id} "
            f"entre {start_at.isoformat()} y {end_at.isoformat()}"
        )
        return [SaleResponse.model_validate(sale) for sale in sales]

    def get_sale_by_id(self, organization_id: str, sale_id: str) -> Optional[SaleResponse]:
        with self._store_errors("fetch sale"):
            sale = self.repository.get_by_id(sale_id, organization_id)

        if sale is None:
            logger.warning(f"Venta no encontrada: id={sale_id} org={organization_id}")
            return None
        return SaleResponse.model_validate(sale)

    def update_sale(
        self,
        organization_id: str,
        sale_id: str,
        update_data: SaleUpdateRequest
    ) -> Optional[SaleResponse]:
        """Aplicar solo los campos mutables enviados; None si la venta no existe"""
        changes = update_data.model_dump(exclude_unset=True)
        if isinstance(changes.get("product_name"), str):
            changes["product_name"] = changes["product_name"].strip()
        self._validate_fields(changes)

        with self._store_errors("update sale"):
            sale = self.repository.get_by_id(sale_id, organization_id)
            if sale is None:
                logger.warning(f"Venta no encontrada para actualizar: id={sale_id}")
                return None

            merged = {name: getattr(sale, name) for name in COLLECTION_FIELDS + ("sales_in_rupees",)}
            merged.update({k: v for k, v in changes.items() if k in merged})
            self._validate_collections(merged)

            for name, value in changes.items():
                setattr(sale, name, value)
            sale.updated_at = utcnow()
            sale = self.repository.put(sale)

        logger.info(f"Venta {sale.id} actualizada ({', '.join(sorted(changes)) or 'sin cambios'})")
        return SaleResponse.model_validate(sale)

    def delete_sale(self, organization_id: str, sale_id: str, actor: Optional[str] = None) -> None:
        """Soft delete registrando el actor; SaleNotFoundError si no existe"""
        deleted_by = resolve_actor(actor)
        logger.info(f"Eliminando venta id={sale_id} org={organization_id} por {deleted_by}")

        with self._store_errors("delete sale"):
            sale = self.repository.get_by_id(sale_id, organization_id)
            if sale is None:
                raise SaleNotFoundError(sale_id)
            self.repository.delete(sale, deleted_by, utcnow())

        logger.info(f"Venta {sale_id} eliminada")

    # MÉTODOS PRIVADOS HELPERS

    @contextmanager
    def _store_errors(self, action: str):
        try:
            yield
        except SQLAlchemyError as e:
            logger.exception(f"Error de persistencia ({action})")
            raise InternalError(f"Failed to {action}: {_cause(e)}") from e

    def _validate_fields(self, fields: Dict[str, Any]) -> None:
        """Validar los campos presentes en fields"""
        errors = []

        for name in REQUIRED_TEXT_FIELDS:
            if name in fields and not fields[name]:
                errors.append(f"{name} is required")

        for name in AMOUNT_FIELDS:
            if name not in fields:
                continue
            if fields[name] is None:
                errors.append(f"{name} must not be null")
            elif fields[name] < 0:
                errors.append(f"{name} must not be negative")

        notes = fields.get("notes")
        if notes is not None and len(notes) > MAX_NOTES_LENGTH:
            errors.append(f"notes must be at most {MAX_NOTES_LENGTH} characters")

        if errors:
            raise SaleValidationError("; ".join(errors))

    def _validate_collections(self, values: Dict[str, Any]) -> None:
        """Si hay cobros registrados, deben sumar el total de la venta"""
        collections = [Decimal(values.get(name) or 0) for name in COLLECTION_FIELDS]
        if not any(collections):
            return

        total = Decimal(values.get("sales_in_rupees") or 0)
        collected = sum(collections, Decimal("0"))
        if abs(collected - total) > COLLECTION_TOLERANCE:
            raise SaleValidationError(
                f"Collections ({collected}) must add up to sales_in_rupees ({total})"
            )
