# app/modules/sales/repository.py
from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy import and_
from typing import List, Optional
from datetime import datetime
import logging

from app.shared.database.models import Sale

logger = logging.getLogger(__name__)

STATUS_ACTIVE = 'active'
STATUS_DELETED = 'deleted'


class SalesRepository:
    """
    Acceso a datos de ventas.

    Cada escritura es una transacción: commit si todo va bien, rollback y
    re-lanzar SQLAlchemyError si falla. Las lecturas solo devuelven ventas
    activas.
    """

    def __init__(self, db: Session):
        self.db = db

    def put(self, sale: Sale) -> Sale:
        """Insertar o actualizar una venta"""
        try:
            self.db.add(sale)
            self.db.commit()
            self.db.refresh(sale)
            return sale
        except SQLAlchemyError:
            self.db.rollback()
            raise

    def get_by_id(self, sale_id: str, organization_id: str) -> Optional[Sale]:
        """Venta activa por id dentro de la organización, o None"""
        return self.db.query(Sale).filter(
            and_(
                Sale.id == sale_id,
                Sale.organization_id == organization_id,
                Sale.status == STATUS_ACTIVE
            )
        ).first()

    def list_by_org(self, organization_id: str) -> List[Sale]:
        return self._active_for_org(organization_id).order_by(
            Sale.created_at, Sale.id
        ).all()

    def list_by_org_and_range(
        self,
        organization_id: str,
        start: datetime,
        end: datetime
    ) -> List[Sale]:
        """Ventas activas con created_at dentro de [start, end], ambos inclusive"""
        return self._active_for_org(organization_id).filter(
            and_(
                Sale.created_at >= start,
                Sale.created_at <= end
            )
        ).order_by(Sale.created_at, Sale.id).all()

    def delete(self, sale: Sale, actor: str, deleted_at: datetime) -> Sale:
        """Soft delete: marca la venta y registra quién la eliminó"""
        sale.status = STATUS_DELETED
        sale.deleted_by = actor
        sale.deleted_at = deleted_at
        logger.info(f"Marcando venta {sale.id} como eliminada por {actor}")
        return self.put(sale)

    def _active_for_org(self, organization_id: str):
        return self.db.query(Sale).filter(
            and_(
                Sale.organization_id == organization_id,
                Sale.status == STATUS_ACTIVE
            )
        )
