# app/shared/database/models.py
from sqlalchemy import (
    Column, String, Boolean, DateTime, Text, Numeric, Index, func
)
from uuid import uuid4

from app.config.database import Base


def generate_id() -> str:
    return str(uuid4())


# =====================================================
# MIXIN PARA TIMESTAMPS
# =====================================================
class TimestampMixin:
    """Mixin que agrega campos created_at y updated_at"""
    created_at = Column(DateTime, nullable=False, server_default=func.current_timestamp())
    updated_at = Column(DateTime, nullable=False, server_default=func.current_timestamp(), onupdate=func.current_timestamp())


# =====================================================
# USUARIOS
# =====================================================

class User(Base):
    """Modelo de Usuario (empleado de una organización)"""
    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=generate_id)
    organization_id = Column(String(64), nullable=False, index=True)
    employee_id = Column(String(64), nullable=False)
    username = Column(String(255), nullable=False, unique=True)
    password_hash = Column(String(255), nullable=False)
    role = Column(String(20), default='employee', nullable=False)
    is_active = Column(Boolean, default=True)
    created_at = Column(DateTime, server_default=func.current_timestamp())


# =====================================================
# VENTAS
# =====================================================

class Sale(Base, TimestampMixin):
    """Modelo de Venta"""
    __tablename__ = "sales"

    id = Column(String(36), primary_key=True, default=generate_id)
    organization_id = Column(String(64), nullable=False, index=True)
    employee_id = Column(String(64), nullable=False)

    product_name = Column(String(255), nullable=False)
    gun = Column(String(50))
    sales_in_liters = Column(Numeric(12, 2), nullable=False, default=0)
    sales_in_rupees = Column(Numeric(12, 2), nullable=False, default=0)
    cash_received = Column(Numeric(12, 2), nullable=False, default=0)
    phone_pay = Column(Numeric(12, 2), nullable=False, default=0)
    credit_card = Column(Numeric(12, 2), nullable=False, default=0)
    short_collections = Column(Numeric(12, 2), nullable=False, default=0)
    notes = Column(Text)

    # Ciclo de vida: active -> deleted
    status = Column(String(20), nullable=False, default='active')
    deleted_by = Column(String(64))
    deleted_at = Column(DateTime)

    __table_args__ = (
        Index('ix_sales_org_created', 'organization_id', 'created_at'),
    )
