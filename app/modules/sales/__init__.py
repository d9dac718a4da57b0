# app/modules/sales/__init__.py
"""
Módulo de Ventas - Ciclo de vida de registros de venta por organización

Este módulo maneja:
- Registro de ventas (owner, manager, employee)
- Consulta de ventas: todas, por rango de fechas, por id
- Actualización de campos mutables (owner, manager)
- Eliminación lógica con registro del actor (owner, manager)

Arquitectura:
- router.py: Endpoints de ventas
- service.py: Lógica de negocio de ventas
- repository.py: Acceso a datos de ventas
- schemas.py: Modelos de request/response
"""

from .router import router
from .service import SalesService
from .repository import SalesRepository

__all__ = [
    "router",
    "SalesService",
    "SalesRepository"
]
