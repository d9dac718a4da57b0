# app/core/auth/roles.py
from enum import Enum


class Role(str, Enum):
    """Roles de usuario dentro de una organización"""
    OWNER = "owner"
    MANAGER = "manager"
    EMPLOYEE = "employee"


# Conjuntos de roles permitidos por operación
SALES_READ_ROLES = frozenset({Role.OWNER, Role.MANAGER, Role.EMPLOYEE})
SALES_WRITE_ROLES = frozenset({Role.OWNER, Role.MANAGER})
