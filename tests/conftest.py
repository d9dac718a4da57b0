# tests/conftest.py
"""
Configuración global de los tests y fixtures
"""

import os

# Antes de importar la app: no crear un engine de PostgreSQL en los tests
os.environ.setdefault("DATABASE_URL", "sqlite://")

import pytest
from datetime import datetime
from decimal import Decimal
from typing import Callable, Dict, Generator
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool

from app.main import app
from app.config.database import Base, get_db
from app.core.auth.roles import Role
from app.core.auth.service import AuthService
from app.shared.database.models import Sale, User

# Database de teste (SQLite em memória)
SQLALCHEMY_DATABASE_URL = "sqlite:///:memory:"

engine = create_engine(
    SQLALCHEMY_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)

TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

TEST_PASSWORD = "Test123!"
# bcrypt es lento: un solo hash para todos los usuarios de prueba
_PASSWORD_HASH = AuthService.get_password_hash(TEST_PASSWORD)


# ==================== FIXTURES ====================

@pytest.fixture(scope="function")
def db() -> Generator[Session, None, None]:
    """Create a fresh database for each test"""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def client(db: Session) -> Generator[TestClient, None, None]:
    """Create a test client with overridden database"""

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture(scope="function")
def make_user(db: Session) -> Callable[..., User]:
    """Factory de usuarios: make_user(Role.MANAGER, organization_id="org1")"""

    def _make_user(
        role: Role,
        organization_id: str = "org1",
        employee_id: str = "emp1",
        is_active: bool = True
    ) -> User:
        user = User(
            organization_id=organization_id,
            employee_id=employee_id,
            username=f"{role.value}.{organization_id}.{employee_id}",
            password_hash=_PASSWORD_HASH,
            role=role.value,
            is_active=is_active
        )
        db.add(user)
        db.commit()
        db.refresh(user)
        return user

    return _make_user


def bearer_headers(user: User) -> Dict[str, str]:
    token = AuthService.create_access_token(data=AuthService.build_claims(user))
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture(scope="function")
def headers_for() -> Callable[[User], Dict[str, str]]:
    return bearer_headers


@pytest.fixture(scope="function")
def owner_headers(make_user) -> Dict[str, str]:
    return bearer_headers(make_user(Role.OWNER, employee_id="E1"))


@pytest.fixture(scope="function")
def manager_headers(make_user) -> Dict[str, str]:
    return bearer_headers(make_user(Role.MANAGER, employee_id="E2"))


@pytest.fixture(scope="function")
def employee_headers(make_user) -> Dict[str, str]:
    return bearer_headers(make_user(Role.EMPLOYEE, employee_id="emp1"))


@pytest.fixture(scope="function")
def other_org_headers(make_user) -> Dict[str, str]:
    return bearer_headers(make_user(Role.OWNER, organization_id="org2", employee_id="E9"))


@pytest.fixture(scope="function")
def add_sale(db: Session) -> Callable[..., Sale]:
    """Insertar una venta directamente, con created_at controlado"""

    def _add_sale(
        organization_id: str = "org1",
        created_at: datetime = datetime(2025, 10, 15, 12, 0, 0),
        **fields
    ) -> Sale:
        values = {
            "employee_id": "emp1",
            "product_name": "Diesel",
            "sales_in_liters": Decimal("10"),
            "sales_in_rupees": Decimal("958"),
            "status": "active",
        }
        values.update(fields)
        sale = Sale(
            organization_id=organization_id,
            created_at=created_at,
            updated_at=created_at,
            **values
        )
        db.add(sale)
        db.commit()
        db.refresh(sale)
        return sale

    return _add_sale
