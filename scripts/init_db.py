"""
Script para crear las tablas y usuarios de prueba de una organización
"""
import os

from app.config.database import Base, SessionLocal, engine
from app.core.auth.roles import Role
from app.core.auth.service import AuthService
from app.shared.database.models import User

DEMO_ORGANIZATION_ID = os.getenv("DEMO_ORGANIZATION_ID", "ORG-DEV-001")

TEST_USERS = [
    {"username": "owner.demo", "password": "owner123", "employee_id": "E1", "role": Role.OWNER},
    {"username": "manager.demo", "password": "manager123", "employee_id": "E2", "role": Role.MANAGER},
    {"username": "employee.demo", "password": "employee123", "employee_id": "E3", "role": Role.EMPLOYEE},
]

def init_db():
    """Crear tablas y un usuario de prueba por rol"""
    Base.metadata.create_all(bind=engine)
    print("✅ Tablas creadas")

    db = SessionLocal()

    try:
        existing_users = db.query(User).filter(User.organization_id == DEMO_ORGANIZATION_ID).count()
        if existing_users > 0:
            print(f"✅ Ya existen {existing_users} usuarios en {DEMO_ORGANIZATION_ID}")
            return

        for user_data in TEST_USERS:
            db.add(User(
                organization_id=DEMO_ORGANIZATION_ID,
                employee_id=user_data["employee_id"],
                username=user_data["username"],
                password_hash=AuthService.get_password_hash(user_data["password"]),
                role=user_data["role"].value,
                is_active=True
            ))

        db.commit()
        print(f"\n🎉 {len(TEST_USERS)} usuarios de prueba creados en {DEMO_ORGANIZATION_ID}")
        print("\n📋 Credenciales de prueba:")
        for user_data in TEST_USERS:
            print(f"   👤 {user_data['role'].name}: {user_data['username']} / {user_data['password']}")

    except Exception:
        db.rollback()
        raise

    finally:
        db.close()

if __name__ == "__main__":
    init_db()
