"""
Script para cargar datos de prueba: usuarios por rol, marca, proveedor y variantes
"""
from dotenv import load_dotenv

load_dotenv()

from app.config.database import Base, SessionLocal, engine
from app.shared.database.models import User, Brand, Supplier, ProductVariant
from app.core.auth.service import AuthService

TEST_USERS = [
    {
        "email": "admin@stockflow.local",
        "password": "admin123",
        "first_name": "Ana",
        "last_name": "Administradora",
        "role": "admin"
    },
    {
        "email": "manager@stockflow.local",
        "password": "manager123",
        "first_name": "Carlos",
        "last_name": "Encargado",
        "role": "manager"
    },
    {
        "email": "staff@stockflow.local",
        "password": "staff123",
        "first_name": "Juan",
        "last_name": "Operador",
        "role": "staff"
    }
]

def seed():
    """Crear datos de prueba si la base está vacía"""

    Base.metadata.create_all(bind=engine)
    db = SessionLocal()

    try:
        existing_users = db.query(User).count()
        if existing_users > 0:
            print(f"✅ Ya existen {existing_users} usuarios en la base de datos")
            return

        for user_data in TEST_USERS:
            db.add(User(
                email=user_data["email"],
                password_hash=AuthService.get_password_hash(user_data["password"]),
                first_name=user_data["first_name"],
                last_name=user_data["last_name"],
                role=user_data["role"],
                is_active=True
            ))
            print(f"✅ Usuario creado: {user_data['email']} ({user_data['role']})")

        brand = Brand(name="Marca Demo", description="Marca de prueba")
        db.add(brand)
        db.add(Supplier(name="Proveedor Demo", phone="000-000", email="proveedor@stockflow.local"))

        for index in range(1, 4):
            db.add(ProductVariant(
                brand=brand,
                sku=f"DEMO-{index:03d}",
                name=f"Producto demo {index}",
                unit_price=10 * index,
                stock_quantity=50
            ))

        db.commit()
        print("\n🎉 Datos de prueba creados exitosamente!")
        print("\n📋 Credenciales de prueba:")
        for user_data in TEST_USERS:
            print(f"   👤 {user_data['role'].upper()}: {user_data['email']} / {user_data['password']}")

    except Exception as e:
        db.rollback()
        print(f"❌ Error cargando datos de prueba: {e}")
        raise

    finally:
        db.close()

if __name__ == "__main__":
    seed()
