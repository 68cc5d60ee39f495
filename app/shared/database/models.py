# app/shared/database/models.py
from sqlalchemy import (
    Column, Integer, String, Boolean, DateTime, Text,
    Numeric, ForeignKey, CheckConstraint, func
)
from sqlalchemy.orm import relationship

from app.config.database import Base
from app.shared.lifecycle.statuses import ORDER_STATUSES, RECEIPT_STATUSES


# =====================================================
# MIXINS
# =====================================================
class TimestampMixin:
    """Mixin que agrega campos created_at y updated_at"""
    created_at = Column(DateTime, nullable=False, server_default=func.current_timestamp())
    updated_at = Column(DateTime, nullable=False, server_default=func.current_timestamp(), onupdate=func.current_timestamp())


class SoftDeleteMixin:
    """Eliminación lógica: deleted_at NULL = activo"""
    deleted_at = Column(DateTime, nullable=True, index=True)

    @property
    def is_deleted(self) -> bool:
        return self.deleted_at is not None


# =====================================================
# USUARIOS
# =====================================================

class User(Base):
    """Modelo de Usuario"""
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String(255), nullable=False, unique=True)
    password_hash = Column(String(255), nullable=False)
    first_name = Column(String(255), nullable=False)
    last_name = Column(String(255), nullable=False)
    role = Column(String(50), default='staff', nullable=False)
    is_active = Column(Boolean, default=True)
    created_at = Column(DateTime, server_default=func.current_timestamp())

    @property
    def full_name(self):
        return f"{self.first_name} {self.last_name}"


# =====================================================
# CATÁLOGO
# =====================================================

class Brand(Base, TimestampMixin, SoftDeleteMixin):
    """Modelo de Marca"""
    __tablename__ = "brands"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    description = Column(Text)

    variants = relationship("ProductVariant", back_populates="brand")


class Supplier(Base, TimestampMixin, SoftDeleteMixin):
    """Modelo de Proveedor"""
    __tablename__ = "suppliers"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    phone = Column(String(50))
    email = Column(String(255))

    receipts = relationship("Input", back_populates="supplier")


class ProductVariant(Base, TimestampMixin, SoftDeleteMixin):
    """Variante de producto con su stock disponible"""
    __tablename__ = "product_variants"
    __table_args__ = (
        CheckConstraint("stock_quantity >= 0", name="ck_variant_stock_non_negative"),
    )

    id = Column(Integer, primary_key=True, index=True)
    brand_id = Column(Integer, ForeignKey("brands.id"), nullable=True, index=True)
    sku = Column(String(100), nullable=False, unique=True)
    name = Column(String(255), nullable=False)
    unit_price = Column(Numeric(12, 2), nullable=False, default=0)
    stock_quantity = Column(Integer, nullable=False, default=0)

    brand = relationship("Brand", back_populates="variants")


# =====================================================
# PEDIDOS (OUTPUT)
# =====================================================

class Output(Base, TimestampMixin, SoftDeleteMixin):
    """Pedido de venta"""
    __tablename__ = "outputs"

    id = Column(Integer, primary_key=True, index=True)
    customer_name = Column(String(255))
    notes = Column(Text)
    status_id = Column(String(50), nullable=False, default=ORDER_STATUSES.initial, index=True)
    last_status_changed_at = Column(DateTime)
    created_by = Column(Integer, ForeignKey("users.id"))
    # Solo se asigna al pasar a 'completed'
    finished_by = Column(Integer, ForeignKey("users.id"))

    lines = relationship(
        "OutputInfo",
        back_populates="output",
        cascade="all, delete-orphan",
        order_by="OutputInfo.position",
    )
    creator = relationship("User", foreign_keys=[created_by])
    finisher = relationship("User", foreign_keys=[finished_by])

    @property
    def total_amount(self):
        return sum((line.quantity * line.unit_price for line in self.lines), 0)


class OutputInfo(Base):
    """Línea de pedido"""
    __tablename__ = "output_infos"

    id = Column(Integer, primary_key=True, index=True)
    output_id = Column(Integer, ForeignKey("outputs.id"), nullable=False, index=True)
    product_variant_id = Column(Integer, ForeignKey("product_variants.id"), nullable=False)
    quantity = Column(Integer, nullable=False)
    unit_price = Column(Numeric(12, 2), nullable=False)
    position = Column(Integer, nullable=False, default=0)

    output = relationship("Output", back_populates="lines")
    product_variant = relationship("ProductVariant")


# =====================================================
# RECEPCIONES DE INVENTARIO (INPUT)
# =====================================================

class Input(Base, TimestampMixin, SoftDeleteMixin):
    """Recibo de entrada de inventario"""
    __tablename__ = "inputs"

    id = Column(Integer, primary_key=True, index=True)
    supplier_id = Column(Integer, ForeignKey("suppliers.id"), nullable=True, index=True)
    notes = Column(Text)
    status_id = Column(String(50), nullable=False, default=RECEIPT_STATUSES.initial, index=True)
    last_status_changed_at = Column(DateTime)
    # Fecha efectiva de ingreso, se asigna al pasar a 'finish'
    input_date = Column(DateTime)
    created_by = Column(Integer, ForeignKey("users.id"))

    lines = relationship(
        "InputInfo",
        back_populates="input",
        cascade="all, delete-orphan",
        order_by="InputInfo.position",
    )
    supplier = relationship("Supplier", back_populates="receipts")

    @property
    def total_amount(self):
        return sum((line.quantity * line.unit_price for line in self.lines), 0)


class InputInfo(Base):
    """Línea de recibo de inventario"""
    __tablename__ = "input_infos"

    id = Column(Integer, primary_key=True, index=True)
    input_id = Column(Integer, ForeignKey("inputs.id"), nullable=False, index=True)
    product_variant_id = Column(Integer, ForeignKey("product_variants.id"), nullable=False)
    quantity = Column(Integer, nullable=False)
    unit_price = Column(Numeric(12, 2), nullable=False)
    position = Column(Integer, nullable=False, default=0)

    input = relationship("Input", back_populates="lines")
    product_variant = relationship("ProductVariant")
