from sqlalchemy import (
    Column, Integer, String, Boolean, DateTime, Date, Text, ForeignKey, Numeric,
    UniqueConstraint, CheckConstraint
)
from sqlalchemy.orm import relationship, Session
from sqlalchemy.sql import func
from app.config.database import Base

# ===== CATÁLOGOS =====

class DiscountType(Base):
    """Tipos de descuento: 1 = porcentaje, 2 = monto fijo por unidad"""
    __tablename__ = "TiposDescuento"

    PERCENTAGE = 1
    FIXED_AMOUNT = 2

    id = Column(Integer, primary_key=True)
    code = Column(String(20), nullable=False, unique=True)
    description = Column(String(100), nullable=False)

class PaymentMethod(Base):
    """Métodos de pago disponibles para una venta"""
    __tablename__ = "MetodosPago"

    id = Column(Integer, primary_key=True)
    code = Column(String(20), nullable=False, unique=True)
    description = Column(String(100), nullable=False)

# ===== PRODUCTOS =====

class Product(Base):
    """Modelo de Producto"""
    __tablename__ = "Productos"

    id = Column(Integer, primary_key=True, index=True)
    code = Column(String(50), nullable=False, unique=True, index=True)
    name = Column(String(255), nullable=False)
    description = Column(Text)
    unit_price = Column(Numeric(10, 2), nullable=False)
    unit_id = Column(Integer, default=1)
    stock = Column(Integer, nullable=False, default=0)
    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime, server_default=func.current_timestamp())

    __table_args__ = (
        CheckConstraint("stock >= 0", name="ck_productos_stock_no_negativo"),
    )

    # Relationships
    discount = relationship("Discount", back_populates="product", uselist=False)

# ===== CLIENTES =====

class Client(Base):
    """Modelo de Cliente - el NIT es la llave primaria"""
    __tablename__ = "Clientes"

    nit = Column(String(20), primary_key=True)
    full_name = Column(String(255), nullable=False)
    phone = Column(String(50), nullable=False)
    email = Column(String(255))
    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime, server_default=func.current_timestamp())

    # Relationships
    sales = relationship("Sale", back_populates="client")

# ===== DESCUENTOS =====

class Discount(Base):
    """Modelo de Descuento - a lo sumo uno por producto"""
    __tablename__ = "Descuentos"

    id = Column(Integer, primary_key=True, index=True)
    product_id = Column(Integer, ForeignKey("Productos.id"), nullable=False)
    discount_type_id = Column(Integer, ForeignKey("TiposDescuento.id"), nullable=False)
    value = Column(Numeric(10, 2), nullable=False)
    start_date = Column(Date, nullable=False)
    end_date = Column(Date, nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)

    __table_args__ = (
        UniqueConstraint("product_id", name="uq_descuentos_producto"),
    )

    # Relationships
    product = relationship("Product", back_populates="discount")
    discount_type = relationship("DiscountType")

# ===== VENTAS =====

class Sale(Base):
    """Encabezado de venta. is_active = False significa venta anulada"""
    __tablename__ = "Ventas"

    id = Column(Integer, primary_key=True, index=True)
    code = Column(String(20), nullable=False, unique=True, index=True)
    client_nit = Column(String(20), ForeignKey("Clientes.nit"), nullable=False, index=True)
    payment_method_id = Column(Integer, ForeignKey("MetodosPago.id"), nullable=False)
    sale_date = Column(DateTime, nullable=False, server_default=func.current_timestamp())
    subtotal = Column(Numeric(12, 2), nullable=False)
    total_discount = Column(Numeric(12, 2), nullable=False, default=0)
    total = Column(Numeric(12, 2), nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)

    # Relationships
    client = relationship("Client", back_populates="sales")
    payment_method = relationship("PaymentMethod")
    items = relationship(
        "SaleItem",
        back_populates="sale",
        order_by="SaleItem.id",
        cascade="all, delete-orphan"
    )

class SaleItem(Base):
    """Detalle de venta: precio y descuento capturados al momento de la venta"""
    __tablename__ = "DetalleVentas"

    id = Column(Integer, primary_key=True, index=True)
    sale_id = Column(Integer, ForeignKey("Ventas.id"), nullable=False, index=True)
    product_id = Column(Integer, ForeignKey("Productos.id"), nullable=False)
    quantity = Column(Integer, nullable=False)
    unit_price = Column(Numeric(10, 2), nullable=False)
    subtotal = Column(Numeric(12, 2), nullable=False)
    discount_amount = Column(Numeric(12, 2), nullable=False, default=0)
    total = Column(Numeric(12, 2), nullable=False)

    __table_args__ = (
        CheckConstraint("quantity > 0", name="ck_detalleventas_cantidad_positiva"),
    )

    # Relationships
    sale = relationship("Sale", back_populates="items")
    product = relationship("Product")

# ===== DATOS BASE =====

DEFAULT_DISCOUNT_TYPES = [
    (DiscountType.PERCENTAGE, "PORCENTAJE", "Descuento porcentual"),
    (DiscountType.FIXED_AMOUNT, "MONTO_FIJO", "Monto fijo por unidad"),
]

DEFAULT_PAYMENT_METHODS = [
    (1, "EFECTIVO", "Efectivo"),
    (2, "TARJETA", "Tarjeta de crédito o débito"),
    (3, "TRANSFERENCIA", "Transferencia bancaria"),
]

def seed_catalogs(db: Session) -> None:
    """Insertar tipos de descuento y métodos de pago que falten"""
    for type_id, code, description in DEFAULT_DISCOUNT_TYPES:
        if db.get(DiscountType, type_id) is None:
            db.add(DiscountType(id=type_id, code=code, description=description))

    for method_id, code, description in DEFAULT_PAYMENT_METHODS:
        if db.get(PaymentMethod, method_id) is None:
            db.add(PaymentMethod(id=method_id, code=code, description=description))

    db.commit()
