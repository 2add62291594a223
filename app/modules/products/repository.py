# app/modules/products/repository.py
from typing import List, Optional
from sqlalchemy.orm import Session
from sqlalchemy import and_, update

from app.shared.database.models import Product

class ProductsRepository:
    """
    Acceso a datos de productos.

    Las operaciones de stock solo hacen flush: el commit lo decide la
    unidad de trabajo del servicio que las invoca.
    """

    def __init__(self, db: Session):
        self.db = db

    # ==================== CONSULTAS ====================

    def get_all(self) -> List[Product]:
        return self.db.query(Product).filter(
            Product.is_active == True
        ).order_by(Product.id).all()

    def get_by_id(self, product_id: int) -> Optional[Product]:
        return self.db.query(Product).filter(
            Product.id == product_id,
            Product.is_active == True
        ).first()

    def get_by_code(self, code: str) -> Optional[Product]:
        return self.db.query(Product).filter(Product.code == code).first()

    def search(self, code: Optional[str] = None, name: Optional[str] = None) -> List[Product]:
        """Búsqueda parcial por código y/o nombre"""
        query = self.db.query(Product).filter(Product.is_active == True)

        if code:
            query = query.filter(Product.code.ilike(f"%{code}%"))
        if name:
            query = query.filter(Product.name.ilike(f"%{name}%"))

        return query.order_by(Product.id).all()

    # ==================== ESCRITURA ====================

    def create(self, product_data: dict) -> Product:
        product = Product(**product_data)
        self.db.add(product)
        self.db.flush()
        return product

    def update(self, product: Product, changes: dict) -> Product:
        for field, value in changes.items():
            setattr(product, field, value)
        self.db.flush()
        return product

    def deactivate(self, product: Product) -> Product:
        product.is_active = False
        self.db.flush()
        return product

    # ==================== STOCK ====================

    def decrement_stock(self, product_id: int, quantity: int) -> bool:
        """
        Descontar stock solo si alcanza. Devuelve False cuando ninguna fila
        cumplió la condición (producto inexistente o stock insuficiente).
        """
        result = self.db.execute(
            update(Product)
            .where(and_(
                Product.id == product_id,
                Product.stock >= quantity
            ))
            .values(stock=Product.stock - quantity)
            .execution_options(synchronize_session=False)
        )
        self._expire_cached(product_id)
        return result.rowcount > 0

    def increment_stock(self, product_id: int, quantity: int) -> bool:
        result = self.db.execute(
            update(Product)
            .where(Product.id == product_id)
            .values(stock=Product.stock + quantity)
            .execution_options(synchronize_session=False)
        )
        self._expire_cached(product_id)
        return result.rowcount > 0

    def _expire_cached(self, product_id: int):
        """El UPDATE masivo no toca la instancia en memoria; forzar recarga"""
        cached = self.db.identity_map.get(self.db.identity_key(Product, product_id))
        if cached is not None:
            self.db.expire(cached)
