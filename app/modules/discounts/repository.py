# app/modules/discounts/repository.py
from sqlalchemy.orm import Session, joinedload
from typing import List, Optional

from app.shared.database.models import Discount, DiscountType

class DiscountsRepository:
    def __init__(self, db: Session):
        self.db = db

    def get_all(self) -> List[Discount]:
        return self.db.query(Discount).options(
            joinedload(Discount.product),
            joinedload(Discount.discount_type)
        ).order_by(Discount.id).all()

    def get_by_id(self, discount_id: int) -> Optional[Discount]:
        return self.db.query(Discount).filter(Discount.id == discount_id).first()

    def get_by_product_id(self, product_id: int) -> Optional[Discount]:
        """El producto tiene cero o un descuento, activo o no"""
        return self.db.query(Discount).filter(Discount.product_id == product_id).first()

    def filter(
        self,
        product_id: Optional[int] = None,
        is_active: Optional[bool] = None
    ) -> List[Discount]:
        query = self.db.query(Discount)

        if product_id is not None:
            query = query.filter(Discount.product_id == product_id)
        if is_active is not None:
            query = query.filter(Discount.is_active == is_active)

        return query.order_by(Discount.id).all()

    def create(self, discount_data: dict) -> Discount:
        discount = Discount(**discount_data)
        self.db.add(discount)
        self.db.flush()
        return discount

    def update(self, discount: Discount, changes: dict) -> Discount:
        for field, value in changes.items():
            setattr(discount, field, value)
        self.db.flush()
        return discount

    def set_active(self, discount: Discount, is_active: bool) -> Discount:
        discount.is_active = is_active
        self.db.flush()
        return discount

    # ==================== TIPOS ====================

    def get_types(self) -> List[DiscountType]:
        return self.db.query(DiscountType).order_by(DiscountType.id).all()

    def get_type(self, type_id: int) -> Optional[DiscountType]:
        return self.db.get(DiscountType, type_id)
