# app/modules/sales/repository.py
from datetime import date, datetime, time, timedelta
from typing import List, Optional
from sqlalchemy.orm import Session, selectinload
from sqlalchemy import and_, desc

from app.shared.database.models import Sale, SaleItem, PaymentMethod
from .pricing import PricedOrder

class SalesRepository:
    """
    Repositorio de ventas (encabezado + detalle).

    Ninguna escritura hace commit: insert y set_active se ejecutan dentro de
    la unidad de trabajo del servicio, junto con los movimientos de stock.
    """

    def __init__(self, db: Session):
        self.db = db

    def _with_items(self):
        return self.db.query(Sale).options(
            selectinload(Sale.items).selectinload(SaleItem.product)
        )

    # ==================== CONSULTAS ====================

    def get_all(self) -> List[Sale]:
        return self._with_items().order_by(desc(Sale.sale_date), desc(Sale.id)).all()

    def get_by_id(self, sale_id: int) -> Optional[Sale]:
        return self._with_items().filter(Sale.id == sale_id).first()

    def get_by_code(self, code: str) -> Optional[Sale]:
        return self._with_items().filter(Sale.code == code).first()

    def code_exists(self, code: str) -> bool:
        return self.db.query(Sale.id).filter(Sale.code == code).first() is not None

    def get_by_client(self, client_nit: str) -> List[Sale]:
        return self._with_items().filter(
            Sale.client_nit == client_nit
        ).order_by(desc(Sale.sale_date), desc(Sale.id)).all()

    def get_between_dates(self, start_date: date, end_date: date) -> List[Sale]:
        """Rango por día calendario, ambos extremos inclusive"""
        start = datetime.combine(start_date, time.min)
        end = datetime.combine(end_date + timedelta(days=1), time.min)

        return self._with_items().filter(
            and_(
                Sale.sale_date >= start,
                Sale.sale_date < end
            )
        ).order_by(desc(Sale.sale_date), desc(Sale.id)).all()

    # ==================== ESCRITURA ====================

    def insert(self, order: PricedOrder, code: str, sale_date: datetime) -> Sale:
        """Encabezado y detalle en el mismo flush"""
        sale = Sale(
            code=code,
            client_nit=order.client_nit,
            payment_method_id=order.payment_method_id,
            sale_date=sale_date,
            subtotal=order.subtotal,
            total_discount=order.total_discount,
            total=order.total,
            is_active=True
        )

        for line in order.lines:
            sale.items.append(SaleItem(
                product_id=line.product_id,
                quantity=line.quantity,
                unit_price=line.unit_price,
                subtotal=line.subtotal,
                discount_amount=line.discount_amount,
                total=line.total
            ))

        self.db.add(sale)
        self.db.flush()
        return sale

    def set_active(self, sale: Sale, is_active: bool) -> Sale:
        sale.is_active = is_active
        self.db.flush()
        return sale

    def update_header(self, sale: Sale, client_nit: str, payment_method_id: int) -> Sale:
        sale.client_nit = client_nit
        sale.payment_method_id = payment_method_id
        self.db.flush()
        return sale

    # ==================== MÉTODOS DE PAGO ====================

    def get_payment_methods(self) -> List[PaymentMethod]:
        return self.db.query(PaymentMethod).order_by(PaymentMethod.id).all()

    def get_payment_method(self, payment_method_id: int) -> Optional[PaymentMethod]:
        return self.db.get(PaymentMethod, payment_method_id)
