# app/modules/reports/repository.py
from datetime import date, datetime, time, timedelta
from typing import Any, Dict, List
from sqlalchemy.orm import Session
from sqlalchemy import and_, desc, func

from app.shared.database.models import Sale, SaleItem, Product, Client

class ReportsRepository:
    """
    Consultas agregadas. Solo cuentan las ventas activas (no anuladas).
    """

    def __init__(self, db: Session):
        self.db = db

    def get_top_products(self, limit: int, by_amount: bool) -> List[Dict[str, Any]]:
        quantity = func.sum(SaleItem.quantity).label("quantity_sold")
        amount = func.sum(SaleItem.total).label("total_amount")

        results = self.db.query(
            Product.id, Product.code, Product.name, quantity, amount
        ).join(
            SaleItem, SaleItem.product_id == Product.id
        ).join(
            Sale, Sale.id == SaleItem.sale_id
        ).filter(
            Sale.is_active == True
        ).group_by(
            Product.id, Product.code, Product.name
        ).order_by(
            desc(amount) if by_amount else desc(quantity), Product.id
        ).limit(limit).all()

        return [
            {
                "product_id": row.id,
                "code": row.code,
                "name": row.name,
                "quantity_sold": int(row.quantity_sold or 0),
                "total_amount": row.total_amount or 0,
            }
            for row in results
        ]

    def get_top_clients(self, limit: int, by_transactions: bool) -> List[Dict[str, Any]]:
        purchases = func.count(Sale.id).label("purchases")
        amount = func.sum(Sale.total).label("total_amount")

        results = self.db.query(
            Client.nit, Client.full_name, purchases, amount
        ).join(
            Sale, Sale.client_nit == Client.nit
        ).filter(
            Sale.is_active == True
        ).group_by(
            Client.nit, Client.full_name
        ).order_by(
            desc(purchases) if by_transactions else desc(amount), Client.nit
        ).limit(limit).all()

        return [
            {
                "nit": row.nit,
                "full_name": row.full_name,
                "purchases": int(row.purchases or 0),
                "total_amount": row.total_amount or 0,
            }
            for row in results
        ]

    def get_sales_by_period(self, start_date: date, end_date: date) -> List[Dict[str, Any]]:
        start = datetime.combine(start_date, time.min)
        end = datetime.combine(end_date + timedelta(days=1), time.min)
        day = func.date(Sale.sale_date).label("day")

        results = self.db.query(
            day,
            func.count(Sale.id).label("sales_count"),
            func.sum(Sale.subtotal).label("subtotal"),
            func.sum(Sale.total_discount).label("total_discount"),
            func.sum(Sale.total).label("total"),
        ).filter(
            and_(
                Sale.is_active == True,
                Sale.sale_date >= start,
                Sale.sale_date < end
            )
        ).group_by(day).order_by(day).all()

        return [
            {
                "day": row.day,
                "sales_count": int(row.sales_count or 0),
                "subtotal": row.subtotal or 0,
                "total_discount": row.total_discount or 0,
                "total": row.total or 0,
            }
            for row in results
        ]
