# app/modules/reports/service.py
from datetime import date
from decimal import Decimal
from typing import List, Tuple

from app.core.exceptions import InvalidInputError
from app.modules.sales.pricing import to_money
from app.shared.validators import is_positive_int, validate_date_range
from .repository import ReportsRepository
from .schemas import (
    TopProductResponse, TopClientResponse, PeriodSalesResponse, PeriodSummary
)

class ReportsService:
    def __init__(self, repository: ReportsRepository):
        self.repository = repository

    def get_top_products(self, limit: int = 10, by_amount: bool = False) -> List[TopProductResponse]:
        self._validate_limit(limit)

        rows = self.repository.get_top_products(limit, by_amount)
        return [
            TopProductResponse(
                Posicion=position,
                ProductoID=row["product_id"],
                CodigoProducto=row["code"],
                Nombre=row["name"],
                CantidadVendida=row["quantity_sold"],
                MontoTotal=to_money(row["total_amount"])
            )
            for position, row in enumerate(rows, start=1)
        ]

    def get_top_clients(self, limit: int = 5, by_transactions: bool = True) -> List[TopClientResponse]:
        self._validate_limit(limit)

        rows = self.repository.get_top_clients(limit, by_transactions)
        return [
            TopClientResponse(
                Posicion=position,
                NIT=row["nit"],
                NombreCompleto=row["full_name"],
                CantidadCompras=row["purchases"],
                MontoTotal=to_money(row["total_amount"])
            )
            for position, row in enumerate(rows, start=1)
        ]

    def get_sales_by_period(
        self,
        start_date: date,
        end_date: date
    ) -> Tuple[List[PeriodSalesResponse], PeriodSummary]:
        validate_date_range(start_date, end_date)

        days = [
            PeriodSalesResponse(
                Fecha=_as_date(row["day"]),
                CantidadVentas=row["sales_count"],
                Subtotal=to_money(row["subtotal"]),
                TotalDescuento=to_money(row["total_discount"]),
                Total=to_money(row["total"])
            )
            for row in self.repository.get_sales_by_period(start_date, end_date)
        ]

        summary = PeriodSummary(
            FechaInicio=start_date,
            FechaFin=end_date,
            CantidadVentas=sum(d.CantidadVentas for d in days),
            Subtotal=sum((d.Subtotal for d in days), Decimal("0.00")),
            TotalDescuento=sum((d.TotalDescuento for d in days), Decimal("0.00")),
            Total=sum((d.Total for d in days), Decimal("0.00"))
        )
        return days, summary

    @staticmethod
    def _validate_limit(limit: int):
        if not is_positive_int(limit):
            raise InvalidInputError("El límite debe ser un número positivo")

def _as_date(value) -> date:
    # SQLite devuelve func.date() como texto; PostgreSQL como date
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value)[:10])
