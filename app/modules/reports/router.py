# app/modules/reports/router.py
from fastapi import APIRouter, Depends
from typing import Optional

from app.core.dependencies import get_reports_service
from app.core.exceptions import InvalidInputError
from app.shared.validators import parse_date
from .service import ReportsService
from .schemas import TopProductsListResponse, TopClientsListResponse, PeriodSalesReportResponse

router = APIRouter()

@router.get("/productos/top", response_model=TopProductsListResponse)
def get_top_products(
    limite: int = 10,
    porMonto: bool = False,
    service: ReportsService = Depends(get_reports_service)
):
    """
    Productos más vendidos, por cantidad (por defecto) o por monto
    """
    return TopProductsListResponse(data=service.get_top_products(limite, porMonto))

@router.get("/clientes/top", response_model=TopClientsListResponse)
def get_top_clients(
    limite: int = 5,
    porTransacciones: bool = True,
    service: ReportsService = Depends(get_reports_service)
):
    """
    Clientes con más compras (por defecto) o con mayor monto comprado
    """
    return TopClientsListResponse(data=service.get_top_clients(limite, porTransacciones))

@router.get("/ventas/periodo", response_model=PeriodSalesReportResponse)
def get_sales_by_period(
    fechaInicio: Optional[str] = None,
    fechaFin: Optional[str] = None,
    service: ReportsService = Depends(get_reports_service)
):
    if not fechaInicio or not fechaFin:
        raise InvalidInputError("Los parámetros fechaInicio y fechaFin son obligatorios")

    start_date = parse_date(fechaInicio, "Formato de fecha inválido")
    end_date = parse_date(fechaFin, "Formato de fecha inválido")

    days, summary = service.get_sales_by_period(start_date, end_date)
    return PeriodSalesReportResponse(data=days, resumen=summary)
