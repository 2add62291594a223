# app/modules/sales/__init__.py
"""
Módulo de Ventas

- Registro de ventas con cálculo de precios y descuentos vigentes
- Anulación de ventas con restauración de stock
- Consulta por ID, código, cliente y rango de fechas
- Métodos de pago

Arquitectura:
- router.py: Endpoints FastAPI
- service.py: Orquestación (crear / anular) dentro de una transacción
- pricing.py: Motor de precios (sin efectos secundarios)
- repository.py: Acceso a datos
- schemas.py: Modelos Pydantic de request/response
"""
