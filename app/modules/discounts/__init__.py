# app/modules/discounts/__init__.py
"""
Módulo de Descuentos

- Un producto tiene a lo sumo un descuento (restricción única en BD)
- Tipos: porcentaje (1) y monto fijo por unidad (2)
- Vigencia por rango de fechas inclusivo y bandera de activación
- resolve_active_discount: consulta usada por el motor de precios de ventas

Arquitectura:
- router.py: Endpoints de descuentos
- service.py: Lógica de negocio de descuentos
- repository.py: Acceso a datos de descuentos
- schemas.py: Modelos de request/response
"""
