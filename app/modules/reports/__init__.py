# app/modules/reports/__init__.py
"""
Módulo de Reportes

- Top de productos vendidos (por cantidad o monto)
- Top de clientes (por número de compras o monto)
- Ventas agrupadas por día en un periodo
"""
