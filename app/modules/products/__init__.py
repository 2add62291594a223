# app/modules/products/__init__.py
"""
Módulo de Productos - Catálogo

- Consulta de productos por ID, código o filtros
- Alta, modificación y baja lógica
- Ajuste directo de stock (nunca queda negativo)

Arquitectura:
- router.py: Endpoints FastAPI
- service.py: Lógica de negocio
- repository.py: Acceso a datos
- schemas.py: Modelos Pydantic de request/response
"""
