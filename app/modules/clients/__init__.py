# app/modules/clients/__init__.py
"""
Módulo de Clientes - Directorio por NIT

El NIT es la identidad del cliente y no cambia después del registro.
"""
