from .base import BaseModel
from .entrada import EntradaAlmacen

__all__ = [
    "BaseModel",
    "EntradaAlmacen",
]
