from sqlalchemy import Column, Integer, String, Text
from .base import BaseModel


class EntradaAlmacen(BaseModel):
    """Par clave/valor del almacén; `posicion` conserva el orden de inserción"""

    __tablename__ = "entradas_almacen"

    posicion = Column(Integer, primary_key=True, autoincrement=True)
    clave = Column(String(255), unique=True, nullable=False, index=True)
    valor = Column(Text, nullable=False)
