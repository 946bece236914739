from pydantic import BaseModel
from typing import List, Optional


class Grado(BaseModel):
    id: str
    nombre: str
    nivel: str


# Grados de Secundaria
GRADOS: List[Grado] = [
    Grado(id=f"g{n}", nombre=f"{n}° Secundaria", nivel=str(n)) for n in range(1, 6)
]

SECCIONES = ("A", "B")


def obtener_grado(grado_id: str) -> Optional[Grado]:
    return next((g for g in GRADOS if g.id == grado_id), None)


def obtener_nombre_grado(grado_id: str) -> str:
    grado = obtener_grado(grado_id)
    return grado.nombre if grado else "Grado no encontrado"
