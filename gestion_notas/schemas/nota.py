from pydantic import BaseModel, Field, model_validator
from typing import Any, Dict, List, Optional

UNIDADES = ("unidad1", "unidad2", "unidad3", "unidad4")
COMPONENTES = ("tareas", "conceptual", "examenes")

# Pesos de cada componente sobre la nota de la unidad (suman 1.0)
PESOS = {"tareas": 0.30, "conceptual": 0.30, "examenes": 0.40}

NOTA_MINIMA = 0
NOTA_MAXIMA = 20


class ComponenteNota(BaseModel):
    tareas: float = Field(0, ge=NOTA_MINIMA, le=NOTA_MAXIMA)
    conceptual: float = Field(0, ge=NOTA_MINIMA, le=NOTA_MAXIMA)
    examenes: float = Field(0, ge=NOTA_MINIMA, le=NOTA_MAXIMA)

    def es_vacio(self) -> bool:
        return self.tareas == 0 and self.conceptual == 0 and self.examenes == 0


class RegistroNotasBase(BaseModel):
    estudiante_id: str
    curso_id: str
    unidad1: Optional[ComponenteNota] = None
    unidad2: Optional[ComponenteNota] = None
    unidad3: Optional[ComponenteNota] = None
    unidad4: Optional[ComponenteNota] = None


class RegistroNotas(RegistroNotasBase):
    id: str

    @model_validator(mode="before")
    @classmethod
    def _completar_id(cls, data: Any) -> Any:
        if isinstance(data, dict) and not data.get("id"):
            if data.get("estudiante_id") and data.get("curso_id"):
                data = {
                    **data,
                    "id": cls.generar_id(data["estudiante_id"], data["curso_id"]),
                }
        return data

    @staticmethod
    def generar_id(estudiante_id: str, curso_id: str) -> str:
        return f"{estudiante_id}-{curso_id}"

    @classmethod
    def vacio(cls, estudiante_id: str, curso_id: str) -> "RegistroNotas":
        return cls(estudiante_id=estudiante_id, curso_id=curso_id)

    def unidades(self) -> List[Optional[ComponenteNota]]:
        return [getattr(self, unidad) for unidad in UNIDADES]


class RegistroNotasUpdate(BaseModel):
    """Reemplazo completo de las cuatro unidades de un registro"""

    estudiante_id: str
    curso_id: str
    unidad1: Optional[ComponenteNota] = None
    unidad2: Optional[ComponenteNota] = None
    unidad3: Optional[ComponenteNota] = None
    unidad4: Optional[ComponenteNota] = None


class EdicionCelda(BaseModel):
    """Valor textual ingresado en una celda de la planilla"""

    registro_id: str
    unidad: str
    componente: str
    valor: Optional[str] = None


class GuardarNotasRequest(BaseModel):
    registros: Dict[str, RegistroNotasUpdate]
