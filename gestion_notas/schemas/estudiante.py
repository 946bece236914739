from pydantic import BaseModel, Field
from typing import Literal, Optional

Seccion = Literal["A", "B"]


class EstudianteBase(BaseModel):
    nombre: str = Field(..., min_length=1)
    apellido_paterno: str = Field(..., min_length=1)
    apellido_materno: str = Field(..., min_length=1)
    grado_id: str
    seccion: Seccion
    anio_ingreso: int = Field(..., ge=1900, le=2100)


class EstudianteCreate(EstudianteBase):
    id: Optional[str] = None


class EstudianteUpdate(BaseModel):
    # Campos omitidos no cambian; null explícito no es válido
    nombre: str = Field(None, min_length=1)
    apellido_paterno: str = Field(None, min_length=1)
    apellido_materno: str = Field(None, min_length=1)
    grado_id: str = Field(None, min_length=1)
    seccion: Seccion = None
    anio_ingreso: int = Field(None, ge=1900, le=2100)


class Estudiante(EstudianteBase):
    id: str
    nombre_completo: str  # "Apellidos, Nombres"
    email: str
    rol: Literal["student"] = "student"
