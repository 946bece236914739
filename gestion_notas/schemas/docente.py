from pydantic import BaseModel, Field
from typing import Literal, Optional


class DocenteBase(BaseModel):
    nombre: str = Field(..., min_length=1)
    apellido_paterno: str = Field(..., min_length=1)
    apellido_materno: str = Field(..., min_length=1)
    especialidad: str


class DocenteCreate(DocenteBase):
    id: Optional[str] = None


class DocenteUpdate(BaseModel):
    nombre: str = Field(None, min_length=1)
    apellido_paterno: str = Field(None, min_length=1)
    apellido_materno: str = Field(None, min_length=1)
    especialidad: str = None


class Docente(DocenteBase):
    id: str
    nombre_completo: str
    email: str
    rol: Literal["teacher"] = "teacher"
