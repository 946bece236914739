from pydantic import BaseModel, Field
from typing import Optional


class CursoBase(BaseModel):
    nombre: str = Field(..., min_length=1)
    grado_id: str
    docente_id: str


class CursoCreate(CursoBase):
    id: Optional[str] = None


class CursoUpdate(BaseModel):
    nombre: str = Field(None, min_length=1)
    docente_id: str = Field(None, min_length=1)


class Curso(CursoBase):
    id: str
