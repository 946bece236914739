from pydantic import BaseModel, ConfigDict, Field, TypeAdapter
from typing import Annotated, Any, Dict, Literal, Union

from .docente import Docente
from .estudiante import Estudiante, Seccion


class UsuarioBase(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1)
    nombre: str = Field(..., min_length=1)


class UsuarioEstudiante(UsuarioBase):
    rol: Literal["student"]
    grado_id: str
    seccion: Seccion


class UsuarioDocente(UsuarioBase):
    rol: Literal["teacher"]
    especialidad: str


class UsuarioAdmin(UsuarioBase):
    rol: Literal["admin"]
    email: str


class UsuarioSoporte(UsuarioBase):
    rol: Literal["support"]
    email: str


Usuario = Annotated[
    Union[UsuarioEstudiante, UsuarioDocente, UsuarioAdmin, UsuarioSoporte],
    Field(discriminator="rol"),
]

_usuario_adapter = TypeAdapter(Usuario)


def construir_usuario(datos: Dict[str, Any]) -> Usuario:
    """Validar un principal; falla con ValidationError si falta un campo del rol"""
    return _usuario_adapter.validate_python(datos)


def usuario_desde_estudiante(estudiante: Estudiante) -> UsuarioEstudiante:
    return UsuarioEstudiante(
        id=estudiante.id,
        nombre=estudiante.nombre_completo,
        rol="student",
        grado_id=estudiante.grado_id,
        seccion=estudiante.seccion,
    )


def usuario_desde_docente(docente: Docente) -> UsuarioDocente:
    return UsuarioDocente(
        id=docente.id,
        nombre=docente.nombre_completo,
        rol="teacher",
        especialidad=docente.especialidad,
    )
