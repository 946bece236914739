import logging
from typing import Any, Dict, Optional

from pydantic import ValidationError

from gestion_notas.core.almacen import AlmacenClaveValor
from gestion_notas.core.errores import AlmacenCorruptoError
from gestion_notas.crud.docente import docente
from gestion_notas.crud.estudiante import estudiante
from gestion_notas.schemas.usuario import (
    Usuario,
    construir_usuario,
    usuario_desde_docente,
    usuario_desde_estudiante,
)

logger = logging.getLogger(__name__)

PREFIJO = "usuario:"


def guardar_usuario(almacen: AlmacenClaveValor, datos: Dict[str, Any]) -> Usuario:
    """Registrar un principal de administración o soporte"""
    usuario = construir_usuario(datos)
    almacen.guardar(f"{PREFIJO}{usuario.id}", usuario.model_dump(mode="json"))
    return usuario


def get_usuario(almacen: AlmacenClaveValor, id: str) -> Optional[Usuario]:
    """Resolver el principal de un id: usuarios del sistema, estudiantes y docentes"""
    try:
        datos = almacen.obtener(f"{PREFIJO}{id}")
        if datos is not None:
            return construir_usuario(datos)
    except (AlmacenCorruptoError, ValidationError) as e:
        logger.error(f"❌ Usuario '{id}' ilegible: {e}")
        return None

    db_estudiante = estudiante.get(almacen, id)
    if db_estudiante:
        return usuario_desde_estudiante(db_estudiante)

    db_docente = docente.get(almacen, id)
    if db_docente:
        return usuario_desde_docente(db_docente)

    return None
