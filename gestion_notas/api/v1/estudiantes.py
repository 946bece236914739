from typing import Literal, Optional
from fastapi import APIRouter, Depends, HTTPException, Query

from gestion_notas.api.deps import get_almacen, get_current_user, require_roles
from gestion_notas.core.almacen import AlmacenClaveValor
from gestion_notas.core.errores import EntidadDuplicadaError, EntidadNoEncontradaError
from gestion_notas.core.ordenamiento import filtrar_y_ordenar
from gestion_notas.crud.curso import curso
from gestion_notas.crud.docente import docente
from gestion_notas.crud.estudiante import estudiante
from gestion_notas.crud.nota import nota
from gestion_notas.schemas.estudiante import EstudianteCreate, EstudianteUpdate
from gestion_notas.schemas.grado import obtener_nombre_grado
from gestion_notas.utils.helpers import (
    ResponseFormatter,
    existe_nombre_duplicado,
    formatear_nombre_completo,
)

router = APIRouter()


def _serializar(e):
    return {**e.model_dump(), "grado": obtener_nombre_grado(e.grado_id)}


def _verificar_nombre(almacen: AlmacenClaveValor, nombre_completo: str, excluir_id=None):
    personas = estudiante.get_multi(almacen) + docente.get_multi(almacen)
    if existe_nombre_duplicado(nombre_completo, personas, excluir_id):
        raise HTTPException(
            status_code=409,
            detail=f"Ya existe una persona con el nombre '{nombre_completo}'",
        )


@router.get("/")
def get_estudiantes(
    grado_id: Optional[str] = Query(None, description="Filtrar por grado"),
    seccion: Optional[str] = Query(None, description="Sección A, B o all"),
    curso_id: Optional[str] = Query(None, description="Estudiantes de un curso"),
    orden: Literal["alfabetico", "merito"] = Query(
        "alfabetico", description="Orden alfabético o por promedio del curso"
    ),
    almacen: AlmacenClaveValor = Depends(get_almacen),
    current_user=Depends(require_roles("teacher", "admin", "support")),
):
    """Listado de estudiantes filtrado y ordenado"""
    if orden == "merito" and not curso_id:
        raise HTTPException(
            status_code=400, detail="El orden por mérito requiere curso_id"
        )

    if curso_id:
        if not curso.get(almacen, curso_id):
            raise HTTPException(status_code=404, detail="Curso no encontrado")
        estudiantes = curso.get_estudiantes(almacen, curso_id)
        registros = nota.get_by_curso(almacen, curso_id)
    else:
        estudiantes = (
            estudiante.get_by_grado(almacen, grado_id)
            if grado_id
            else estudiante.get_multi(almacen)
        )
        registros = []

    ordenados = filtrar_y_ordenar(
        estudiantes,
        seccion=seccion,
        por_merito=orden == "merito",
        notas_curso=registros,
    )

    return {
        "data": [_serializar(e) for e in ordenados],
        "total": len(ordenados),
        "filters": {"grado_id": grado_id, "seccion": seccion, "curso_id": curso_id, "orden": orden},
    }


@router.get("/{estudiante_id}")
def get_estudiante(
    estudiante_id: str,
    almacen: AlmacenClaveValor = Depends(get_almacen),
    current_user=Depends(get_current_user),
):
    """Obtener estudiante específico"""
    if current_user.rol == "student" and current_user.id != estudiante_id:
        raise HTTPException(status_code=403, detail="Solo puede ver su propia información")

    db_estudiante = estudiante.get(almacen, estudiante_id)
    if not db_estudiante:
        raise HTTPException(status_code=404, detail="Estudiante no encontrado")
    return _serializar(db_estudiante)


@router.post("/", status_code=201)
def create_estudiante(
    estudiante_in: EstudianteCreate,
    almacen: AlmacenClaveValor = Depends(get_almacen),
    current_user=Depends(require_roles("admin")),
):
    """Matricular estudiante y crear sus registros de notas"""
    _verificar_nombre(
        almacen,
        formatear_nombre_completo(
            estudiante_in.nombre, estudiante_in.apellido_paterno, estudiante_in.apellido_materno
        ),
    )

    try:
        db_estudiante = estudiante.create(almacen, obj_in=estudiante_in)
    except EntidadNoEncontradaError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except EntidadDuplicadaError as e:
        raise HTTPException(status_code=409, detail=str(e))

    return ResponseFormatter.success(_serializar(db_estudiante), "Estudiante creado")


@router.put("/{estudiante_id}")
def update_estudiante(
    estudiante_id: str,
    estudiante_in: EstudianteUpdate,
    almacen: AlmacenClaveValor = Depends(get_almacen),
    current_user=Depends(require_roles("admin")),
):
    """Actualizar estudiante"""
    db_estudiante = estudiante.get(almacen, estudiante_id)
    if not db_estudiante:
        raise HTTPException(status_code=404, detail="Estudiante no encontrado")

    datos = estudiante_in.model_dump(exclude_unset=True)
    _verificar_nombre(
        almacen,
        formatear_nombre_completo(
            datos.get("nombre", db_estudiante.nombre),
            datos.get("apellido_paterno", db_estudiante.apellido_paterno),
            datos.get("apellido_materno", db_estudiante.apellido_materno),
        ),
        excluir_id=estudiante_id,
    )

    try:
        actualizado = estudiante.update(almacen, db_obj=db_estudiante, obj_in=datos)
    except EntidadNoEncontradaError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return ResponseFormatter.success(_serializar(actualizado), "Estudiante actualizado")


@router.delete("/{estudiante_id}")
def delete_estudiante(
    estudiante_id: str,
    almacen: AlmacenClaveValor = Depends(get_almacen),
    current_user=Depends(require_roles("admin")),
):
    """Eliminar estudiante junto a sus registros de notas"""
    if not estudiante.get(almacen, estudiante_id):
        raise HTTPException(status_code=404, detail="Estudiante no encontrado")

    estudiante.remove(almacen, id=estudiante_id)
    return ResponseFormatter.success({"id": estudiante_id}, "Estudiante eliminado")
