from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, Query

from gestion_notas.api.deps import get_almacen, get_current_user, require_roles
from gestion_notas.core.almacen import AlmacenClaveValor
from gestion_notas.core.errores import EntidadDuplicadaError, EntidadNoEncontradaError
from gestion_notas.crud.curso import curso
from gestion_notas.crud.docente import docente
from gestion_notas.schemas.curso import CursoCreate, CursoUpdate
from gestion_notas.schemas.grado import GRADOS, obtener_nombre_grado
from gestion_notas.utils.helpers import ResponseFormatter

router = APIRouter()


def _serializar(almacen: AlmacenClaveValor, c):
    db_docente = docente.get(almacen, c.docente_id)
    return {
        **c.model_dump(),
        "grado": obtener_nombre_grado(c.grado_id),
        "docente": db_docente.nombre_completo if db_docente else None,
    }


@router.get("/grados")
def get_grados(current_user=Depends(get_current_user)):
    """Grados de secundaria"""
    return [g.model_dump() for g in GRADOS]


@router.get("/")
def get_cursos(
    grado_id: Optional[str] = Query(None, description="Filtrar por grado"),
    docente_id: Optional[str] = Query(None, description="Filtrar por docente"),
    almacen: AlmacenClaveValor = Depends(get_almacen),
    current_user=Depends(get_current_user),
):
    """Lista de cursos"""
    cursos = curso.get_multi(almacen)
    if grado_id:
        cursos = [c for c in cursos if c.grado_id == grado_id]
    if docente_id:
        cursos = [c for c in cursos if c.docente_id == docente_id]

    return {
        "data": [_serializar(almacen, c) for c in cursos],
        "total": len(cursos),
        "filters": {"grado_id": grado_id, "docente_id": docente_id},
    }


@router.get("/{curso_id}")
def get_curso(
    curso_id: str,
    almacen: AlmacenClaveValor = Depends(get_almacen),
    current_user=Depends(get_current_user),
):
    db_curso = curso.get(almacen, curso_id)
    if not db_curso:
        raise HTTPException(status_code=404, detail="Curso no encontrado")
    return _serializar(almacen, db_curso)


@router.post("/", status_code=201)
def create_curso(
    curso_in: CursoCreate,
    almacen: AlmacenClaveValor = Depends(get_almacen),
    current_user=Depends(require_roles("admin")),
):
    """Crear curso y los registros de notas de los estudiantes del grado"""
    if not docente.get(almacen, curso_in.docente_id):
        raise HTTPException(
            status_code=400, detail=f"No existe docente '{curso_in.docente_id}'"
        )

    try:
        db_curso = curso.create(almacen, obj_in=curso_in)
    except EntidadNoEncontradaError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except EntidadDuplicadaError as e:
        raise HTTPException(status_code=409, detail=str(e))

    return ResponseFormatter.success(_serializar(almacen, db_curso), "Curso creado")


@router.put("/{curso_id}")
def update_curso(
    curso_id: str,
    curso_in: CursoUpdate,
    almacen: AlmacenClaveValor = Depends(get_almacen),
    current_user=Depends(require_roles("admin")),
):
    """Renombrar curso o reasignar docente"""
    db_curso = curso.get(almacen, curso_id)
    if not db_curso:
        raise HTTPException(status_code=404, detail="Curso no encontrado")
    if curso_in.docente_id and not docente.get(almacen, curso_in.docente_id):
        raise HTTPException(
            status_code=400, detail=f"No existe docente '{curso_in.docente_id}'"
        )

    actualizado = curso.update(almacen, db_obj=db_curso, obj_in=curso_in)
    return ResponseFormatter.success(_serializar(almacen, actualizado), "Curso actualizado")


@router.delete("/{curso_id}")
def delete_curso(
    curso_id: str,
    almacen: AlmacenClaveValor = Depends(get_almacen),
    current_user=Depends(require_roles("admin")),
):
    """Eliminar curso junto a sus registros de notas"""
    if not curso.get(almacen, curso_id):
        raise HTTPException(status_code=404, detail="Curso no encontrado")

    curso.remove(almacen, id=curso_id)
    return ResponseFormatter.success({"id": curso_id}, "Curso eliminado")
