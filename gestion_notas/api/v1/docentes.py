from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, Query

from gestion_notas.api.deps import get_almacen, get_current_user, require_roles
from gestion_notas.core.almacen import AlmacenClaveValor
from gestion_notas.core.errores import EntidadDuplicadaError
from gestion_notas.core.ordenamiento import ordenar_por_nombre
from gestion_notas.crud.curso import curso
from gestion_notas.crud.docente import docente
from gestion_notas.crud.estudiante import estudiante
from gestion_notas.schemas.docente import DocenteCreate, DocenteUpdate
from gestion_notas.schemas.grado import obtener_nombre_grado
from gestion_notas.utils.helpers import (
    ResponseFormatter,
    existe_nombre_duplicado,
    formatear_nombre_completo,
)

router = APIRouter()


@router.get("/")
def get_docentes(
    search: Optional[str] = Query(None, description="Buscar por nombre"),
    almacen: AlmacenClaveValor = Depends(get_almacen),
    current_user=Depends(get_current_user),
):
    """Lista de docentes en orden alfabético"""
    docentes = docente.search_by_name(almacen, search) if search else docente.get_multi(almacen)
    return {
        "data": [d.model_dump() for d in ordenar_por_nombre(docentes)],
        "total": len(docentes),
    }


@router.get("/{docente_id}")
def get_docente(
    docente_id: str,
    almacen: AlmacenClaveValor = Depends(get_almacen),
    current_user=Depends(get_current_user),
):
    """Docente con sus cursos asignados"""
    db_docente = docente.get(almacen, docente_id)
    if not db_docente:
        raise HTTPException(status_code=404, detail="Docente no encontrado")

    return {
        **db_docente.model_dump(),
        "cursos": [
            {**c.model_dump(), "grado": obtener_nombre_grado(c.grado_id)}
            for c in curso.get_by_docente(almacen, docente_id)
        ],
    }


@router.post("/", status_code=201)
def create_docente(
    docente_in: DocenteCreate,
    almacen: AlmacenClaveValor = Depends(get_almacen),
    current_user=Depends(require_roles("admin")),
):
    """Registrar docente"""
    nombre_completo = formatear_nombre_completo(
        docente_in.nombre, docente_in.apellido_paterno, docente_in.apellido_materno
    )
    personas = estudiante.get_multi(almacen) + docente.get_multi(almacen)
    if existe_nombre_duplicado(nombre_completo, personas):
        raise HTTPException(
            status_code=409,
            detail=f"Ya existe una persona con el nombre '{nombre_completo}'",
        )

    try:
        db_docente = docente.create(almacen, obj_in=docente_in)
    except EntidadDuplicadaError as e:
        raise HTTPException(status_code=409, detail=str(e))

    return ResponseFormatter.success(db_docente.model_dump(), "Docente creado")


@router.put("/{docente_id}")
def update_docente(
    docente_id: str,
    docente_in: DocenteUpdate,
    almacen: AlmacenClaveValor = Depends(get_almacen),
    current_user=Depends(require_roles("admin")),
):
    """Actualizar docente"""
    db_docente = docente.get(almacen, docente_id)
    if not db_docente:
        raise HTTPException(status_code=404, detail="Docente no encontrado")

    datos = docente_in.model_dump(exclude_unset=True)
    nombre_completo = formatear_nombre_completo(
        datos.get("nombre", db_docente.nombre),
        datos.get("apellido_paterno", db_docente.apellido_paterno),
        datos.get("apellido_materno", db_docente.apellido_materno),
    )
    personas = estudiante.get_multi(almacen) + docente.get_multi(almacen)
    if existe_nombre_duplicado(nombre_completo, personas, excluir_id=docente_id):
        raise HTTPException(
            status_code=409,
            detail=f"Ya existe una persona con el nombre '{nombre_completo}'",
        )

    actualizado = docente.update(almacen, db_obj=db_docente, obj_in=docente_in)
    return ResponseFormatter.success(actualizado.model_dump(), "Docente actualizado")


@router.delete("/{docente_id}")
def delete_docente(
    docente_id: str,
    almacen: AlmacenClaveValor = Depends(get_almacen),
    current_user=Depends(require_roles("admin")),
):
    """Eliminar docente; no se permite si aún dicta cursos"""
    if not docente.get(almacen, docente_id):
        raise HTTPException(status_code=404, detail="Docente no encontrado")

    cursos = curso.get_by_docente(almacen, docente_id)
    if cursos:
        raise HTTPException(
            status_code=409,
            detail=f"El docente tiene {len(cursos)} cursos asignados",
        )

    docente.remove(almacen, id=docente_id)
    return ResponseFormatter.success({"id": docente_id}, "Docente eliminado")
