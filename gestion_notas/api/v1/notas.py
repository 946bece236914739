from typing import Literal, Optional
from fastapi import APIRouter, Depends, HTTPException, Query

from gestion_notas.api.deps import get_almacen, get_current_user, require_roles
from gestion_notas.core.almacen import AlmacenClaveValor
from gestion_notas.core.calculadora import calcular_promedio_curso
from gestion_notas.core.reportes import (
    estudiantes_en_riesgo,
    planilla_curso,
    reporte_estudiante,
)
from gestion_notas.core.sincronizacion import aplicar_edicion, guardar_notas_editadas
from gestion_notas.crud.curso import curso
from gestion_notas.crud.nota import nota
from gestion_notas.schemas.nota import EdicionCelda, GuardarNotasRequest, RegistroNotas
from gestion_notas.utils.helpers import ResponseFormatter

router = APIRouter()


def _verificar_docente_del_curso(almacen: AlmacenClaveValor, curso_id: str, current_user):
    db_curso = curso.get(almacen, curso_id)
    if not db_curso:
        raise HTTPException(status_code=404, detail=f"Curso no encontrado: {curso_id}")
    if current_user.rol == "teacher" and db_curso.docente_id != current_user.id:
        raise HTTPException(status_code=403, detail="El curso no está asignado a este docente")
    return db_curso


@router.get("/curso/{curso_id}")
def get_planilla_curso(
    curso_id: str,
    seccion: Optional[str] = Query(None, description="Sección A, B o all"),
    orden: Literal["alfabetico", "merito"] = Query("alfabetico"),
    almacen: AlmacenClaveValor = Depends(get_almacen),
    current_user=Depends(require_roles("teacher", "admin", "support")),
):
    """Planilla del curso: componentes, nota por unidad y promedio de cada estudiante"""
    _verificar_docente_del_curso(almacen, curso_id, current_user)
    return planilla_curso(almacen, curso_id, seccion=seccion, por_merito=orden == "merito")


@router.get("/curso/{curso_id}/riesgo")
def get_estudiantes_en_riesgo(
    curso_id: str,
    almacen: AlmacenClaveValor = Depends(get_almacen),
    current_user=Depends(require_roles("teacher", "admin", "support")),
):
    """Estudiantes con promedio desaprobatorio en el curso"""
    _verificar_docente_del_curso(almacen, curso_id, current_user)
    en_riesgo = estudiantes_en_riesgo(almacen, curso_id)
    return {
        "data": [
            {"estudiante": r.estudiante.model_dump(), "promedio": r.promedio}
            for r in en_riesgo
        ],
        "total": len(en_riesgo),
    }


@router.get("/estudiante/{estudiante_id}")
def get_reporte_estudiante(
    estudiante_id: str,
    almacen: AlmacenClaveValor = Depends(get_almacen),
    current_user=Depends(get_current_user),
):
    """Libreta de notas del estudiante con promedio general y ranking"""
    if current_user.rol == "student" and current_user.id != estudiante_id:
        raise HTTPException(status_code=403, detail="Solo puede ver sus propias notas")

    reporte = reporte_estudiante(almacen, estudiante_id)
    if reporte is None:
        raise HTTPException(status_code=404, detail="Estudiante no encontrado")
    return reporte


@router.put("/")
def guardar_notas(
    request: GuardarNotasRequest,
    almacen: AlmacenClaveValor = Depends(get_almacen),
    current_user=Depends(require_roles("teacher", "admin")),
):
    """Guardar registros editados; cada registro reemplaza sus cuatro unidades"""
    editados = {}
    for registro_id, datos in request.registros.items():
        _verificar_docente_del_curso(almacen, datos.curso_id, current_user)
        if nota.get_registro(almacen, datos.estudiante_id, datos.curso_id) is None:
            raise HTTPException(
                status_code=404, detail=f"Registro de notas no encontrado: {registro_id}"
            )
        editados[registro_id] = RegistroNotas(**datos.model_dump())

    guardados = guardar_notas_editadas(almacen, editados)
    return ResponseFormatter.success(
        [
            {**r.model_dump(), "promedio": calcular_promedio_curso(r)}
            for r in guardados
        ],
        f"{len(guardados)} registros guardados",
    )


@router.patch("/celda")
def editar_celda(
    edicion: EdicionCelda,
    almacen: AlmacenClaveValor = Depends(get_almacen),
    current_user=Depends(require_roles("teacher", "admin")),
):
    """Aplicar el valor de una celda de la planilla y guardar el registro"""
    registro = nota.get(almacen, edicion.registro_id)
    if registro is None:
        raise HTTPException(status_code=404, detail="Registro de notas no encontrado")
    _verificar_docente_del_curso(almacen, registro.curso_id, current_user)

    try:
        editado = aplicar_edicion(
            registro, edicion.unidad, edicion.componente, edicion.valor
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    if editado == registro:
        return {
            "aceptado": False,
            "registro": registro.model_dump(),
            "promedio": calcular_promedio_curso(registro),
        }

    guardado = guardar_notas_editadas(almacen, {editado.id: editado})[0]
    return {
        "aceptado": True,
        "registro": guardado.model_dump(),
        "promedio": calcular_promedio_curso(guardado),
    }
