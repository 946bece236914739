from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from gestion_notas.core.almacen import AlmacenClaveValor
from gestion_notas.core.calculadora import (
    NOTA_APROBATORIA,
    calcular_promedio_curso,
    calcular_promedio_general,
    esta_aprobado,
    nivel_logro,
    notas_por_unidad,
)
from gestion_notas.core.ordenamiento import filtrar_y_ordenar, ordenar_por_apellido
from gestion_notas.core.ranking import obtener_ranking_estudiante
from gestion_notas.crud.curso import curso
from gestion_notas.crud.docente import docente
from gestion_notas.crud.estudiante import estudiante
from gestion_notas.crud.nota import nota
from gestion_notas.schemas.estudiante import Estudiante
from gestion_notas.schemas.grado import obtener_nombre_grado
from gestion_notas.schemas.nota import RegistroNotas


@dataclass
class EstudianteEnRiesgo:
    estudiante: Estudiante
    promedio: float


def _fila(registro: RegistroNotas) -> Dict[str, Any]:
    promedio = calcular_promedio_curso(registro)
    return {
        "registro": registro.model_dump(),
        "notas_unidad": notas_por_unidad(registro),
        "promedio": promedio,
        "aprobado": esta_aprobado(promedio) if promedio is not None else None,
        "nivel_logro": nivel_logro(promedio) if promedio is not None else None,
    }


def planilla_curso(
    almacen: AlmacenClaveValor,
    curso_id: str,
    seccion: Optional[str] = None,
    por_merito: bool = False,
) -> Optional[Dict[str, Any]]:
    """Notas por unidad y promedio de cada estudiante del curso"""
    db_curso = curso.get(almacen, curso_id)
    if not db_curso:
        return None

    registros = nota.get_by_curso(almacen, curso_id)
    por_estudiante = {r.estudiante_id: r for r in registros}
    estudiantes = filtrar_y_ordenar(
        curso.get_estudiantes(almacen, curso_id),
        seccion=seccion,
        por_merito=por_merito,
        notas_curso=registros,
    )

    filas = []
    for e in estudiantes:
        registro = por_estudiante.get(e.id)
        if registro is None:
            continue
        filas.append({"estudiante": e.model_dump(), **_fila(registro)})

    db_docente = docente.get(almacen, db_curso.docente_id)
    return {
        "curso": db_curso.model_dump(),
        "grado": obtener_nombre_grado(db_curso.grado_id),
        "docente": db_docente.nombre_completo if db_docente else None,
        "filas": filas,
    }


def reporte_estudiante(almacen: AlmacenClaveValor, estudiante_id: str) -> Optional[Dict[str, Any]]:
    """Libreta del estudiante: cursos de su grado, promedio general y ranking"""
    db_estudiante = estudiante.get(almacen, estudiante_id)
    if not db_estudiante:
        return None

    cursos = {c.id: c for c in curso.get_by_grado(almacen, db_estudiante.grado_id)}
    registros = [
        r for r in nota.get_by_estudiante(almacen, estudiante_id) if r.curso_id in cursos
    ]

    return {
        "estudiante": db_estudiante.model_dump(),
        "grado": obtener_nombre_grado(db_estudiante.grado_id),
        "cursos": [
            {"curso": cursos[r.curso_id].model_dump(), **_fila(r)} for r in registros
        ],
        "promedio_general": calcular_promedio_general(registros),
        "ranking": obtener_ranking_estudiante(
            almacen, estudiante_id, db_estudiante.grado_id, db_estudiante.seccion
        ),
    }


def estudiantes_en_riesgo(almacen: AlmacenClaveValor, curso_id: str) -> List[EstudianteEnRiesgo]:
    """Estudiantes con promedio del curso menor a 11, del más bajo al más alto"""
    registros = {r.estudiante_id: r for r in nota.get_by_curso(almacen, curso_id)}

    en_riesgo = []
    for e in ordenar_por_apellido(curso.get_estudiantes(almacen, curso_id)):
        registro = registros.get(e.id)
        if registro is None:
            continue
        promedio = calcular_promedio_curso(registro)
        if promedio is not None and promedio < NOTA_APROBATORIA:
            en_riesgo.append(EstudianteEnRiesgo(estudiante=e, promedio=promedio))

    return sorted(en_riesgo, key=lambda item: item.promedio)
