from gestion_notas.core.reportes import (
    estudiantes_en_riesgo,
    planilla_curso,
    reporte_estudiante,
)
from gestion_notas.crud.nota import nota
from gestion_notas.schemas.nota import UNIDADES, ComponenteNota


def calificar(almacen, estudiante_id, curso_id, valor):
    c = ComponenteNota(tareas=valor, conceptual=valor, examenes=valor)
    registro = nota.get_registro(almacen, estudiante_id, curso_id)
    nota.save(almacen, registro.model_copy(update={u: c for u in UNIDADES}))


def test_planilla_por_seccion_y_merito(almacen, escenario):
    zapata, arbol, nunez = escenario["estudiantes"]
    c1 = escenario["cursos"][0]
    calificar(almacen, zapata.id, c1.id, 16)
    calificar(almacen, arbol.id, c1.id, 12)
    calificar(almacen, nunez.id, c1.id, 19)

    alfabetica = planilla_curso(almacen, c1.id)
    assert [f["estudiante"]["id"] for f in alfabetica["filas"]] == [arbol.id, nunez.id, zapata.id]
    assert alfabetica["grado"] == "1° Secundaria"

    merito_a = planilla_curso(almacen, c1.id, seccion="A", por_merito=True)
    assert [(f["estudiante"]["id"], f["promedio"]) for f in merito_a["filas"]] == [
        (zapata.id, 16.0),
        (arbol.id, 12.0),
    ]
    assert merito_a["filas"][0]["aprobado"] is True

    assert planilla_curso(almacen, "c99") is None


def test_reporte_estudiante_sin_notas(almacen, escenario):
    zapata = escenario["estudiantes"][0]
    reporte = reporte_estudiante(almacen, zapata.id)

    assert len(reporte["cursos"]) == 2
    assert all(c["promedio"] is None for c in reporte["cursos"])
    assert reporte["promedio_general"] is None
    assert reporte["ranking"] is None
    assert reporte_estudiante(almacen, "desconocido") is None


def test_en_riesgo_ordenados_de_menor_a_mayor(almacen, escenario):
    zapata, arbol, nunez = escenario["estudiantes"]
    c1 = escenario["cursos"][0]
    calificar(almacen, zapata.id, c1.id, 10)
    calificar(almacen, arbol.id, c1.id, 11)
    calificar(almacen, nunez.id, c1.id, 6)

    en_riesgo = estudiantes_en_riesgo(almacen, c1.id)

    assert [(r.estudiante.id, r.promedio) for r in en_riesgo] == [
        (nunez.id, 6.0),
        (zapata.id, 10.0),
    ]
