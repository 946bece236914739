from gestion_notas.core.ranking import (
    calcular_promedio_estudiante,
    obtener_ranking_estudiante,
    ranking_por_seccion,
)
from gestion_notas.crud.curso import curso
from gestion_notas.crud.nota import nota
from gestion_notas.schemas.nota import UNIDADES, ComponenteNota


def calificar(almacen, estudiante_id, curso_id, valor):
    c = ComponenteNota(tareas=valor, conceptual=valor, examenes=valor)
    registro = nota.get_registro(almacen, estudiante_id, curso_id)
    nota.save(almacen, registro.model_copy(update={u: c for u in UNIDADES}))


def test_ranking_ordena_por_promedio_descendente(almacen, escenario):
    zapata, arbol, _ = escenario["estudiantes"]
    c1, c2 = escenario["cursos"]
    calificar(almacen, zapata.id, c1.id, 12)
    calificar(almacen, zapata.id, c2.id, 14)
    calificar(almacen, arbol.id, c1.id, 18)
    calificar(almacen, arbol.id, c2.id, 16)

    ranking = ranking_por_seccion(almacen, "g1", "A")

    assert [(e.ranking, e.estudiante.id, e.promedio) for e in ranking] == [
        (1, arbol.id, 17.0),
        (2, zapata.id, 13.0),
    ]


def test_ranking_excluye_estudiantes_sin_promedio(almacen, escenario):
    zapata, arbol, _ = escenario["estudiantes"]
    calificar(almacen, arbol.id, escenario["cursos"][0].id, 15)

    ranking = ranking_por_seccion(almacen, "g1", "A")

    assert [e.estudiante.id for e in ranking] == [arbol.id]
    assert [e.ranking for e in ranking] == [1]
    assert obtener_ranking_estudiante(almacen, zapata.id, "g1", "A") is None
    assert calcular_promedio_estudiante(almacen, zapata.id, "g1") is None


def test_empates_conservan_el_orden_del_almacen(almacen, escenario):
    zapata, arbol, _ = escenario["estudiantes"]
    for e in (arbol, zapata):
        calificar(almacen, e.id, escenario["cursos"][0].id, 15)

    primera = [e.estudiante.id for e in ranking_por_seccion(almacen, "g1", "A")]
    segunda = [e.estudiante.id for e in ranking_por_seccion(almacen, "g1", "A")]

    assert primera == segunda == [zapata.id, arbol.id]


def test_ranking_se_recalcula_tras_cada_escritura(almacen, escenario):
    zapata, arbol, _ = escenario["estudiantes"]
    c1 = escenario["cursos"][0]
    calificar(almacen, zapata.id, c1.id, 14)
    calificar(almacen, arbol.id, c1.id, 13)
    assert obtener_ranking_estudiante(almacen, arbol.id, "g1", "A") == 2

    calificar(almacen, arbol.id, c1.id, 19)
    assert obtener_ranking_estudiante(almacen, arbol.id, "g1", "A") == 1


def test_registros_de_cursos_eliminados_no_cuentan(almacen, escenario):
    zapata = escenario["estudiantes"][0]
    c1, c2 = escenario["cursos"]
    calificar(almacen, zapata.id, c1.id, 10)
    calificar(almacen, zapata.id, c2.id, 20)

    # Curso borrado directamente del almacén: el registro queda huérfano
    almacen.eliminar(curso.clave(c1.id))

    assert calcular_promedio_estudiante(almacen, zapata.id, "g1") == 20.0


def test_propiedades_del_ranking_con_datos_sembrados(almacen_sembrado):
    for grado in ("g1", "g3", "g5"):
        for seccion in ("A", "B"):
            ranking = ranking_por_seccion(almacen_sembrado, grado, seccion)
            promedios = [e.promedio for e in ranking]

            assert [e.ranking for e in ranking] == list(range(1, len(ranking) + 1))
            assert promedios == sorted(promedios, reverse=True)
            assert len({e.estudiante.id for e in ranking}) == len(ranking) == 4
            for entrada in ranking:
                assert entrada.estudiante.grado_id == grado
                assert entrada.estudiante.seccion == seccion
                assert (
                    obtener_ranking_estudiante(
                        almacen_sembrado, entrada.estudiante.id, grado, seccion
                    )
                    == entrada.ranking
                )
