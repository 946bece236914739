import pytest

from gestion_notas.core.sincronizacion import (
    BufferEdicion,
    aplicar_edicion,
    guardar_notas_editadas,
    parsear_nota,
)
from gestion_notas.crud.nota import nota
from gestion_notas.schemas.nota import ComponenteNota, RegistroNotas


@pytest.fixture
def registro():
    return RegistroNotas(
        estudiante_id="e1",
        curso_id="c1",
        unidad1=ComponenteNota(tareas=16, conceptual=14, examenes=18),
    )


@pytest.mark.parametrize("texto, esperado", [("15", 15.0), ("0", 0.0), ("20", 20.0), ("12.5", 12.5)])
def test_parsear_nota_valida(texto, esperado):
    assert parsear_nota(texto) == esperado


@pytest.mark.parametrize("texto", ["abc", "21", "-1", "nan", "inf", "12abc", ""])
def test_parsear_nota_invalida(texto):
    assert parsear_nota(texto) is None


def test_valor_invalido_conserva_el_registro(registro):
    assert aplicar_edicion(registro, "unidad1", "tareas", "abc") == registro
    assert aplicar_edicion(registro, "unidad1", "tareas", "25") == registro


def test_valor_valido_actualiza_componente(registro):
    editado = aplicar_edicion(registro, "unidad1", "examenes", "20")
    assert editado.unidad1 == ComponenteNota(tareas=16, conceptual=14, examenes=20)
    assert registro.unidad1.examenes == 18


def test_valor_en_unidad_sin_nota_parte_de_ceros(registro):
    editado = aplicar_edicion(registro, "unidad2", "conceptual", "13")
    assert editado.unidad2 == ComponenteNota(tareas=0, conceptual=13, examenes=0)


def test_texto_vacio_pone_cero(registro):
    editado = aplicar_edicion(registro, "unidad1", "tareas", "")
    assert editado.unidad1 == ComponenteNota(tareas=0, conceptual=14, examenes=18)


def test_texto_vacio_en_unidad_sin_nota_no_cambia(registro):
    assert aplicar_edicion(registro, "unidad3", "tareas", "") == registro


def test_unidad_en_ceros_vuelve_a_nula(registro):
    editado = aplicar_edicion(registro, "unidad1", "tareas", "")
    editado = aplicar_edicion(editado, "unidad1", "conceptual", "0")
    editado = aplicar_edicion(editado, "unidad1", "examenes", "")
    assert editado.unidad1 is None


def test_unidad_o_componente_desconocido(registro):
    with pytest.raises(ValueError):
        aplicar_edicion(registro, "unidad5", "tareas", "10")
    with pytest.raises(ValueError):
        aplicar_edicion(registro, "unidad1", "practicas", "10")


def test_guardar_reemplaza_y_relee(almacen, escenario):
    zapata = escenario["estudiantes"][0]
    curso_id = escenario["cursos"][0].id
    registro = nota.get_registro(almacen, zapata.id, curso_id)
    editado = registro.model_copy(
        update={"unidad2": ComponenteNota(tareas=11, conceptual=12, examenes=13)}
    )

    guardados = guardar_notas_editadas(almacen, {editado.id: editado})

    assert guardados == [editado]
    assert nota.get_registro(almacen, zapata.id, curso_id) == editado


def test_ciclo_buffer_unidad_en_ceros_se_lee_nula(almacen, escenario):
    zapata = escenario["estudiantes"][0]
    curso_id = escenario["cursos"][0].id
    registro_id = RegistroNotas.generar_id(zapata.id, curso_id)

    buffer = BufferEdicion(almacen, curso_id)
    assert buffer.editar(registro_id, "unidad1", "tareas", "12") is True
    buffer.guardar()
    assert nota.get_registro(almacen, zapata.id, curso_id).unidad1.tareas == 12

    assert buffer.editar(registro_id, "unidad1", "tareas", "0") is True
    buffer.guardar()

    assert nota.get_registro(almacen, zapata.id, curso_id).unidad1 is None
    assert buffer.registros[registro_id].unidad1 is None


def test_buffer_rechaza_valores_invalidos(almacen, escenario):
    zapata = escenario["estudiantes"][0]
    curso_id = escenario["cursos"][0].id
    registro_id = RegistroNotas.generar_id(zapata.id, curso_id)

    buffer = BufferEdicion(almacen, curso_id)
    assert buffer.editar(registro_id, "unidad1", "tareas", "veinte") is False
    assert buffer.editar("no-existe", "unidad1", "tareas", "10") is False
    assert buffer.registros[registro_id].unidad1 is None


def test_buffer_promedio_del_escenario(almacen, escenario):
    zapata = escenario["estudiantes"][0]
    curso_id = escenario["cursos"][0].id
    registro_id = RegistroNotas.generar_id(zapata.id, curso_id)
    buffer = BufferEdicion(almacen, curso_id)

    valores = {
        "unidad1": ("16", "14", "18"),
        "unidad2": ("15", "15", "15"),
    }
    for unidad, (t, c, e) in valores.items():
        buffer.editar(registro_id, unidad, "tareas", t)
        buffer.editar(registro_id, unidad, "conceptual", c)
        buffer.editar(registro_id, unidad, "examenes", e)
    assert buffer.promedio(registro_id) is None

    for unidad, valor in (("unidad3", "12"), ("unidad4", "20")):
        for componente in ("tareas", "conceptual", "examenes"):
            buffer.editar(registro_id, unidad, componente, valor)
    assert buffer.promedio(registro_id) == 15.8

    # Sin guardar, el almacén no cambia
    assert nota.get_registro(almacen, zapata.id, curso_id).unidad1 is None
