from gestion_notas.core.almacen import AlmacenMemoria
from gestion_notas.core.seeder import ESTUDIANTES, RANGOS_UNIDAD, run_seeder
from gestion_notas.crud.curso import curso
from gestion_notas.crud.docente import docente
from gestion_notas.crud.estudiante import estudiante
from gestion_notas.crud.nota import nota
from gestion_notas.crud.usuario import get_usuario
from gestion_notas.schemas.grado import GRADOS


def test_seeder_pobla_el_almacen(almacen_sembrado):
    almacen = almacen_sembrado

    assert docente.count(almacen) == 8
    assert curso.count(almacen) == 35
    assert estudiante.count(almacen) == len(ESTUDIANTES) == 40
    assert nota.count(almacen) == 40 * 7
    assert get_usuario(almacen, "admin1").rol == "admin"
    assert get_usuario(almacen, "support1").rol == "support"

    for grado in GRADOS:
        assert len(curso.get_by_grado(almacen, grado.id)) == 7
        for seccion in ("A", "B"):
            assert len(estudiante.get_by_grado_seccion(almacen, grado.id, seccion)) == 4


def test_identificadores_sembrados(almacen_sembrado):
    almacen = almacen_sembrado

    assert docente.get(almacen, "CMendezR01").especialidad == "Matemáticas"
    assert docente.get(almacen, "PVegaL08").especialidad == "Química"
    assert curso.get(almacen, "c1").docente_id == "CMendezR01"
    assert curso.get(almacen, "c35").nombre == "Arte y Cultura"
    assert curso.get(almacen, "c35").grado_id == "g5"
    assert estudiante.get(almacen, "ASofiaFernandezT2024").nombre_completo == (
        "Fernández Torres, Ana Sofía"
    )
    assert estudiante.get(almacen, "VVicenteOliveraS2020").grado_id == "g5"


def test_notas_sembradas_dentro_de_los_rangos(almacen_sembrado):
    for registro in nota.get_multi(almacen_sembrado):
        for unidad, (minimo, maximo) in RANGOS_UNIDAD.items():
            componente = getattr(registro, unidad)
            assert componente is not None
            for valor in componente.model_dump().values():
                assert minimo <= valor <= maximo


def test_seeder_no_repite_y_es_reproducible(almacen_sembrado):
    assert run_seeder(almacen_sembrado, semilla=42) is False

    otro = AlmacenMemoria()
    run_seeder(otro, semilla=42)
    assert nota.get_multi(otro) == nota.get_multi(almacen_sembrado)
