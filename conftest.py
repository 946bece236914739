import pytest
from fastapi.testclient import TestClient

from gestion_notas.api.deps import get_almacen
from gestion_notas.core.almacen import AlmacenMemoria
from gestion_notas.core.seeder import run_seeder
from gestion_notas.crud.curso import curso
from gestion_notas.crud.docente import docente
from gestion_notas.crud.estudiante import estudiante
from gestion_notas.crud.usuario import guardar_usuario
from gestion_notas.main import app
from gestion_notas.schemas.curso import CursoCreate
from gestion_notas.schemas.docente import DocenteCreate
from gestion_notas.schemas.estudiante import EstudianteCreate


@pytest.fixture
def almacen():
    return AlmacenMemoria()


@pytest.fixture
def almacen_sembrado(almacen):
    assert run_seeder(almacen, semilla=42) is True
    return almacen


@pytest.fixture
def escenario(almacen):
    """Un grado con un docente, dos cursos y tres estudiantes (dos en la sección A)"""
    titular = docente.create(
        almacen,
        obj_in=DocenteCreate(
            nombre="Carlos",
            apellido_paterno="Méndez",
            apellido_materno="Rodríguez",
            especialidad="Matemáticas",
        ),
    )
    cursos = [
        curso.create(
            almacen,
            obj_in=CursoCreate(nombre=nombre, grado_id="g1", docente_id=titular.id),
        )
        for nombre in ("Matemática", "Comunicación")
    ]
    estudiantes = [
        estudiante.create(
            almacen,
            obj_in=EstudianteCreate(
                nombre=nombre,
                apellido_paterno=paterno,
                apellido_materno=materno,
                grado_id="g1",
                seccion=seccion,
                anio_ingreso=2024,
            ),
        )
        for nombre, paterno, materno, seccion in [
            ("Bea", "Zapata", "Ríos", "A"),
            ("Ana", "Árbol", "Luna", "A"),
            ("Nico", "Ñuñez", "Paz", "B"),
        ]
    ]
    guardar_usuario(
        almacen,
        {"id": "admin1", "nombre": "Administrador", "rol": "admin", "email": "admin1@escuela.com"},
    )
    return {"docente": titular, "cursos": cursos, "estudiantes": estudiantes}


@pytest.fixture
def client(almacen):
    app.dependency_overrides[get_almacen] = lambda: almacen
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def como_admin():
    return {"X-Usuario-Id": "admin1"}
