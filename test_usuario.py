import pytest
from pydantic import ValidationError

from gestion_notas.crud.usuario import get_usuario, guardar_usuario
from gestion_notas.schemas.usuario import (
    UsuarioAdmin,
    UsuarioDocente,
    UsuarioEstudiante,
    UsuarioSoporte,
    construir_usuario,
)


def test_construir_cada_rol():
    assert isinstance(
        construir_usuario({"id": "e1", "nombre": "Ana", "rol": "student", "grado_id": "g1", "seccion": "A"}),
        UsuarioEstudiante,
    )
    assert isinstance(
        construir_usuario({"id": "d1", "nombre": "Luis", "rol": "teacher", "especialidad": "Arte"}),
        UsuarioDocente,
    )
    assert isinstance(
        construir_usuario({"id": "a1", "nombre": "Admin", "rol": "admin", "email": "a@escuela.com"}),
        UsuarioAdmin,
    )
    assert isinstance(
        construir_usuario({"id": "s1", "nombre": "Soporte", "rol": "support", "email": "s@escuela.com"}),
        UsuarioSoporte,
    )


@pytest.mark.parametrize(
    "datos",
    [
        {"id": "e1", "nombre": "Ana", "rol": "student", "grado_id": "g1"},
        {"id": "d1", "nombre": "Luis", "rol": "teacher"},
        {"id": "a1", "nombre": "Admin", "rol": "admin"},
        {"id": "x1", "nombre": "Nadie", "rol": "director", "email": "x@escuela.com"},
        {"nombre": "Sin id", "rol": "support", "email": "s@escuela.com"},
    ],
)
def test_campos_requeridos_por_rol(datos):
    with pytest.raises(ValidationError):
        construir_usuario(datos)


def test_usuario_es_inmutable():
    admin = construir_usuario({"id": "a1", "nombre": "Admin", "rol": "admin", "email": "a@escuela.com"})
    with pytest.raises(ValidationError):
        admin.nombre = "Otro"


def test_resolver_principales_del_almacen(almacen, escenario):
    zapata = escenario["estudiantes"][0]
    guardar_usuario(
        almacen, {"id": "support1", "nombre": "Soporte", "rol": "support", "email": "s@escuela.com"}
    )

    assert get_usuario(almacen, "admin1").rol == "admin"
    assert get_usuario(almacen, "support1").rol == "support"

    como_estudiante = get_usuario(almacen, zapata.id)
    assert como_estudiante == UsuarioEstudiante(
        id=zapata.id, nombre="Zapata Ríos, Bea", rol="student", grado_id="g1", seccion="A"
    )

    como_docente = get_usuario(almacen, escenario["docente"].id)
    assert como_docente.rol == "teacher"
    assert como_docente.especialidad == "Matemáticas"

    assert get_usuario(almacen, "desconocido") is None


def test_usuario_corrupto_no_se_resuelve(almacen):
    almacen.guardar("usuario:roto", {"id": "roto", "rol": "admin"})
    assert get_usuario(almacen, "roto") is None
