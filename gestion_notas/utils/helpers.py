import unicodedata
from typing import Any, Dict, Iterable, Optional

DOMINIO_EMAIL = "escuela.com"


def quitar_tildes(texto: str) -> str:
    """'Fernández' -> 'Fernandez', 'Ñuñez' -> 'Nunez'"""
    descompuesto = unicodedata.normalize("NFD", texto)
    return "".join(c for c in descompuesto if not unicodedata.combining(c))


def formatear_nombre_completo(
    nombre: str, apellido_paterno: str, apellido_materno: str
) -> str:
    """Formato de listas: "Apellidos, Nombres" """
    return f"{apellido_paterno.strip()} {apellido_materno.strip()}, {nombre.strip()}"


def _compacto(texto: str) -> str:
    return quitar_tildes("".join(texto.split()))


def generar_id_estudiante(
    nombre: str, apellido_paterno: str, apellido_materno: str, anio_ingreso: int
) -> str:
    """
    Inicial del primer nombre + último nombre + apellido paterno + inicial del
    materno + año de ingreso: "Ana Sofía Fernández Torres" (2024) ->
    "ASofiaFernandezT2024".
    """
    nombres = nombre.split()
    inicial = quitar_tildes(nombres[0][0]).upper()
    inicial_materno = quitar_tildes(apellido_materno.strip()[0]).upper()
    return (
        f"{inicial}{_compacto(nombres[-1])}{_compacto(apellido_paterno)}"
        f"{inicial_materno}{anio_ingreso}"
    )


def generar_id_docente(
    nombre: str, apellido_paterno: str, apellido_materno: str, secuencia: int
) -> str:
    """"Carlos Méndez Rodríguez" (1) -> "CMendezR01" """
    inicial = quitar_tildes(nombre.strip()[0]).upper()
    inicial_materno = quitar_tildes(apellido_materno.strip()[0]).upper()
    return f"{inicial}{_compacto(apellido_paterno)}{inicial_materno}{secuencia:02d}"


def generar_email(id: str) -> str:
    return f"{id}@{DOMINIO_EMAIL}"


def existe_nombre_duplicado(
    nombre_completo: str, personas: Iterable[Any], excluir_id: Optional[str] = None
) -> bool:
    """Validar nombres duplicados (sin distinguir mayúsculas) entre estudiantes y docentes"""
    buscado = nombre_completo.casefold()
    return any(
        p.id != excluir_id and p.nombre_completo.casefold() == buscado
        for p in personas
    )


class ResponseFormatter:
    """Formateador de respuestas estándar"""

    @staticmethod
    def success(data: Any, message: str = "Operación exitosa") -> Dict[str, Any]:
        return {"success": True, "message": message, "data": data}
