"""
Ordenamiento de listas de estudiantes: alfabético con colación española y
por mérito (promedio del curso).
"""
import unicodedata
from typing import Iterable, List, Optional, Sequence, Tuple, TypeVar

from gestion_notas.core.calculadora import calcular_promedio_curso
from gestion_notas.schemas.estudiante import Estudiante
from gestion_notas.schemas.nota import RegistroNotas

T = TypeVar("T")

_TILDE = "\u0303"  # virgulilla combinante de la "ñ"


def _segmentos(texto: str) -> Iterable[Tuple[str, str]]:
    """Pares (carácter base, marcas diacríticas) de la forma NFD del texto"""
    base = None
    marcas = ""
    for c in unicodedata.normalize("NFD", texto):
        if unicodedata.combining(c) and base is not None:
            marcas += c
            continue
        if base is not None:
            yield base, marcas
        base, marcas = c, ""
    if base is not None:
        yield base, marcas


def clave_colacion_es(texto: str) -> tuple:
    """
    Clave de orden según la colación española:

    1. letras sin distinguir tildes ni mayúsculas, con la "ñ" como letra
       propia entre "n" y "o";
    2. a igualdad, la palabra sin tilde va antes que la acentuada;
    3. luego minúsculas antes que mayúsculas.
    """
    primario, secundario, terciario = [], [], []
    for base, marcas in _segmentos(texto):
        letra = base.casefold()
        peso = ord(letra[0]) * 2
        if letra == "n" and _TILDE in marcas:
            peso += 1
            marcas = marcas.replace(_TILDE, "", 1)
        primario.append(peso)
        secundario.append(tuple(ord(m) for m in marcas))
        terciario.append(0 if base == letra else 1)
    return tuple(primario), tuple(secundario), tuple(terciario), texto


def ordenar_por_nombre(items: Iterable[T], atributo: str = "nombre_completo") -> List[T]:
    return sorted(items, key=lambda item: clave_colacion_es(getattr(item, atributo) or ""))


def ordenar_por_apellido(estudiantes: Iterable[Estudiante]) -> List[Estudiante]:
    """Los estudiantes ya tienen formato "Apellidos, Nombres" """
    return ordenar_por_nombre(estudiantes, "nombre_completo")


def filtrar_y_ordenar(
    estudiantes: Iterable[Estudiante],
    seccion: Optional[str] = None,
    por_merito: bool = False,
    notas_curso: Sequence[RegistroNotas] = (),
) -> List[Estudiante]:
    filtrados = list(estudiantes)
    if seccion and seccion != "all":
        filtrados = [e for e in filtrados if e.seccion == seccion]

    if not por_merito:
        return ordenar_por_apellido(filtrados)

    registros = {}
    for r in notas_curso:
        registros.setdefault(r.estudiante_id, r)

    def clave_merito(e: Estudiante):
        registro = registros.get(e.id)
        promedio = calcular_promedio_curso(registro) if registro else None
        # Mayor a menor; los que no tienen promedio al final
        return (promedio is None, -(promedio or 0))

    return sorted(filtrados, key=clave_merito)
