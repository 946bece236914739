"""
Cálculo de notas en escala vigesimal (0-20).

Nota de unidad = tareas * 0.30 + conceptual * 0.30 + examenes * 0.40,
redondeada a un decimal con redondeo "half-up". El promedio de un curso solo
existe cuando las cuatro unidades tienen nota; no se muestran promedios
parciales.
"""
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, Mapping, Optional, Union

from gestion_notas.schemas.nota import (
    COMPONENTES,
    PESOS,
    UNIDADES,
    ComponenteNota,
    RegistroNotas,
)

NOTA_APROBATORIA = 11

_PESOS_DECIMALES = {componente: Decimal(str(peso)) for componente, peso in PESOS.items()}
_UN_DECIMAL = Decimal("0.1")


def _a_decimal(valor: Union[int, float, Decimal]) -> Decimal:
    if isinstance(valor, Decimal):
        return valor
    return Decimal(str(valor))


def redondear_media_arriba(valor: Union[int, float, Decimal]) -> float:
    return float(_a_decimal(valor).quantize(_UN_DECIMAL, rounding=ROUND_HALF_UP))


def calcular_nota_unidad(
    componentes: Union[ComponenteNota, Mapping[str, float], None],
) -> float:
    """Nota final de una unidad a partir de sus tres componentes ponderados"""
    if componentes is None:
        componentes = {}
    if isinstance(componentes, ComponenteNota):
        componentes = componentes.model_dump()

    total = sum(
        _a_decimal(componentes.get(componente) or 0) * _PESOS_DECIMALES[componente]
        for componente in COMPONENTES
    )
    return redondear_media_arriba(total)


def promedio_redondeado(valores: Iterable[Optional[float]]) -> Optional[float]:
    """Media de los valores no nulos; None si no hay ninguno"""
    presentes = [_a_decimal(v) for v in valores if v is not None]
    if not presentes:
        return None
    return redondear_media_arriba(sum(presentes) / len(presentes))


def _media_curso(registro: RegistroNotas) -> Optional[Decimal]:
    unidades = [u for u in registro.unidades() if u is not None]

    # Solo hay promedio si están las 4 unidades
    if len(unidades) != 4:
        return None

    return sum(_a_decimal(calcular_nota_unidad(u)) for u in unidades) / 4


def calcular_promedio_curso(registro: RegistroNotas) -> Optional[float]:
    media = _media_curso(registro)
    return redondear_media_arriba(media) if media is not None else None


def calcular_promedio_general(registros: Iterable[RegistroNotas]) -> Optional[float]:
    """
    Promedio de los cursos con las 4 unidades. Se promedian las medias sin
    redondear y solo se redondea el resultado final.
    """
    return promedio_redondeado(_media_curso(r) for r in registros)


def notas_por_unidad(registro: RegistroNotas) -> dict:
    return {
        unidad: (calcular_nota_unidad(componente) if componente is not None else None)
        for unidad, componente in zip(UNIDADES, registro.unidades())
    }


def esta_aprobado(nota: Optional[float]) -> bool:
    return nota is not None and nota >= NOTA_APROBATORIA


def nivel_logro(nota: float) -> str:
    if nota >= 18:
        return "destacado"
    if nota >= 14:
        return "bueno"
    if nota >= NOTA_APROBATORIA:
        return "aprobado"
    return "desaprobado"
