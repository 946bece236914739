"""
Edición y guardado de registros de notas.

Las ediciones se validan celda por celda antes de entrar al buffer; el
guardado reemplaza los registros completos en el almacén y las vistas se
vuelven a leer desde el almacén.
"""
import logging
import math
from typing import Dict, List, Mapping, Optional

from gestion_notas.core.almacen import AlmacenClaveValor
from gestion_notas.core.calculadora import calcular_promedio_curso
from gestion_notas.crud.nota import nota
from gestion_notas.schemas.nota import (
    COMPONENTES,
    NOTA_MAXIMA,
    NOTA_MINIMA,
    UNIDADES,
    ComponenteNota,
    RegistroNotas,
)

logger = logging.getLogger(__name__)


def parsear_nota(valor: str) -> Optional[float]:
    """Número dentro de [0, 20] o None si el texto no es una nota válida"""
    try:
        numero = float(valor)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(numero) or numero < NOTA_MINIMA or numero > NOTA_MAXIMA:
        return None
    return numero


def aplicar_edicion(
    registro: RegistroNotas, unidad: str, componente: str, valor: Optional[str]
) -> RegistroNotas:
    """
    Aplicar el valor de una celda a un registro y devolver el registro resultante.

    - Texto no numérico o fuera de [0, 20]: se rechaza y se devuelve el
      registro sin cambios.
    - Texto vacío: el componente pasa a 0.
    - Una unidad con sus tres componentes en 0 vuelve a None (sin nota). Una
      nota real de 0 en los tres componentes no se distingue de "sin nota".
    """
    if unidad not in UNIDADES:
        raise ValueError(f"Unidad desconocida: {unidad}")
    if componente not in COMPONENTES:
        raise ValueError(f"Componente desconocido: {componente}")

    actual: Optional[ComponenteNota] = getattr(registro, unidad)
    texto = "" if valor is None else str(valor).strip()

    if texto == "":
        if actual is None:
            return registro
        nueva = actual.model_copy(update={componente: 0})
    else:
        numero = parsear_nota(texto)
        if numero is None:
            return registro
        nueva = (actual or ComponenteNota()).model_copy(update={componente: numero})

    if nueva.es_vacio():
        nueva = None
    return registro.model_copy(update={unidad: nueva})


def guardar_notas_editadas(
    almacen: AlmacenClaveValor, editados: Mapping[str, RegistroNotas]
) -> List[RegistroNotas]:
    """
    Escribir cada registro editado en el almacén (reemplazo completo de las
    cuatro unidades) y devolverlos releídos desde el almacén.
    """
    registros = list(editados.values())
    nota.guardar_lote(almacen, registros)
    logger.info(f"💾 {len(registros)} registros de notas guardados")

    releidos = []
    for r in registros:
        guardado = nota.get_registro(almacen, r.estudiante_id, r.curso_id)
        if guardado is not None:
            releidos.append(guardado)
    return releidos


class BufferEdicion:
    """Planilla editable de un curso: copias de sus registros hasta guardar"""

    def __init__(self, almacen: AlmacenClaveValor, curso_id: str):
        self.almacen = almacen
        self.curso_id = curso_id
        self.registros: Dict[str, RegistroNotas] = {}
        self.recargar()

    def recargar(self) -> None:
        self.registros = {r.id: r for r in nota.get_by_curso(self.almacen, self.curso_id)}

    def editar(self, registro_id: str, unidad: str, componente: str, valor: Optional[str]) -> bool:
        """True si el valor fue aceptado y cambió el registro"""
        registro = self.registros.get(registro_id)
        if registro is None:
            return False
        editado = aplicar_edicion(registro, unidad, componente, valor)
        if editado == registro:
            return False
        self.registros[registro_id] = editado
        return True

    def promedio(self, registro_id: str) -> Optional[float]:
        registro = self.registros.get(registro_id)
        return calcular_promedio_curso(registro) if registro else None

    def guardar(self) -> List[RegistroNotas]:
        guardar_notas_editadas(self.almacen, self.registros)
        self.recargar()
        return list(self.registros.values())
