"""
Ranking de mérito por grado y sección.

Se recalcula desde el almacén en cada llamada; no hay caché. El promedio de
un estudiante solo considera los cursos de su grado y cada curso aporta solo
si tiene sus cuatro unidades.
"""
from dataclasses import dataclass
from typing import Dict, List, Optional

from gestion_notas.core.almacen import AlmacenClaveValor
from gestion_notas.core.calculadora import calcular_promedio_general
from gestion_notas.crud.curso import curso
from gestion_notas.crud.estudiante import estudiante
from gestion_notas.crud.nota import nota
from gestion_notas.schemas.curso import Curso
from gestion_notas.schemas.estudiante import Estudiante
from gestion_notas.schemas.nota import RegistroNotas


@dataclass
class EntradaRanking:
    ranking: int
    estudiante: Estudiante
    promedio: float

    def to_dict(self):
        return {
            "ranking": self.ranking,
            "estudiante": self.estudiante.model_dump(),
            "promedio": self.promedio,
        }


def _registros_del_grado(
    registros: List[RegistroNotas], cursos_del_grado: Dict[str, Curso]
) -> List[RegistroNotas]:
    # Registros de cursos eliminados o de otros grados no cuentan
    return [r for r in registros if r.curso_id in cursos_del_grado]


def calcular_promedio_estudiante(
    almacen: AlmacenClaveValor, estudiante_id: str, grado_id: str
) -> Optional[float]:
    cursos_del_grado = {c.id: c for c in curso.get_by_grado(almacen, grado_id)}
    registros = nota.get_by_estudiante(almacen, estudiante_id)
    return calcular_promedio_general(_registros_del_grado(registros, cursos_del_grado))


def ranking_por_seccion(
    almacen: AlmacenClaveValor, grado_id: str, seccion: str
) -> List[EntradaRanking]:
    cursos_del_grado = {c.id: c for c in curso.get_by_grado(almacen, grado_id)}
    companeros = estudiante.get_by_grado_seccion(almacen, grado_id, seccion)

    promedios = []
    for e in companeros:
        registros = nota.get_by_estudiante(almacen, e.id)
        promedio = calcular_promedio_general(
            _registros_del_grado(registros, cursos_del_grado)
        )
        if promedio is not None:
            promedios.append((e, promedio))

    # sorted es estable: a igual promedio se conserva el orden del almacén
    promedios.sort(key=lambda item: item[1], reverse=True)

    return [
        EntradaRanking(ranking=posicion, estudiante=e, promedio=promedio)
        for posicion, (e, promedio) in enumerate(promedios, start=1)
    ]


def obtener_ranking_estudiante(
    almacen: AlmacenClaveValor, estudiante_id: str, grado_id: str, seccion: str
) -> Optional[int]:
    for entrada in ranking_por_seccion(almacen, grado_id, seccion):
        if entrada.estudiante.id == estudiante_id:
            return entrada.ranking
    return None
