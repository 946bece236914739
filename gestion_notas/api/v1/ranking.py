from fastapi import APIRouter, Depends, HTTPException

from gestion_notas.api.deps import get_almacen, get_current_user
from gestion_notas.core.almacen import AlmacenClaveValor
from gestion_notas.core.ranking import ranking_por_seccion
from gestion_notas.schemas.grado import SECCIONES, obtener_grado

router = APIRouter()


@router.get("/{grado_id}/{seccion}")
def get_ranking_seccion(
    grado_id: str,
    seccion: str,
    almacen: AlmacenClaveValor = Depends(get_almacen),
    current_user=Depends(get_current_user),
):
    """Ranking de mérito de una sección, recalculado en cada consulta"""
    grado = obtener_grado(grado_id)
    if grado is None:
        raise HTTPException(status_code=404, detail="Grado no encontrado")
    if seccion not in SECCIONES:
        raise HTTPException(status_code=404, detail="Sección no encontrada")

    ranking = ranking_por_seccion(almacen, grado_id, seccion)
    return {
        "grado": grado.nombre,
        "seccion": seccion,
        "data": [entrada.to_dict() for entrada in ranking],
        "total": len(ranking),
    }
