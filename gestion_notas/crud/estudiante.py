import logging
from typing import Any, Dict, List, Optional, Union

from gestion_notas.core.almacen import AlmacenClaveValor
from gestion_notas.core.errores import EntidadDuplicadaError, EntidadNoEncontradaError
from gestion_notas.crud.base import CRUDBase
from gestion_notas.crud.nota import nota
from gestion_notas.schemas.estudiante import Estudiante, EstudianteCreate, EstudianteUpdate
from gestion_notas.schemas.grado import obtener_grado
from gestion_notas.utils.helpers import (
    formatear_nombre_completo,
    generar_email,
    generar_id_estudiante,
)

logger = logging.getLogger(__name__)


class CRUDEstudiante(CRUDBase[Estudiante, EstudianteCreate, EstudianteUpdate]):
    def __init__(self):
        super().__init__(Estudiante, "estudiante:", "Estudiante")

    def create(self, almacen: AlmacenClaveValor, *, obj_in: EstudianteCreate) -> Estudiante:
        if obtener_grado(obj_in.grado_id) is None:
            raise EntidadNoEncontradaError("Grado", obj_in.grado_id)

        estudiante_id = obj_in.id or generar_id_estudiante(
            obj_in.nombre,
            obj_in.apellido_paterno,
            obj_in.apellido_materno,
            obj_in.anio_ingreso,
        )
        if almacen.existe(self.clave(estudiante_id)):
            raise EntidadDuplicadaError(self.nombre_entidad, estudiante_id)

        db_obj = Estudiante(
            id=estudiante_id,
            nombre_completo=formatear_nombre_completo(
                obj_in.nombre, obj_in.apellido_paterno, obj_in.apellido_materno
            ),
            email=generar_email(estudiante_id),
            **obj_in.model_dump(exclude={"id"}),
        )
        self.save(almacen, db_obj)
        self._crear_registros(almacen, db_obj)
        return db_obj

    def _crear_registros(self, almacen: AlmacenClaveValor, db_obj: Estudiante) -> int:
        """Un registro vacío por cada curso del grado del estudiante"""
        from gestion_notas.crud.curso import curso  # Importar aquí para evitar ciclos

        cursos = curso.get_by_grado(almacen, db_obj.grado_id)
        for c in cursos:
            nota.crear_vacio(almacen, db_obj.id, c.id)
        return len(cursos)

    def update(
        self,
        almacen: AlmacenClaveValor,
        *,
        db_obj: Estudiante,
        obj_in: Union[EstudianteUpdate, Dict[str, Any]]
    ) -> Estudiante:
        update_data = obj_in if isinstance(obj_in, dict) else obj_in.model_dump(exclude_unset=True)
        if "grado_id" in update_data and obtener_grado(update_data["grado_id"]) is None:
            raise EntidadNoEncontradaError("Grado", update_data["grado_id"])

        actualizado = super().update(almacen, db_obj=db_obj, obj_in=update_data)
        nombre_completo = formatear_nombre_completo(
            actualizado.nombre, actualizado.apellido_paterno, actualizado.apellido_materno
        )
        if nombre_completo != actualizado.nombre_completo:
            actualizado = self.save(
                almacen, actualizado.model_copy(update={"nombre_completo": nombre_completo})
            )

        # Cambio de grado: los registros del grado anterior dejan de aplicar
        if actualizado.grado_id != db_obj.grado_id:
            nota.remove_by_estudiante(almacen, actualizado.id)
            self._crear_registros(almacen, actualizado)
            logger.info(
                f"🔄 Estudiante {actualizado.id} movido de {db_obj.grado_id} a {actualizado.grado_id}"
            )
        return actualizado

    def remove(self, almacen: AlmacenClaveValor, *, id: str) -> Optional[Estudiante]:
        obj = super().remove(almacen, id=id)
        borrados = nota.remove_by_estudiante(almacen, id)
        logger.info(f"🗑️ Estudiante {id} eliminado junto a {borrados} registros de notas")
        return obj

    def get_by_grado(self, almacen: AlmacenClaveValor, grado_id: str) -> List[Estudiante]:
        return [e for e in self.get_multi(almacen) if e.grado_id == grado_id]

    def get_by_grado_seccion(
        self, almacen: AlmacenClaveValor, grado_id: str, seccion: str
    ) -> List[Estudiante]:
        return [
            e for e in self.get_by_grado(almacen, grado_id) if e.seccion == seccion
        ]


estudiante = CRUDEstudiante()
