import logging
import re
from typing import List

from gestion_notas.core.almacen import AlmacenClaveValor
from gestion_notas.core.errores import EntidadDuplicadaError, EntidadNoEncontradaError
from gestion_notas.crud.base import CRUDBase
from gestion_notas.crud.nota import nota
from gestion_notas.schemas.curso import Curso, CursoCreate, CursoUpdate
from gestion_notas.schemas.estudiante import Estudiante
from gestion_notas.schemas.grado import obtener_grado

logger = logging.getLogger(__name__)


class CRUDCurso(CRUDBase[Curso, CursoCreate, CursoUpdate]):
    def __init__(self):
        super().__init__(Curso, "curso:", "Curso")

    def _siguiente_id(self, almacen: AlmacenClaveValor) -> str:
        numeros = []
        for c in self.get_multi(almacen):
            match = re.fullmatch(r"c(\d+)", c.id)
            if match:
                numeros.append(int(match.group(1)))
        return f"c{max(numeros, default=0) + 1}"

    def create(self, almacen: AlmacenClaveValor, *, obj_in: CursoCreate) -> Curso:
        if obtener_grado(obj_in.grado_id) is None:
            raise EntidadNoEncontradaError("Grado", obj_in.grado_id)

        db_obj = Curso(
            id=obj_in.id or self._siguiente_id(almacen),
            nombre=obj_in.nombre,
            grado_id=obj_in.grado_id,
            docente_id=obj_in.docente_id,
        )
        if almacen.existe(self.clave(db_obj.id)):
            raise EntidadDuplicadaError(self.nombre_entidad, db_obj.id)
        self.save(almacen, db_obj)

        # Crear registros de calificaciones para todos los estudiantes del grado
        estudiantes = self.get_estudiantes(almacen, db_obj.id)
        for e in estudiantes:
            nota.crear_vacio(almacen, e.id, db_obj.id)

        logger.info(
            f"📚 Curso {db_obj.id} creado con {len(estudiantes)} registros de notas"
        )
        return db_obj

    def remove(self, almacen: AlmacenClaveValor, *, id: str):
        obj = super().remove(almacen, id=id)
        borrados = nota.remove_by_curso(almacen, id)
        logger.info(f"🗑️ Curso {id} eliminado junto a {borrados} registros de notas")
        return obj

    def get_by_grado(self, almacen: AlmacenClaveValor, grado_id: str) -> List[Curso]:
        return [c for c in self.get_multi(almacen) if c.grado_id == grado_id]

    def get_by_docente(self, almacen: AlmacenClaveValor, docente_id: str) -> List[Curso]:
        return [c for c in self.get_multi(almacen) if c.docente_id == docente_id]

    def get_estudiantes(self, almacen: AlmacenClaveValor, curso_id: str) -> List[Estudiante]:
        """Estudiantes del grado al que pertenece el curso"""
        from gestion_notas.crud.estudiante import estudiante  # Importar aquí para evitar ciclos

        db_obj = self.get(almacen, curso_id)
        if not db_obj:
            return []
        return estudiante.get_by_grado(almacen, db_obj.grado_id)


curso = CRUDCurso()
