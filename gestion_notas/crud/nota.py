from typing import Iterable, List, Optional

from gestion_notas.core.almacen import AlmacenClaveValor
from gestion_notas.crud.base import CRUDBase
from gestion_notas.schemas.nota import (
    RegistroNotas,
    RegistroNotasBase,
    RegistroNotasUpdate,
)


class CRUDRegistroNotas(CRUDBase[RegistroNotas, RegistroNotasBase, RegistroNotasUpdate]):
    """Registros de notas bajo `nota:<estudiante_id>:<curso_id>`"""

    def __init__(self):
        super().__init__(RegistroNotas, "nota:", "Registro de notas")

    def clave_registro(self, estudiante_id: str, curso_id: str) -> str:
        return f"{self.prefijo}{estudiante_id}:{curso_id}"

    def clave_de(self, db_obj: RegistroNotas) -> str:
        return self.clave_registro(db_obj.estudiante_id, db_obj.curso_id)

    def get(self, almacen: AlmacenClaveValor, id: str) -> Optional[RegistroNotas]:
        # El id "<estudiante>-<curso>" no identifica la clave sin ambigüedad
        return next((r for r in self.get_multi(almacen) if r.id == id), None)

    def get_registro(
        self, almacen: AlmacenClaveValor, estudiante_id: str, curso_id: str
    ) -> Optional[RegistroNotas]:
        return self._leer(almacen, self.clave_registro(estudiante_id, curso_id))

    def get_by_estudiante(
        self, almacen: AlmacenClaveValor, estudiante_id: str, curso_id: str = None
    ) -> List[RegistroNotas]:
        registros = self._escanear(almacen, f"{self.prefijo}{estudiante_id}:")
        if curso_id:
            return [r for r in registros if r.curso_id == curso_id]
        return registros

    def get_by_curso(self, almacen: AlmacenClaveValor, curso_id: str) -> List[RegistroNotas]:
        return [r for r in self.get_multi(almacen) if r.curso_id == curso_id]

    def crear_vacio(
        self, almacen: AlmacenClaveValor, estudiante_id: str, curso_id: str
    ) -> RegistroNotas:
        """Registro sin unidades; no sobrescribe uno existente"""
        existente = self.get_registro(almacen, estudiante_id, curso_id)
        if existente:
            return existente
        return self.save(almacen, RegistroNotas.vacio(estudiante_id, curso_id))

    def guardar_lote(
        self, almacen: AlmacenClaveValor, registros: Iterable[RegistroNotas]
    ) -> None:
        almacen.guardar_varios(
            {self.clave_de(r): r.model_dump(mode="json") for r in registros}
        )

    def remove_registro(
        self, almacen: AlmacenClaveValor, estudiante_id: str, curso_id: str
    ) -> bool:
        return almacen.eliminar(self.clave_registro(estudiante_id, curso_id))

    def remove_by_estudiante(self, almacen: AlmacenClaveValor, estudiante_id: str) -> int:
        registros = self.get_by_estudiante(almacen, estudiante_id)
        for r in registros:
            self.remove_registro(almacen, r.estudiante_id, r.curso_id)
        return len(registros)

    def remove_by_curso(self, almacen: AlmacenClaveValor, curso_id: str) -> int:
        registros = self.get_by_curso(almacen, curso_id)
        for r in registros:
            self.remove_registro(almacen, r.estudiante_id, r.curso_id)
        return len(registros)


nota = CRUDRegistroNotas()
