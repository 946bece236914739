from typing import List

from gestion_notas.core.almacen import AlmacenClaveValor
from gestion_notas.core.errores import EntidadDuplicadaError
from gestion_notas.crud.base import CRUDBase
from gestion_notas.schemas.docente import Docente, DocenteCreate, DocenteUpdate
from gestion_notas.utils.helpers import (
    formatear_nombre_completo,
    generar_email,
    generar_id_docente,
    quitar_tildes,
)


class CRUDDocente(CRUDBase[Docente, DocenteCreate, DocenteUpdate]):
    def __init__(self):
        super().__init__(Docente, "docente:", "Docente")

    def create(self, almacen: AlmacenClaveValor, *, obj_in: DocenteCreate) -> Docente:
        docente_id = obj_in.id
        if not docente_id:
            secuencia = self.count(almacen) + 1
            docente_id = generar_id_docente(
                obj_in.nombre, obj_in.apellido_paterno, obj_in.apellido_materno, secuencia
            )
            while almacen.existe(self.clave(docente_id)):
                secuencia += 1
                docente_id = generar_id_docente(
                    obj_in.nombre, obj_in.apellido_paterno, obj_in.apellido_materno, secuencia
                )
        elif almacen.existe(self.clave(docente_id)):
            raise EntidadDuplicadaError(self.nombre_entidad, docente_id)

        db_obj = Docente(
            id=docente_id,
            nombre_completo=formatear_nombre_completo(
                obj_in.nombre, obj_in.apellido_paterno, obj_in.apellido_materno
            ),
            email=generar_email(docente_id),
            **obj_in.model_dump(exclude={"id"}),
        )
        return self.save(almacen, db_obj)

    def update(self, almacen: AlmacenClaveValor, *, db_obj: Docente, obj_in) -> Docente:
        actualizado = super().update(almacen, db_obj=db_obj, obj_in=obj_in)
        nombre_completo = formatear_nombre_completo(
            actualizado.nombre, actualizado.apellido_paterno, actualizado.apellido_materno
        )
        if nombre_completo == actualizado.nombre_completo:
            return actualizado
        return self.save(
            almacen, actualizado.model_copy(update={"nombre_completo": nombre_completo})
        )

    def search_by_name(self, almacen: AlmacenClaveValor, name: str) -> List[Docente]:
        buscado = quitar_tildes(name).casefold()
        return [
            d
            for d in self.get_multi(almacen)
            if buscado in quitar_tildes(d.nombre_completo).casefold()
        ]


docente = CRUDDocente()
