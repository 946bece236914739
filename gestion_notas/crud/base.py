import logging
from typing import Any, Dict, Generic, List, Optional, Type, TypeVar, Union

from pydantic import BaseModel, ValidationError

from gestion_notas.core.almacen import AlmacenClaveValor
from gestion_notas.core.errores import AlmacenCorruptoError, EntidadDuplicadaError

logger = logging.getLogger(__name__)

ModelType = TypeVar("ModelType", bound=BaseModel)
CreateSchemaType = TypeVar("CreateSchemaType", bound=BaseModel)
UpdateSchemaType = TypeVar("UpdateSchemaType", bound=BaseModel)


class CRUDBase(Generic[ModelType, CreateSchemaType, UpdateSchemaType]):
    def __init__(self, model: Type[ModelType], prefijo: str, nombre_entidad: str = None):
        """
        Objeto CRUD con métodos por defecto para Create, Read, Update, Delete (CRUD)
        sobre las claves `<prefijo><id>` del almacén.

        Un almacén corrupto se trata como vacío: se registra el error y las
        lecturas devuelven None o una lista vacía.
        """
        self.model = model
        self.prefijo = prefijo
        self.nombre_entidad = nombre_entidad or model.__name__

    def clave(self, id: str) -> str:
        return f"{self.prefijo}{id}"

    def clave_de(self, db_obj: ModelType) -> str:
        return self.clave(db_obj.id)

    def _escanear(self, almacen: AlmacenClaveValor, prefijo: str) -> List[ModelType]:
        try:
            return [self.model.model_validate(v) for v in almacen.escanear_prefijo(prefijo)]
        except (AlmacenCorruptoError, ValidationError) as e:
            logger.error(f"❌ Datos ilegibles bajo '{prefijo}', se tratan como vacíos: {e}")
            return []

    def _leer(self, almacen: AlmacenClaveValor, clave: str) -> Optional[ModelType]:
        try:
            datos = almacen.obtener(clave)
            return self.model.model_validate(datos) if datos is not None else None
        except (AlmacenCorruptoError, ValidationError) as e:
            logger.error(f"❌ {self.nombre_entidad} '{clave}' ilegible: {e}")
            return None

    def get(self, almacen: AlmacenClaveValor, id: str) -> Optional[ModelType]:
        return self._leer(almacen, self.clave(id))

    def get_multi(
        self, almacen: AlmacenClaveValor, *, skip: int = 0, limit: Optional[int] = None
    ) -> List[ModelType]:
        objetos = self._escanear(almacen, self.prefijo)
        if limit is None:
            return objetos[skip:]
        return objetos[skip : skip + limit]

    def save(self, almacen: AlmacenClaveValor, db_obj: ModelType) -> ModelType:
        almacen.guardar(self.clave_de(db_obj), db_obj.model_dump(mode="json"))
        return db_obj

    def create(self, almacen: AlmacenClaveValor, *, obj_in: CreateSchemaType) -> ModelType:
        db_obj = self.model.model_validate(obj_in.model_dump())
        if almacen.existe(self.clave_de(db_obj)):
            raise EntidadDuplicadaError(self.nombre_entidad, db_obj.id)
        return self.save(almacen, db_obj)

    def update(
        self,
        almacen: AlmacenClaveValor,
        *,
        db_obj: ModelType,
        obj_in: Union[UpdateSchemaType, Dict[str, Any]]
    ) -> ModelType:
        if isinstance(obj_in, dict):
            update_data = obj_in
        else:
            update_data = obj_in.model_dump(exclude_unset=True)

        obj_data = db_obj.model_dump()
        for field in obj_data:
            if field in update_data and field != "id":
                obj_data[field] = update_data[field]

        return self.save(almacen, self.model.model_validate(obj_data))

    def remove(self, almacen: AlmacenClaveValor, *, id: str) -> Optional[ModelType]:
        obj = self.get(almacen, id)
        almacen.eliminar(self.clave(id))
        return obj

    def count(self, almacen: AlmacenClaveValor) -> int:
        return len(self.get_multi(almacen))
