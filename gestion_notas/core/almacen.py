"""
Almacén clave/valor sobre el que se guardan estudiantes, docentes, cursos y
registros de notas.

Las claves son cadenas estructuradas (``estudiante:<id>``,
``nota:<estudiante_id>:<curso_id>``...) y los valores diccionarios JSON.
Todas las implementaciones devuelven los valores de un escaneo por prefijo en
orden de primera inserción; sobrescribir una clave conserva su posición.
"""
import copy
import json
import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, Iterable, List, Optional, Tuple

import redis
from sqlalchemy.orm import sessionmaker

from gestion_notas.config.settings import Settings, settings
from gestion_notas.core.errores import AlmacenCorruptoError
from gestion_notas.models.entrada import EntradaAlmacen

logger = logging.getLogger(__name__)


class AlmacenClaveValor(ABC):
    """Interfaz del almacén: get/set/delete por clave y escaneo por prefijo"""

    @abstractmethod
    def obtener(self, clave: str) -> Optional[Dict[str, Any]]:
        ...

    @abstractmethod
    def guardar(self, clave: str, valor: Dict[str, Any]) -> None:
        ...

    @abstractmethod
    def eliminar(self, clave: str) -> bool:
        ...

    @abstractmethod
    def escanear_prefijo(self, prefijo: str) -> List[Dict[str, Any]]:
        ...

    @abstractmethod
    def limpiar(self) -> None:
        ...

    def guardar_varios(self, entradas: Dict[str, Dict[str, Any]]) -> None:
        for clave, valor in entradas.items():
            self.guardar(clave, valor)

    def contar_prefijo(self, prefijo: str) -> int:
        return len(self.escanear_prefijo(prefijo))

    def existe(self, clave: str) -> bool:
        return self.obtener(clave) is not None


class AlmacenMemoria(AlmacenClaveValor):
    """Implementación de referencia en memoria (un proceso, un escritor)"""

    def __init__(self):
        self._datos: Dict[str, Dict[str, Any]] = {}

    def obtener(self, clave: str) -> Optional[Dict[str, Any]]:
        valor = self._datos.get(clave)
        return copy.deepcopy(valor) if valor is not None else None

    def guardar(self, clave: str, valor: Dict[str, Any]) -> None:
        self._datos[clave] = copy.deepcopy(valor)

    def eliminar(self, clave: str) -> bool:
        return self._datos.pop(clave, None) is not None

    def escanear_prefijo(self, prefijo: str) -> List[Dict[str, Any]]:
        return [
            copy.deepcopy(valor)
            for clave, valor in self._datos.items()
            if clave.startswith(prefijo)
        ]

    def limpiar(self) -> None:
        self._datos.clear()


class AlmacenSerializado(AlmacenClaveValor):
    """Base para almacenes que guardan los valores como texto JSON"""

    @abstractmethod
    def _leer(self, clave: str) -> Optional[str]:
        ...

    @abstractmethod
    def _escribir(self, clave: str, texto: str) -> None:
        ...

    @abstractmethod
    def _borrar(self, clave: str) -> bool:
        ...

    @abstractmethod
    def _escanear(self, prefijo: str) -> List[Tuple[str, str]]:
        ...

    @staticmethod
    def _codificar(valor: Dict[str, Any]) -> str:
        return json.dumps(valor, ensure_ascii=False)

    @staticmethod
    def _decodificar(clave: str, texto: str) -> Dict[str, Any]:
        try:
            valor = json.loads(texto)
        except (TypeError, ValueError) as e:
            raise AlmacenCorruptoError(clave, str(e)) from e
        if not isinstance(valor, dict):
            raise AlmacenCorruptoError(clave, f"se esperaba un objeto, no {type(valor).__name__}")
        return valor

    def obtener(self, clave: str) -> Optional[Dict[str, Any]]:
        texto = self._leer(clave)
        if texto is None:
            return None
        return self._decodificar(clave, texto)

    def guardar(self, clave: str, valor: Dict[str, Any]) -> None:
        self._escribir(clave, self._codificar(valor))

    def eliminar(self, clave: str) -> bool:
        return self._borrar(clave)

    def escanear_prefijo(self, prefijo: str) -> List[Dict[str, Any]]:
        return [self._decodificar(clave, texto) for clave, texto in self._escanear(prefijo)]


class AlmacenSQL(AlmacenSerializado):
    """Almacén sobre una tabla SQLAlchemy (SQLite o PostgreSQL)"""

    def __init__(self, session_factory: sessionmaker):
        self.session_factory = session_factory

    def _leer(self, clave: str) -> Optional[str]:
        with self.session_factory() as db:
            entrada = (
                db.query(EntradaAlmacen).filter(EntradaAlmacen.clave == clave).first()
            )
            return entrada.valor if entrada else None

    def _upsert(self, db, clave: str, texto: str) -> None:
        entrada = db.query(EntradaAlmacen).filter(EntradaAlmacen.clave == clave).first()
        if entrada:
            entrada.valor = texto
        else:
            db.add(EntradaAlmacen(clave=clave, valor=texto))
            db.flush()

    def _escribir(self, clave: str, texto: str) -> None:
        self._escribir_lote([(clave, texto)])

    def _escribir_lote(self, pares: Iterable[Tuple[str, str]]) -> None:
        with self.session_factory() as db:
            try:
                for clave, texto in pares:
                    self._upsert(db, clave, texto)
                db.commit()
            except Exception:
                db.rollback()
                raise

    def guardar_varios(self, entradas: Dict[str, Dict[str, Any]]) -> None:
        self._escribir_lote(
            (clave, self._codificar(valor)) for clave, valor in entradas.items()
        )

    def _borrar(self, clave: str) -> bool:
        with self.session_factory() as db:
            try:
                borradas = (
                    db.query(EntradaAlmacen)
                    .filter(EntradaAlmacen.clave == clave)
                    .delete(synchronize_session=False)
                )
                db.commit()
                return borradas > 0
            except Exception:
                db.rollback()
                raise

    def _escanear(self, prefijo: str) -> List[Tuple[str, str]]:
        with self.session_factory() as db:
            entradas = (
                db.query(EntradaAlmacen)
                .filter(EntradaAlmacen.clave.startswith(prefijo, autoescape=True))
                .order_by(EntradaAlmacen.posicion)
                .all()
            )
            return [(e.clave, e.valor) for e in entradas]

    def limpiar(self) -> None:
        with self.session_factory() as db:
            try:
                db.query(EntradaAlmacen).delete(synchronize_session=False)
                db.commit()
            except Exception:
                db.rollback()
                raise


class AlmacenRedis(AlmacenSerializado):
    """
    Almacén sobre Redis. Cada valor vive en una clave string y un sorted set
    guarda el orden de inserción (score = contador incremental).
    """

    def __init__(self, redis_client: redis.Redis, prefijo: str = "gestion_notas"):
        self.redis_client = redis_client
        self.prefijo = prefijo

        # Claves Redis
        self.INDICE_KEY = f"{prefijo}:__indice__"
        self.CONTADOR_KEY = f"{prefijo}:__contador__"

    @classmethod
    def desde_url(
        cls,
        redis_url: str,
        password: Optional[str] = None,
        db: int = 0,
        prefijo: str = "gestion_notas",
    ) -> "AlmacenRedis":
        cliente = redis.from_url(
            redis_url, password=password, db=db, decode_responses=True
        )
        return cls(cliente, prefijo=prefijo)

    def _k(self, clave: str) -> str:
        return f"{self.prefijo}:{clave}"

    def _leer(self, clave: str) -> Optional[str]:
        return self.redis_client.get(self._k(clave))

    def _escribir(self, clave: str, texto: str) -> None:
        pipe = self.redis_client.pipeline()
        if self.redis_client.zscore(self.INDICE_KEY, clave) is None:
            posicion = self.redis_client.incr(self.CONTADOR_KEY)
            pipe.zadd(self.INDICE_KEY, {clave: posicion})
        pipe.set(self._k(clave), texto)
        pipe.execute()

    def _borrar(self, clave: str) -> bool:
        pipe = self.redis_client.pipeline()
        pipe.delete(self._k(clave))
        pipe.zrem(self.INDICE_KEY, clave)
        borradas, _ = pipe.execute()
        return borradas > 0

    def _escanear(self, prefijo: str) -> List[Tuple[str, str]]:
        claves = [
            c for c in self.redis_client.zrange(self.INDICE_KEY, 0, -1)
            if c.startswith(prefijo)
        ]
        if not claves:
            return []
        textos = self.redis_client.mget([self._k(c) for c in claves])
        return [(c, t) for c, t in zip(claves, textos) if t is not None]

    def limpiar(self) -> None:
        claves = self.redis_client.zrange(self.INDICE_KEY, 0, -1)
        pipe = self.redis_client.pipeline()
        for clave in claves:
            pipe.delete(self._k(clave))
        pipe.delete(self.INDICE_KEY, self.CONTADOR_KEY)
        pipe.execute()


def crear_almacen(config: Settings = settings) -> AlmacenClaveValor:
    """Construir el almacén indicado por `store_backend`"""
    backend = config.store_backend.lower()

    if backend == "memory":
        logger.info("🗄️ Usando almacén en memoria")
        return AlmacenMemoria()

    if backend == "sql":
        from gestion_notas.config.database import (
            crear_engine,
            crear_session_factory,
            init_db,
            verificar_conexion,
        )

        engine = crear_engine(config)
        if not verificar_conexion(engine):
            raise ConnectionError(f"Base de datos no disponible: {config.database_url}")
        init_db(engine)
        logger.info("🗄️ Usando almacén SQL")
        return AlmacenSQL(crear_session_factory(engine))

    if backend == "redis":
        almacen = AlmacenRedis.desde_url(
            config.redis_url,
            password=config.redis_password,
            db=config.redis_db,
            prefijo=config.redis_key_prefix,
        )
        almacen.redis_client.ping()
        logger.info("🔴 Usando almacén Redis")
        return almacen

    raise ValueError(f"Backend de almacén desconocido: {config.store_backend}")
