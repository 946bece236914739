import logging

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, declarative_base
from sqlalchemy.pool import StaticPool

from .settings import Settings, settings

logger = logging.getLogger(__name__)

Base = declarative_base()


def crear_engine(config: Settings = settings, url: str = None) -> Engine:
    """Crear el motor según la URL configurada (SQLite o PostgreSQL)"""
    url = url or config.database_url_sync

    if url.startswith("sqlite"):
        kwargs = {"connect_args": {"check_same_thread": False}}
        if url in ("sqlite://", "sqlite:///:memory:"):
            # Una sola conexión compartida para que la base en memoria persista
            kwargs["poolclass"] = StaticPool
        return create_engine(url, echo=config.debug, **kwargs)

    return create_engine(
        url,
        echo=config.debug,
        pool_pre_ping=True,
        pool_recycle=3600,
        pool_size=10,
        max_overflow=20,
        pool_timeout=30,
        connect_args={"options": "-c default_transaction_isolation=read_committed"},
    )


def crear_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(
        bind=engine, autocommit=False, autoflush=True, expire_on_commit=False
    )


def verificar_conexion(engine: Engine) -> bool:
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        logger.info("✅ Conexión a base de datos verificada")
        return True
    except Exception as e:
        logger.error(f"❌ No se pudo conectar a la base de datos: {e}")
        return False


def init_db(engine: Engine):
    # Registrar las tablas en Base.metadata
    from gestion_notas import models  # noqa: F401

    Base.metadata.create_all(bind=engine)
    logger.info("📊 Tablas del almacén inicializadas")

