import logging
from contextlib import asynccontextmanager
from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware

from gestion_notas import __version__
from gestion_notas.api.deps import get_almacen
from gestion_notas.api.v1.router import api_router
from gestion_notas.config.settings import settings
from gestion_notas.core.almacen import AlmacenClaveValor, crear_almacen
from gestion_notas.core.seeder import run_seeder
from gestion_notas.crud.curso import curso
from gestion_notas.crud.docente import docente
from gestion_notas.crud.estudiante import estudiante

logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Inicializar el almacén y los datos de ejemplo"""
    logger.info(f"🚀 Iniciando Gestión de Notas v{__version__}...")

    try:
        app.state.almacen = crear_almacen(settings)
    except Exception as e:
        logger.error(f"❌ Error crítico creando el almacén: {e}")
        raise

    if settings.seed_on_startup:
        logger.info("🌱 Ejecutando seeding...")
        if run_seeder(app.state.almacen, settings.seed_random_seed):
            logger.info("✅ Datos iniciales creados")
        else:
            logger.info("ℹ️ El almacén ya contiene datos")

    logger.info("🎉 Sistema listo!")
    yield
    logger.info("👋 Deteniendo Gestión de Notas")


app = FastAPI(
    title="Gestión de Notas API",
    description="""
    ## Gestión de Notas - Secundaria 🎓

    - 📊 **Notas por unidad** - tareas 30%, conceptual 30%, exámenes 40%
    - 🏆 **Ranking por sección** - recalculado en cada consulta
    - 🔤 **Listas ordenadas** - colación española o mérito
    - 🗄️ **Almacén clave-valor** - memoria, SQL o Redis

    ### **Usuarios de Prueba (cabecera X-Usuario-Id):**
    - admin1 (Administrador)
    - support1 (Soporte)
    - CMendezR01 (Docente de Matemática)
    - ASofiaFernandezT2024 (Estudiante de 1° Secundaria A)
    """,
    version=__version__,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(api_router, prefix="/api/v1")


@app.get("/", tags=["🏠 General"])
def root():
    """Información general del sistema"""
    return {
        "message": f"Gestión de Notas API v{__version__}",
        "status": "running",
        "docs": "/docs",
        "store_backend": settings.store_backend,
        "environment": settings.environment,
    }


@app.get("/health", tags=["🏠 General"])
def health_check(almacen: AlmacenClaveValor = Depends(get_almacen)):
    """Estado del almacén y conteo de entidades"""
    return {
        "status": "healthy",
        "store_backend": type(almacen).__name__,
        "estudiantes": estudiante.count(almacen),
        "docentes": docente.count(almacen),
        "cursos": curso.count(almacen),
    }
