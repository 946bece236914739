from pydantic_settings import BaseSettings
from typing import Optional


class Settings(BaseSettings):
    # Almacén (memory | sql | redis)
    store_backend: str = "memory"

    # Database
    database_url: str = "sqlite:///./gestion_notas.db"

    # Redis
    redis_url: str = "redis://localhost:6379"
    redis_password: Optional[str] = None
    redis_db: int = 0
    redis_key_prefix: str = "gestion_notas"

    # Authentication
    disable_auth: bool = False  # True devuelve un administrador de desarrollo

    # Environment
    environment: str = "development"
    debug: bool = False
    log_level: str = "INFO"

    # Seeding
    seed_on_startup: bool = True
    seed_random_seed: Optional[int] = None

    @property
    def database_url_sync(self) -> str:
        """Convertir URL async de base de datos a síncrona"""
        if self.database_url.startswith("postgresql+asyncpg://"):
            return self.database_url.replace(
                "postgresql+asyncpg://", "postgresql+psycopg2://"
            )
        elif self.database_url.startswith("postgresql://"):
            return self.database_url.replace("postgresql://", "postgresql+psycopg2://")
        else:
            return self.database_url

    class Config:
        env_file = ".env"
        case_sensitive = False


settings = Settings()
