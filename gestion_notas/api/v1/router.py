from fastapi import APIRouter

from gestion_notas.api.v1 import cursos, docentes, estudiantes, notas, ranking

api_router = APIRouter()

api_router.include_router(
    estudiantes.router, prefix="/estudiantes", tags=["👨‍🎓 Estudiantes"]
)
api_router.include_router(docentes.router, prefix="/docentes", tags=["👨‍🏫 Docentes"])
api_router.include_router(cursos.router, prefix="/cursos", tags=["📚 Cursos"])
api_router.include_router(notas.router, prefix="/notas", tags=["📊 Notas"])
api_router.include_router(ranking.router, prefix="/ranking", tags=["🏆 Ranking"])
