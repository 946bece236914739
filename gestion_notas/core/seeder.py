import logging
import random
from typing import Optional

from gestion_notas.core.almacen import AlmacenClaveValor
from gestion_notas.crud.curso import curso
from gestion_notas.crud.docente import docente
from gestion_notas.crud.estudiante import estudiante
from gestion_notas.crud.nota import nota
from gestion_notas.crud.usuario import guardar_usuario
from gestion_notas.schemas.curso import CursoCreate
from gestion_notas.schemas.docente import DocenteCreate
from gestion_notas.schemas.estudiante import EstudianteCreate
from gestion_notas.schemas.grado import GRADOS
from gestion_notas.schemas.nota import ComponenteNota

logger = logging.getLogger(__name__)

# (nombre, apellido paterno, apellido materno, especialidad)
DOCENTES = [
    ("Carlos", "Méndez", "Rodríguez", "Matemáticas"),
    ("María", "González", "Silva", "Comunicación"),
    ("Juan", "Pérez", "Torres", "Ciencias"),
    ("Ana", "Rodríguez", "Martínez", "Historia"),
    ("Luis", "Torres", "Vargas", "Inglés"),
    ("Carmen", "Silva", "Ramos", "Educación Física"),
    ("Roberto", "Díaz", "Castro", "Arte"),
    ("Patricia", "Vega", "López", "Química"),
]

# Los mismos siete cursos en cada grado, dictados por los siete primeros docentes
CURSOS_POR_GRADO = [
    "Matemática",
    "Comunicación",
    "Ciencia y Tecnología",
    "Ciencias Sociales",
    "Inglés",
    "Educación Física",
    "Arte y Cultura",
]

# (nombre, apellido paterno, apellido materno, grado, sección, año de ingreso)
ESTUDIANTES = [
    ("Juan Luis", "García", "Pérez", "g1", "A", 2024),
    ("María Carmen", "López", "Martínez", "g1", "A", 2024),
    ("Carlos Antonio", "Rodríguez", "Silva", "g1", "A", 2024),
    ("Ana Sofía", "Fernández", "Torres", "g1", "A", 2024),
    ("Jorge José", "Herrera", "Díaz", "g1", "B", 2024),
    ("Camila Isabel", "Méndez", "Ortiz", "g1", "B", 2024),
    ("Ricardo Carlos", "Cruz", "Álvarez", "g1", "B", 2024),
    ("Sofía Luisa", "Flores", "García", "g1", "B", 2024),
    ("Manuel Luis", "Mendoza", "Pérez", "g2", "A", 2023),
    ("Isabella María", "Romero", "García", "g2", "A", 2023),
    ("Javier Esteban", "Jiménez", "López", "g2", "A", 2023),
    ("Natalia Victoria", "Gutiérrez", "Martínez", "g2", "A", 2023),
    ("Raúl Roberto", "Vega", "León", "g2", "B", 2023),
    ("Victoria Valentina", "Blanco", "Hernández", "g2", "B", 2023),
    ("Gustavo Gabriel", "Rivera", "Soto", "g2", "B", 2023),
    ("Carla Clara", "Aguilar", "Delgado", "g2", "B", 2023),
    ("Omar Mario", "Fuentes", "Acosta", "g3", "A", 2022),
    ("Bianca Beatriz", "Campos", "Benítez", "g3", "A", 2022),
    ("Felipe Fabián", "Soto", "Cortés", "g3", "A", 2022),
    ("Gloria Gabriela", "Pacheco", "Domínguez", "g3", "A", 2022),
    ("Mateo Mario", "Prieto", "Juárez", "g3", "B", 2022),
    ("Nicole Natalia", "Estrada", "Keller", "g3", "B", 2022),
    ("Óscar Octavio", "Paz", "Luna", "g3", "B", 2022),
    ("Patricia Paola", "Bravo", "Montes", "g3", "B", 2022),
    ("Ulises", "Vélez", "Rivas", "g4", "A", 2021),
    ("Valeria Vanessa", "Llanos", "Sáenz", "g4", "A", 2021),
    ("William Walter", "Barrios", "Trujillo", "g4", "A", 2021),
    ("Ximena", "Uribe", "Uriarte", "g4", "A", 2021),
    ("César", "Mejía", "Zavala", "g4", "B", 2021),
    ("Daniela", "Osorio", "Aguirre", "g4", "B", 2021),
    ("Enrique", "Quintero", "Bautista", "g4", "B", 2021),
    ("Fabiola", "Ramírez", "Campos", "g4", "B", 2021),
    ("Karina", "Linares", "Huerta", "g5", "A", 2020),
    ("Leonardo", "Escalante", "Iglesias", "g5", "A", 2020),
    ("Melisa", "Villegas", "Jiménez", "g5", "A", 2020),
    ("Nicolás", "Arriaga", "Klein", "g5", "A", 2020),
    ("Sandra", "Monroy", "Parra", "g5", "B", 2020),
    ("Tomás", "Villarreal", "Quiroz", "g5", "B", 2020),
    ("Úrsula", "Santos", "Ríos", "g5", "B", 2020),
    ("Vicente", "Olivera", "Solís", "g5", "B", 2020),
]

# Rango (mínimo, máximo) de las notas aleatorias de cada unidad
RANGOS_UNIDAD = {
    "unidad1": (12, 20),
    "unidad2": (11, 20),
    "unidad3": (10, 20),
    "unidad4": (10, 20),
}

USUARIOS_SISTEMA = [
    {
        "id": "admin1",
        "nombre": "Administrador Principal",
        "rol": "admin",
        "email": "admin1@escuela.com",
    },
    {
        "id": "support1",
        "nombre": "Soporte Técnico",
        "rol": "support",
        "email": "soporte@escuela.com",
    },
]


def check_if_seeded(almacen: AlmacenClaveValor) -> bool:
    """Verificar si el almacén ya tiene datos"""
    return docente.count(almacen) > 0 or estudiante.count(almacen) > 0


def _componente_aleatorio(rng: random.Random, minimo: int, maximo: int) -> ComponenteNota:
    return ComponenteNota(
        tareas=rng.randint(minimo, maximo),
        conceptual=rng.randint(minimo, maximo),
        examenes=rng.randint(minimo, maximo),
    )


def seed_almacen(almacen: AlmacenClaveValor, semilla: Optional[int] = None) -> None:
    """Poblar el almacén con docentes, cursos, estudiantes y notas de ejemplo"""
    rng = random.Random(semilla)

    logger.info("🌱 Iniciando seeding del almacén...")

    logger.info("👨‍🏫 Creando docentes...")
    docentes = [
        docente.create(
            almacen,
            obj_in=DocenteCreate(
                nombre=nombre,
                apellido_paterno=paterno,
                apellido_materno=materno,
                especialidad=especialidad,
            ),
        )
        for nombre, paterno, materno, especialidad in DOCENTES
    ]

    logger.info("📚 Creando cursos...")
    numero = 0
    for grado in GRADOS:
        for nombre_curso, titular in zip(CURSOS_POR_GRADO, docentes):
            numero += 1
            curso.create(
                almacen,
                obj_in=CursoCreate(
                    id=f"c{numero}",
                    nombre=nombre_curso,
                    grado_id=grado.id,
                    docente_id=titular.id,
                ),
            )

    logger.info("👨‍🎓 Creando estudiantes...")
    estudiantes = [
        estudiante.create(
            almacen,
            obj_in=EstudianteCreate(
                nombre=nombre,
                apellido_paterno=paterno,
                apellido_materno=materno,
                grado_id=grado_id,
                seccion=seccion,
                anio_ingreso=anio,
            ),
        )
        for nombre, paterno, materno, grado_id, seccion, anio in ESTUDIANTES
    ]

    logger.info("📊 Generando notas...")
    registros = []
    for e in estudiantes:
        for registro in nota.get_by_estudiante(almacen, e.id):
            unidades = {
                unidad: _componente_aleatorio(rng, minimo, maximo)
                for unidad, (minimo, maximo) in RANGOS_UNIDAD.items()
            }
            registros.append(registro.model_copy(update=unidades))
    nota.guardar_lote(almacen, registros)

    for datos in USUARIOS_SISTEMA:
        guardar_usuario(almacen, datos)

    logger.info(
        f"✅ Seeding completado: {len(docentes)} docentes, {numero} cursos, "
        f"{len(estudiantes)} estudiantes, {len(registros)} registros de notas"
    )


def run_seeder(almacen: AlmacenClaveValor, semilla: Optional[int] = None) -> bool:
    """Ejecutar seeder solo si no hay datos"""
    if check_if_seeded(almacen):
        logger.info("📊 El almacén ya tiene datos, saltando seeding...")
        return False

    seed_almacen(almacen, semilla)
    return True
