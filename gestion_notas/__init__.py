"""Gestión de notas de secundaria: promedios, ranking por sección y sincronización."""

__version__ = "1.0.0"
