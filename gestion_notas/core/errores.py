class ErrorGestionNotas(Exception):
    """Error base del sistema de notas"""


class AlmacenCorruptoError(ErrorGestionNotas):
    """El almacén devolvió un valor que no se puede interpretar"""

    def __init__(self, clave: str, detalle: str = ""):
        self.clave = clave
        self.detalle = detalle
        super().__init__(f"Valor corrupto en '{clave}': {detalle}")


class EntidadNoEncontradaError(ErrorGestionNotas):
    def __init__(self, entidad: str, id: str):
        self.entidad = entidad
        self.id = id
        super().__init__(f"{entidad} no encontrado: {id}")


class EntidadDuplicadaError(ErrorGestionNotas):
    def __init__(self, entidad: str, id: str):
        self.entidad = entidad
        self.id = id
        super().__init__(f"{entidad} ya existe: {id}")
