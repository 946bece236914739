from typing import Optional
from fastapi import Depends, Header, HTTPException, Request, status

from gestion_notas.config.settings import settings
from gestion_notas.core.almacen import AlmacenClaveValor
from gestion_notas.crud.usuario import get_usuario
from gestion_notas.schemas.usuario import Usuario, UsuarioAdmin


def get_almacen(request: Request) -> AlmacenClaveValor:
    """Almacén creado al iniciar la aplicación"""
    return request.app.state.almacen


def get_current_user(
    x_usuario_id: Optional[str] = Header(None),
    almacen: AlmacenClaveValor = Depends(get_almacen),
) -> Usuario:
    """
    Obtener el principal de la cabecera `X-Usuario-Id`.
    Si disable_auth está activado, devuelve un administrador de desarrollo
    """
    if settings.disable_auth and not x_usuario_id:
        return UsuarioAdmin(
            id="DEV001", nombre="Developer", rol="admin", email="dev@escuela.com"
        )

    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="No se pudo validar las credenciales",
    )

    if not x_usuario_id:
        raise credentials_exception

    usuario = get_usuario(almacen, x_usuario_id)
    if usuario is None:
        raise credentials_exception

    return usuario


def require_roles(*roles: str):
    """Dependencia que restringe un endpoint a los roles indicados"""

    def verificar_rol(current_user: Usuario = Depends(get_current_user)) -> Usuario:
        if current_user.rol not in roles:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"Rol '{current_user.rol}' sin permiso para esta operación",
            )
        return current_user

    return verificar_rol
