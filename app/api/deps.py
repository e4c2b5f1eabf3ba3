"""
Dependencias reutilizables para routers (FastAPI Depends).

- Guard de sesión: extrae y valida el Access Token, devuelve el usuario actual.
- Corre antes de cualquier acceso a notas; sin sesión no se toca storage de notas.
- Mantener esta capa delgada: sin lógica de negocio pesada.
"""
from typing import Optional, Dict, Any

from fastapi import Header
from jwt import InvalidTokenError

from app.core.exceptions import UnauthorizedError
from app.repositories import user_repo as repo
from app.services.token_service import verify_access_token


def get_current_user(authorization: Optional[str] = Header(default=None)) -> Dict[str, Any]:
    if not authorization or not authorization.startswith("Bearer "):
        raise UnauthorizedError("Unauthorized")
    token = authorization.split(" ", 1)[1].strip()
    try:
        payload = verify_access_token(token)
    except InvalidTokenError:
        raise UnauthorizedError("Invalid session")

    user_id = payload.get("sub")
    if not user_id:
        raise UnauthorizedError("Invalid session")

    u = repo.get_user_by_id(user_id)
    if not u:
        raise UnauthorizedError("Invalid session")
    # Tokens emitidos antes de un sign-out quedan revocados
    if u.get("token_version", 0) != payload.get("token_version"):
        raise UnauthorizedError("Session expired")
    return u
