"""Rutas de sesión: usuario actual y cierre de sesión."""
from typing import Any, Dict

from fastapi import APIRouter, Depends

from app.api.deps import get_current_user
from app.api.schemas.auth import MessageOut, UserOut
from app.services import auth_service as service

router = APIRouter(prefix="/session", tags=["Session"])


@router.get(
    "/me",
    response_model=UserOut,
    summary="Usuario de la sesión",
)
def me(user: Dict[str, Any] = Depends(get_current_user)):
    return service.public_user(user)


@router.post(
    "/signout",
    response_model=MessageOut,
    summary="Cerrar sesión",
    description="Revoca los access tokens vigentes del usuario (incrementa token_version).",
)
def signout(user: Dict[str, Any] = Depends(get_current_user)):
    return service.sign_out(user=user)
