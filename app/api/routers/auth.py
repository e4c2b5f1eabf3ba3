"""Rutas de autenticación: registro y login local."""
from fastapi import APIRouter, status

from app.api.schemas.auth import LoginPayload, RegisterPayload, TokenOut, UserOut
from app.services import auth_service as service

router = APIRouter(prefix="/auth", tags=["Auth"])


@router.post(
    "/register",
    response_model=UserOut,
    status_code=status.HTTP_201_CREATED,
    summary="Registrar usuario",
    description="Crea un usuario local (nombre, email, password). 400 si el email ya existe.",
)
def register(payload: RegisterPayload):
    return service.register_user(name=payload.name, email=payload.email, password=payload.password)


@router.post(
    "/login",
    response_model=TokenOut,
    summary="Login local",
    description="Valida email/password y emite access token. Error genérico si falla.",
)
def login(payload: LoginPayload):
    return service.login(email=str(payload.email), password=payload.password)
