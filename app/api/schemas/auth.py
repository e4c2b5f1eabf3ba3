"""
Esquemas Pydantic para operaciones de autenticación y sesión.

- Mantiene las validaciones y normalizaciones (p. ej. email en minúsculas).
- Modelos pensados para separar la capa API de la lógica de negocio.
"""
from typing import Literal

from pydantic import BaseModel, EmailStr, Field, field_validator

from app.api.schemas.note import CamelModel


class RegisterPayload(BaseModel):
    name: str = Field(min_length=1)
    email: EmailStr
    password: str = Field(min_length=1)

    @field_validator("email")
    @classmethod
    def _lower_email(cls, v: EmailStr) -> str:
        return str(v).lower()


class LoginPayload(BaseModel):
    email: EmailStr
    password: str


class UserOut(CamelModel):
    """Respuesta pública de usuario (sin secretos)."""
    id: str
    name: str
    email: EmailStr
    created_at: str | None = None


class TokenOut(BaseModel):
    access_token: str
    token_type: Literal["bearer"] = "bearer"
    user: UserOut


class MessageOut(BaseModel):
    message: str
