"""
Lógica de autenticación: registro, login y cierre de sesión.
"""
import logging
from typing import Any, Dict

from argon2 import PasswordHasher
from argon2.exceptions import InvalidHashError, VerificationError
from argon2.low_level import Type

from app.core.exceptions import UnauthorizedError, ValidationError
from app.repositories import user_repo as repo
from app.services.token_service import create_access_token

_log = logging.getLogger("memo.auth")

ph = PasswordHasher(time_cost=2, memory_cost=51200, parallelism=2, hash_len=32, salt_len=16, type=Type.ID)

INVALID_CREDENTIALS = "Invalid email or password"


def hash_password(password: str) -> str:
    return ph.hash(password)


def verify_password(password: str, password_hash: str) -> bool:
    try:
        return ph.verify(password_hash, password)
    except (VerificationError, InvalidHashError):
        return False


def public_user(u: Dict[str, Any]) -> Dict[str, Any]:
    """Registro público de usuario (sin secretos)."""
    return {
        "id": str(u["_id"]),
        "name": u.get("name") or "",
        "email": u.get("email"),
        "created_at": u.get("created_at"),
    }


def register_user(*, name: str, email: str, password: str) -> Dict[str, Any]:
    """Registra un usuario local con password hasheado (argon2id)."""
    name = (name or "").strip()
    if not name or not password:
        raise ValidationError("Name, email and password are required")
    u = repo.insert_user(name=name, email=email.lower(), password_hash=hash_password(password))
    _log.info("Usuario registrado id=%s", u["_id"])
    return public_user(u)


def login(*, email: str, password: str) -> Dict[str, Any]:
    """Valida credenciales y emite access token.

    No distingue email inexistente de password incorrecto.
    """
    u = repo.find_user_by_email(email.lower())
    if not u or not u.get("password_hash") or not verify_password(password, u["password_hash"]):
        _log.warning("Login fallido")
        raise UnauthorizedError(INVALID_CREDENTIALS)
    return {
        "access_token": create_access_token(user=u),
        "token_type": "bearer",
        "user": public_user(u),
    }


def sign_out(*, user: Dict[str, Any]) -> Dict[str, Any]:
    """Revoca en servidor todos los access tokens vigentes del usuario."""
    repo.increment_token_version(str(user["_id"]))
    _log.info("Sesión cerrada user_id=%s", user["_id"])
    return {"message": "Logged out successfully"}
