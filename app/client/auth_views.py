"""
Flujos de sign-in / sign-up / sign-out del cliente.

Los mensajes son los que se muestran al usuario; el de sign-in no distingue
email inexistente de password incorrecto.
"""
from typing import Optional

from pydantic import BaseModel

from app.client.api import ApiClient, ApiError
from app.client.controller import NotesController

INVALID_CREDENTIALS = "Invalid email or password"
SIGN_IN_FAILED = "Something went wrong while signing in"
PASSWORD_MISMATCH = "Passwords do not match"
SIGN_UP_DONE = "Sign-up complete, please sign in"
SIGN_UP_FAILED = "Sign-up failed"


class AuthResult(BaseModel):
    ok: bool
    message: str = ""


def sign_in(api: ApiClient, email: str, password: str, controller: Optional[NotesController] = None) -> AuthResult:
    """Establece la sesión; si hay controlador, carga las notas una vez."""
    try:
        api.login(email=email, password=password)
    except ApiError as e:
        if e.status_code in (400, 401):
            return AuthResult(ok=False, message=INVALID_CREDENTIALS)
        return AuthResult(ok=False, message=SIGN_IN_FAILED)
    if controller is not None:
        controller.load()
    return AuthResult(ok=True)


def sign_up(api: ApiClient, name: str, email: str, password: str, confirm_password: str) -> AuthResult:
    if password != confirm_password:
        return AuthResult(ok=False, message=PASSWORD_MISMATCH)
    try:
        api.register(name=name, email=email, password=password)
    except ApiError as e:
        return AuthResult(ok=False, message=e.message or SIGN_UP_FAILED)
    return AuthResult(ok=True, message=SIGN_UP_DONE)


def sign_out(api: ApiClient) -> AuthResult:
    try:
        res = api.signout()
    except ApiError as e:
        # El token local ya se descartó en ApiClient.signout
        return AuthResult(ok=False, message=e.message)
    return AuthResult(ok=True, message=res.get("message", ""))
