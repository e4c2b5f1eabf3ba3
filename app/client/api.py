"""
Cliente HTTP de la API de notas (requests).

Un intento por llamada: no hay reintentos ni backoff. Cualquier respuesta
no-2xx se convierte en `ApiError` con el mensaje del campo `error`.
"""
from typing import Any, Dict, List, Optional

import requests

from app.api.schemas.note import NoteOut
from app.core.config import settings

# Campos de PATCH: snake_case (Python) -> camelCase (JSON)
_PATCH_FIELDS = {"is_favorite": "isFavorite", "title": "title", "content": "content", "color": "color"}


class ApiError(Exception):
    def __init__(self, status_code: int, message: str, retryable: bool = False) -> None:
        super().__init__(f"{status_code}: {message}")
        self.status_code = status_code
        self.message = message
        self.retryable = retryable


class ApiClient:
    """Cliente sin estado salvo el bearer token de la sesión actual.

    `session` puede ser cualquier objeto con `.request(method, url, ...)`
    compatible con requests (p. ej. `fastapi.testclient.TestClient`).
    """

    def __init__(self, base_url: Optional[str] = None, session: Any = None, timeout: Optional[float] = None) -> None:
        self.base_url = (base_url or settings.client_base_url).rstrip("/")
        self.session = session if session is not None else requests.Session()
        self.timeout = timeout if timeout is not None else settings.client_timeout_seconds
        self.token: Optional[str] = None

    @property
    def authenticated(self) -> bool:
        return self.token is not None

    def _request(self, method: str, path: str, payload: Optional[Dict[str, Any]] = None) -> Any:
        headers = {"Accept": "application/json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        try:
            resp = self.session.request(
                method,
                f"{self.base_url}{path}",
                json=payload,
                headers=headers,
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise ApiError(0, f"Network error: {e}", retryable=True) from e

        try:
            data = resp.json()
        except ValueError:
            data = None
        if resp.status_code >= 400:
            body = data if isinstance(data, dict) else {}
            # requests expone `reason`; httpx (TestClient) expone `reason_phrase`
            reason = getattr(resp, "reason", None) or getattr(resp, "reason_phrase", None)
            raise ApiError(
                resp.status_code,
                str(body.get("error") or reason or "HTTP error"),
                retryable=bool(body.get("retryable", False)),
            )
        return data

    # --- Credenciales / sesión ---
    def register(self, *, name: str, email: str, password: str) -> Dict[str, Any]:
        return self._request("POST", "/auth/register", {"name": name, "email": email, "password": password})

    def login(self, *, email: str, password: str) -> Dict[str, Any]:
        data = self._request("POST", "/auth/login", {"email": email, "password": password})
        self.token = data["access_token"]
        return data

    def signout(self) -> Dict[str, Any]:
        try:
            return self._request("POST", "/session/signout")
        finally:
            self.token = None

    def me(self) -> Dict[str, Any]:
        return self._request("GET", "/session/me")

    # --- Notas ---
    def list_notes(self) -> List[NoteOut]:
        return [NoteOut.model_validate(n) for n in self._request("GET", "/notes")]

    def create_note(self, *, title: Optional[str] = None, content: Optional[str] = None, color: Optional[str] = None) -> NoteOut:
        payload = {k: v for k, v in (("title", title), ("content", content), ("color", color)) if v is not None}
        return NoteOut.model_validate(self._request("POST", "/notes", payload))

    def replace_note(self, note_id: str, *, title: str, content: str) -> NoteOut:
        return NoteOut.model_validate(self._request("PUT", f"/notes/{note_id}", {"title": title, "content": content}))

    def patch_note(self, note_id: str, **fields: Any) -> NoteOut:
        unknown = set(fields) - set(_PATCH_FIELDS)
        if unknown:
            raise TypeError(f"Campos no soportados: {', '.join(sorted(unknown))}")
        payload = {_PATCH_FIELDS[k]: v for k, v in fields.items()}
        return NoteOut.model_validate(self._request("PATCH", f"/notes/{note_id}", payload))

    def delete_note(self, note_id: str) -> Dict[str, Any]:
        return self._request("DELETE", f"/notes/{note_id}")
