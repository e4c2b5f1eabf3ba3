"""
Service layer for notes: validación de campos, defaults y propiedad.

Cada operación asume que el usuario ya pasó por el guard de sesión.
"""
import logging
from typing import Dict, Any, List, Optional

from app.api.schemas.note import DEFAULT_COLOR, NoteColor
from app.core.config import settings
from app.core.exceptions import NotFoundError, ValidationError
from app.repositories import note_repo
from app.services.note_access import NOTE_NOT_FOUND, authorize_note, owner_id_of

_log = logging.getLogger("memo.notes")


def to_public(doc: Dict[str, Any]) -> Dict[str, Any]:
    """Documento Mongo -> forma pública (id como str)."""
    return {
        "id": str(doc["_id"]),
        "title": doc.get("title", ""),
        "content": doc.get("content", ""),
        "color": doc.get("color") or DEFAULT_COLOR.value,
        "is_favorite": bool(doc.get("is_favorite", False)),
        "created_at": doc.get("created_at"),
        "updated_at": doc.get("updated_at"),
        "owner_id": doc.get("owner_id"),
    }


def list_notes(user: Dict[str, Any]) -> List[Dict[str, Any]]:
    return [to_public(d) for d in note_repo.list_notes(owner_id_of(user))]


def create_note(
    user: Dict[str, Any],
    *,
    title: Optional[str] = None,
    content: Optional[str] = None,
    color: Optional[NoteColor] = None,
) -> Dict[str, Any]:
    if not title and not content:
        raise ValidationError("Title or content is required")
    doc = note_repo.insert_note(
        owner_id_of(user),
        {
            "title": title or settings.note_default_title,
            "content": content or "",
            "color": (color or DEFAULT_COLOR).value,
            "is_favorite": False,
        },
    )
    _log.info("Nota creada id=%s owner=%s", doc["_id"], doc["owner_id"])
    return to_public(doc)


def replace_note(
    user: Dict[str, Any],
    note_id: str,
    *,
    title: Optional[str],
    content: Optional[str],
) -> Dict[str, Any]:
    """Reemplazo completo de título y contenido (ambos recortados).

    El contenido se trata como texto plano: solo se recorta, el markup no se toca.
    """
    title = (title or "").strip()
    content = (content or "").strip()
    if not title or not content:
        raise ValidationError("Title and content are required")
    authorize_note(user, note_id)
    return _apply(user, note_id, {"title": title, "content": content})


def patch_note(user: Dict[str, Any], note_id: str, changes: Dict[str, Any]) -> Dict[str, Any]:
    """Actualización parcial: solo los campos presentes (False explícito incluido)."""
    allowed = {k: v for k, v in changes.items() if k in ("is_favorite", "title", "content", "color")}
    doc = authorize_note(user, note_id)
    if not allowed:
        return to_public(doc)
    return _apply(user, note_id, allowed)


def delete_note(user: Dict[str, Any], note_id: str) -> Dict[str, Any]:
    authorize_note(user, note_id)
    if not note_repo.delete_owned(owner_id_of(user), note_id):
        # Borrada por una petición concurrente entre el chequeo y el delete
        raise NotFoundError(NOTE_NOT_FOUND)
    _log.info("Nota eliminada id=%s owner=%s", note_id, owner_id_of(user))
    return {"message": "Note deleted successfully"}


def _apply(user: Dict[str, Any], note_id: str, fields: Dict[str, Any]) -> Dict[str, Any]:
    doc = note_repo.update_owned(owner_id_of(user), note_id, fields)
    if doc is None:
        raise NotFoundError(NOTE_NOT_FOUND)
    return to_public(doc)
