"""
Chequeo único de autorización sobre notas: "el usuario puede actuar sobre X".

Los identificadores no son secretos; la propiedad es el único control de acceso.
Toda operación que lee o modifica una nota concreta pasa por aquí antes.
"""
from typing import Any, Dict

from app.core.exceptions import NotFoundError
from app.repositories import note_repo

NOTE_NOT_FOUND = "Note not found"


def owner_id_of(user: Dict[str, Any]) -> str:
    return str(user["_id"])


def authorize_note(user: Dict[str, Any], note_id: str) -> Dict[str, Any]:
    """Devuelve la nota si pertenece a `user`; si no, NotFoundError.

    Inexistente y ajena son indistinguibles para quien llama.
    """
    doc = note_repo.find_owned(owner_id_of(user), note_id)
    if doc is None:
        raise NotFoundError(NOTE_NOT_FOUND)
    return doc
