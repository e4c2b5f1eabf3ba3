"""Repo de la colección `note`.

Todas las consultas van acotadas por `owner_id`: no existe lectura ni
escritura de notas sin dueño explícito.
"""
from typing import Dict, Any, List, Optional
from datetime import datetime, timezone

from bson import ObjectId
from bson.errors import InvalidId
from pymongo import DESCENDING, ReturnDocument

from app.infrastructure.db.mongo import get_db

COLLECTION = "note"


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def _owned_filter(owner_id: str, note_id: str) -> Optional[Dict[str, Any]]:
    try:
        oid = ObjectId(note_id)
    except (InvalidId, TypeError):
        return None
    return {"_id": oid, "owner_id": str(owner_id)}


def list_notes(owner_id: str) -> List[Dict[str, Any]]:
    """Lista notas del dueño, más recientes primero (empate por _id desc)."""
    cursor = get_db()[COLLECTION].find({"owner_id": str(owner_id)}).sort(
        [("created_at", DESCENDING), ("_id", DESCENDING)]
    )
    return list(cursor)


def insert_note(owner_id: str, doc: Dict[str, Any]) -> Dict[str, Any]:
    """Inserta nota con timestamps del servidor y devuelve el documento guardado."""
    data = dict(doc)
    now = _now_iso()
    data["owner_id"] = str(owner_id)
    data.setdefault("is_favorite", False)
    data["created_at"] = now
    data["updated_at"] = now
    res = get_db()[COLLECTION].insert_one(data)
    data["_id"] = res.inserted_id
    return data


def find_owned(owner_id: str, note_id: str) -> Optional[Dict[str, Any]]:
    filtro = _owned_filter(owner_id, note_id)
    if filtro is None:
        return None
    return get_db()[COLLECTION].find_one(filtro)


def update_owned(owner_id: str, note_id: str, fields: Dict[str, Any]) -> Optional[Dict[str, Any]]:
    """Aplica `fields` con $set y devuelve el documento actualizado (o None)."""
    filtro = _owned_filter(owner_id, note_id)
    if filtro is None:
        return None
    changes = dict(fields)
    changes["updated_at"] = _now_iso()
    return get_db()[COLLECTION].find_one_and_update(
        filtro,
        {"$set": changes},
        return_document=ReturnDocument.AFTER,
    )


def delete_owned(owner_id: str, note_id: str) -> bool:
    filtro = _owned_filter(owner_id, note_id)
    if filtro is None:
        return False
    res = get_db()[COLLECTION].delete_one(filtro)
    return res.deleted_count == 1
