"""Persistencia de usuarios (credenciales y versión de token)."""
from typing import Any, Dict, Optional
from datetime import datetime, timezone

from bson import ObjectId
from bson.errors import InvalidId
from pymongo import ReturnDocument
from pymongo.errors import DuplicateKeyError

from app.core.exceptions import ConflictError
from app.infrastructure.db.mongo import get_db

USER_COLL = "user"


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def _oid(user_id: str) -> Optional[ObjectId]:
    try:
        return ObjectId(user_id)
    except (InvalidId, TypeError):
        return None


def insert_user(*, name: str, email: str, password_hash: str) -> Dict[str, Any]:
    """Inserta usuario local y devuelve el documento guardado.

    El email llega normalizado (minúsculas). El índice único `uniq_email`
    es la fuente de verdad; la búsqueda previa solo evita el round-trip
    cuando no hay índice (p. ej. base recién creada).
    """
    coll = get_db()[USER_COLL]
    if coll.find_one({"email": email}, {"_id": 1}):
        raise ConflictError("Email already registered")
    now = _now_iso()
    doc = {
        "name": name,
        "email": email,
        "password_hash": password_hash,
        "token_version": 0,
        "created_at": now,
        "updated_at": now,
    }
    try:
        res = coll.insert_one(doc)
    except DuplicateKeyError:
        raise ConflictError("Email already registered")
    doc["_id"] = res.inserted_id
    return doc


def find_user_by_email(email: str) -> Optional[Dict[str, Any]]:
    """Busca usuario por email (email en minúsculas)."""
    return get_db()[USER_COLL].find_one({"email": email})


def get_user_by_id(user_id: str) -> Optional[Dict[str, Any]]:
    """Obtiene usuario por id (str); id mal formado equivale a inexistente."""
    oid = _oid(user_id)
    if oid is None:
        return None
    return get_db()[USER_COLL].find_one({"_id": oid})


def increment_token_version(user_id: str) -> Optional[Dict[str, Any]]:
    """Invalida todos los access tokens emitidos antes de este punto."""
    oid = _oid(user_id)
    if oid is None:
        return None
    return get_db()[USER_COLL].find_one_and_update(
        {"_id": oid},
        {"$inc": {"token_version": 1}, "$set": {"updated_at": _now_iso()}},
        return_document=ReturnDocument.AFTER,
    )
