"""
Bootstrap de la base Mongo: garantiza colecciones e índices mínimos.
Se ejecuta al inicio de la app; no tumba la app si algo falla.
"""
from __future__ import annotations

from typing import Any, Dict, List
import logging
from pymongo import ASCENDING, DESCENDING
from pymongo.errors import PyMongoError
from app.infrastructure.db.mongo import get_db

_log = logging.getLogger("memo.mongo.bootstrap")

USER_COLL = "user"
NOTE_COLL = "note"


def _ensure_collection(name: str) -> None:
    db = get_db()
    try:
        if name not in db.list_collection_names():
            db.create_collection(name)
    except PyMongoError as e:
        # Carrera con otra instancia o sin privilegios: seguimos sin romper el arranque
        _log.warning("No se pudo crear la colección '%s': %s", name, e)


def _ensure_indexes(name: str, indexes: List[Dict[str, Any]]) -> None:
    coll = get_db()[name]
    for ix in indexes:
        spec = dict(ix)
        keys = spec.pop("keys")
        try:
            coll.create_index(keys, **spec)
        except PyMongoError as e:
            # Ignora fallas de índice (e.g., datos no únicos previos)
            _log.warning("No se pudo crear índice en '%s' (%s): %s", name, keys, e)


def ensure_collections() -> None:
    """
    Garantiza colecciones e índices mínimos.
    """
    _ensure_collection(USER_COLL)
    _ensure_indexes(
        USER_COLL,
        [
            {"keys": [("email", ASCENDING)], "unique": True, "name": "uniq_email"},
        ],
    )

    # Listado por dueño, más recientes primero
    _ensure_collection(NOTE_COLL)
    _ensure_indexes(
        NOTE_COLL,
        [
            {"keys": [("owner_id", ASCENDING), ("created_at", DESCENDING)], "name": "ix_owner_created"},
        ],
    )
