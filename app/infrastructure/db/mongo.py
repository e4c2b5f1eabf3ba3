# app/infrastructure/db/mongo.py
import logging

import certifi
from pymongo import MongoClient
from pymongo.database import Database
from pymongo.errors import PyMongoError

from app.core.config import settings
from app.core.exceptions import StorageUnavailableError

_log = logging.getLogger("memo.mongo")

_client: MongoClient | None = None
_db: Database | None = None


def _client_kwargs() -> dict:
    # Toda llamada a storage queda acotada por mongo_timeout_ms
    timeout = settings.mongo_timeout_ms
    kwargs = dict(
        serverSelectionTimeoutMS=timeout,
        connectTimeoutMS=timeout,
        timeoutMS=timeout,
    )
    uri = settings.mongo_uri
    if uri.startswith("mongodb+srv://") or settings.mongo_tls:
        kwargs["tls"] = True
        kwargs["tlsCAFile"] = certifi.where()
        kwargs["tlsAllowInvalidCertificates"] = settings.mongo_tls_insecure
        kwargs["tlsAllowInvalidHostnames"] = settings.mongo_tls_allow_invalid_hostnames
    return kwargs


def init_mongo() -> None:
    """
    Inicializa el cliente y valida conexión (ping).
    Llamar una sola vez en el startup de FastAPI.
    """
    global _client, _db
    if _db is not None:
        return
    try:
        _client = MongoClient(settings.mongo_uri, **_client_kwargs())
        _client.admin.command("ping")
        _db = _client[settings.mongo_db]
        _log.info("Mongo conectado db=%s", settings.mongo_db)
    except PyMongoError as e:
        # No tumbar la app: deja _db en None y loggea
        _log.warning("Mongo no accesible: %s", e)
        _client = None
        _db = None


def set_db(db: Database | None) -> None:
    """Inyecta una base ya construida (p. ej. mongomock en tests)."""
    global _db
    _db = db


def get_db() -> Database:
    """
    Devuelve la referencia a la base de datos.
    Úsalo en repositorios/servicios, no en routers.
    """
    if _db is None:
        raise StorageUnavailableError("Database not initialised")
    return _db


def db_ready() -> bool:
    return _db is not None


def close_mongo() -> None:
    global _client, _db
    if _client is not None:
        _client.close()
    _client = None
    _db = None
