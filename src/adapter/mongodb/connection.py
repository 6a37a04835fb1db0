"""MongoDB client cache for the workout and user collections."""

import os
import logging

from pymongo import MongoClient
from pymongo.database import Database
from pymongo.errors import ConnectionFailure, PyMongoError

logger = logging.getLogger(__name__)

# Driver-level logs are noisy at INFO
logging.getLogger('pymongo').setLevel(logging.WARNING)

MONGO_URL = os.getenv('MONGO_URL')
DATABASE_NAME = os.getenv('MONGODB_DATABASE', 'fitlog')

_client_cache: MongoClient | None = None
_connection_failed = False


def reset_client():
    global _client_cache, _connection_failed
    _client_cache = None
    _connection_failed = False


def get_mongodb_client() -> MongoClient | None:
    """Return a cached, healthy MongoDB client.

    A cached client that fails its ping is dropped and rebuilt once.
    A missing MONGO_URL or a failed first connection is remembered so later
    calls return None immediately instead of waiting on server selection.
    """
    global _client_cache, _connection_failed

    if _client_cache is not None:
        try:
            _client_cache.admin.command('ping')
            return _client_cache
        except PyMongoError:
            logger.debug("[MONGODB] Cached client failed ping, reconnecting")
            _client_cache = None

    if _connection_failed:
        return None

    if not MONGO_URL:
        logger.error("[MONGODB] MONGO_URL not configured")
        _connection_failed = True
        return None

    try:
        client = MongoClient(
            MONGO_URL,
            serverSelectionTimeoutMS=5000,
            connectTimeoutMS=5000,
            socketTimeoutMS=30000,
            retryWrites=True,
            retryReads=True,
        )
        client.admin.command('ping')
    except (ConnectionFailure, PyMongoError) as e:
        logger.error("[MONGODB] Connection failed", extra={"error": str(e)[:200]})
        _connection_failed = True
        return None

    logger.info("[MONGODB] Connected", extra={"database": DATABASE_NAME})
    _client_cache = client
    return client


def get_database() -> Database | None:
    """Return the configured database, or None when MongoDB is unavailable."""
    client = get_mongodb_client()
    if client is None:
        return None
    return client[DATABASE_NAME]
