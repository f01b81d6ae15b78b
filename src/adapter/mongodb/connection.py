"""Process-wide MongoDB client.

The client is created on first use and re-pinged before every reuse. A
missing MONGO_URL or a failed first connection is treated as a configuration
problem and not retried until ``reset_client()``.
"""

import os
import logging
from pymongo import MongoClient
from pymongo.errors import PyMongoError

logger = logging.getLogger(__name__)

# Driver-level logs are noisy at INFO
logging.getLogger('pymongo').setLevel(logging.WARNING)

DATABASE_NAME = os.getenv('MONGODB_DATABASE', 'catalog')

CLIENT_OPTIONS = {
    'serverSelectionTimeoutMS': 5000,
    'connectTimeoutMS': 5000,
    'socketTimeoutMS': 30000,
    'maxPoolSize': 10,
    'minPoolSize': 0,
    'maxIdleTimeMS': 30000,
    'waitQueueTimeoutMS': 10000,
    'retryWrites': True,
    'retryReads': True,
    'appname': 'product-catalog-api',
}

_client: MongoClient | None = None
_ever_connected = False
_misconfigured = False


def reset_client() -> None:
    """Drop the cached client and clear the failure flag."""
    global _client, _ever_connected, _misconfigured
    if _client is not None:
        _client.close()
    _client = None
    _ever_connected = False
    _misconfigured = False


def _connect(url: str) -> MongoClient:
    client = MongoClient(url, **CLIENT_OPTIONS)
    client.admin.command('ping')
    return client


def get_mongodb_client() -> MongoClient | None:
    """Return a live client, or None when MongoDB cannot be reached."""
    global _client, _ever_connected, _misconfigured

    if _client is not None:
        try:
            _client.admin.command('ping')
            return _client
        except PyMongoError:
            logger.debug("Cached MongoDB client failed ping, reconnecting")
            _client = None

    if _misconfigured:
        return None

    url = os.getenv('MONGO_URL')
    if not url:
        logger.error("MONGO_URL not configured")
        _misconfigured = True
        return None

    try:
        _client = _connect(url)
    except PyMongoError as e:
        if not _ever_connected:
            logger.error("Initial MongoDB connection failed", extra={"error": str(e)[:200]})
            _misconfigured = True
        else:
            logger.warning("MongoDB reconnection failed", extra={"error": str(e)[:200]})
        return None

    if not _ever_connected:
        logger.info("Connected to MongoDB", extra={"database": DATABASE_NAME})
    _ever_connected = True
    return _client
