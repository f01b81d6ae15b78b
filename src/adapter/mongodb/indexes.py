"""Index declarations and startup creation for the catalog collections."""

from logging import getLogger

from pymongo.errors import OperationFailure, PyMongoError

logger = getLogger(__name__)

# (name, keys, options) per collection
USER_INDEXES = [
    ('idx_users_email', [('email', 1)], {'unique': True}),
    ('idx_users_username', [('username', 1)], {'unique': True}),
    ('idx_users_created_at', [('created_at', -1)], {}),
]
PRODUCT_INDEXES = [
    ('idx_products_created_at', [('created_at', -1)], {}),
]
LEAD_EMAIL_INDEXES = [
    ('idx_leads_product', [('product_id', 1), ('downloaded_at', -1)], {}),
]


def _drop_stale(collection, name: str, keys: list) -> bool:
    """Drop an index that clashes with (name, keys) by name or by key pattern."""
    wanted = dict(keys)
    for existing, info in collection.index_information().items():
        if existing == '_id_':
            continue
        if (existing == name) != (dict(info.get('key', [])) == wanted):
            logger.warning("Dropping stale index", extra={"collection": collection.name, "index": existing})
            collection.drop_index(existing)
            return True
    return False


def apply_indexes(collection, specs: list) -> bool:
    """Create every index in ``specs``, replacing stale definitions once.

    Returns False when any index could not be created.
    """
    ok = True
    for name, keys, options in specs:
        try:
            try:
                collection.create_index(keys, name=name, **options)
            except OperationFailure:
                if not _drop_stale(collection, name, keys):
                    raise
                collection.create_index(keys, name=name, **options)
        except PyMongoError as e:
            logger.error("Failed to create index", extra={"collection": collection.name, "index": name, "error": str(e)})
            ok = False
    return ok


def ensure_all_indexes(db) -> bool:
    """Ensure indexes for all collections. Called at app startup."""
    from adapter.mongodb.lead_email_repository import MongoLeadEmailRepository
    from adapter.mongodb.product_repository import MongoProductRepository
    from adapter.mongodb.user_repository import MongoUserRepository

    results = [
        MongoUserRepository(db).ensure_indexes(),
        MongoProductRepository(db).ensure_indexes(),
        MongoLeadEmailRepository(db).ensure_indexes(),
    ]
    return all(results)
