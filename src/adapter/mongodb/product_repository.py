"""MongoDB implementation of ProductRepository."""

from decimal import Decimal
from logging import getLogger

from bson.decimal128 import Decimal128
from bson.objectid import ObjectId
from pymongo.database import Database
from pymongo.errors import PyMongoError

from adapter.mongodb import PRODUCTS_COLLECTION_NAME
from adapter.mongodb.indexes import PRODUCT_INDEXES, apply_indexes
from domain.model.product import Product

logger = getLogger(__name__)

# original_price stays in the store for internal reference only
DEFAULT_PROJECTION = {'original_price': 0, 'originalPrice': 0}

# Field names written by the previous Node.js service. Documents in that shape
# are readable as-is and are rewritten to the current names on save.
LEGACY_FIELDS = {
    'image_url': 'imageUrl',
    'technical_details': 'technicalDetails',
    'original_price': 'originalPrice',
    'created_at': 'createdAt',
    'updated_at': 'updatedAt',
}


def _id_filter(product_id: str) -> dict:
    # Ids from the previous service are ObjectIds; ours are 32-char hex strings
    if ObjectId.is_valid(product_id):
        return {'_id': ObjectId(product_id)}
    return {'_id': product_id}


def _field(doc: dict, name: str):
    value = doc.get(name)
    if value is None:
        value = doc.get(LEGACY_FIELDS[name])
    return value


class MongoProductRepository:
    def __init__(self, db: Database):
        self.collection = db[PRODUCTS_COLLECTION_NAME]

    # ── indexes ──────────────────────────────────────────────

    def ensure_indexes(self) -> bool:
        """Create indexes for products collection."""
        return apply_indexes(self.collection, PRODUCT_INDEXES)

    # ── helpers ──────────────────────────────────────────────

    def _to_domain(self, doc: dict) -> Product:
        original_price = _field(doc, 'original_price')
        if isinstance(original_price, Decimal128):
            original_price = original_price.to_decimal()
        elif isinstance(original_price, (int, float)):
            original_price = Decimal(str(original_price))

        created_at = _field(doc, 'created_at')
        return Product(
            id=str(doc['_id']),
            name=doc['name'],
            description=doc['description'],
            image_url=_field(doc, 'image_url'),
            price=doc['price'],
            created_at=created_at,
            updated_at=_field(doc, 'updated_at') or created_at,
            technical_details=_field(doc, 'technical_details') or {},
            original_price=original_price,
        )

    # ── write operations ─────────────────────────────────────

    def save(self, product: Product) -> bool:
        """Save entire Product (upsert). A missing original_price is left as stored."""
        doc = {
            'name': product.name,
            'description': product.description,
            'image_url': product.image_url,
            'price': product.price,
            'technical_details': product.technical_details,
            'created_at': product.created_at,
            'updated_at': product.updated_at,
        }
        legacy = {LEGACY_FIELDS[name]: '' for name in ('image_url', 'technical_details', 'created_at', 'updated_at')}
        legacy['__v'] = ''
        update = {'$set': doc, '$unset': legacy}
        if product.original_price is not None:
            doc['original_price'] = Decimal128(product.original_price)
            legacy['originalPrice'] = ''
        else:
            update['$rename'] = {'originalPrice': 'original_price'}

        try:
            self.collection.update_one(_id_filter(product.id), update, upsert=True)
        except PyMongoError as e:
            logger.error("Failed to save product", extra={"productId": product.id, "error": str(e)})
            return False

        logger.info("Product saved", extra={"productId": product.id})
        return True

    def delete(self, product_id: str) -> bool:
        try:
            result = self.collection.delete_one(_id_filter(product_id))
        except PyMongoError as e:
            logger.error("Failed to delete product", extra={"productId": product_id, "error": str(e)})
            return False

        if result.deleted_count == 0:
            logger.warning("Product not found for deletion", extra={"productId": product_id})
            return False

        logger.info("Product deleted", extra={"productId": product_id})
        return True

    # ── read operations ──────────────────────────────────────

    def get_by_id(self, product_id: str, include_original_price: bool = False) -> Product | None:
        projection = None if include_original_price else DEFAULT_PROJECTION
        try:
            doc = self.collection.find_one(_id_filter(product_id), projection)
        except PyMongoError as e:
            logger.error("Failed to retrieve product", extra={"productId": product_id, "error": str(e)})
            return None
        return self._to_domain(doc) if doc else None

    def find_all(self) -> list[Product]:
        """All products, newest first. Legacy-shaped documents sort by createdAt."""
        try:
            docs = list(self.collection.find({}, DEFAULT_PROJECTION))
        except PyMongoError as e:
            logger.error("Failed to list products", extra={"error": str(e)})
            return []
        products = [self._to_domain(doc) for doc in docs]
        return sorted(products, key=lambda p: p.created_at, reverse=True)
