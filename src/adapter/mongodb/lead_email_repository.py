"""MongoDB implementation of LeadEmailRepository."""

from logging import getLogger

from pymongo.database import Database
from pymongo.errors import PyMongoError

from adapter.mongodb import LEAD_EMAILS_COLLECTION_NAME
from adapter.mongodb.indexes import LEAD_EMAIL_INDEXES, apply_indexes
from domain.model.lead_email import LeadEmail

logger = getLogger(__name__)


class MongoLeadEmailRepository:
    def __init__(self, db: Database):
        self.collection = db[LEAD_EMAILS_COLLECTION_NAME]

    def ensure_indexes(self) -> bool:
        return apply_indexes(self.collection, LEAD_EMAIL_INDEXES)

    def save(self, lead: LeadEmail) -> bool:
        try:
            self.collection.insert_one({
                '_id': lead.id,
                'email': lead.email,
                'product_id': lead.product_id,
                'downloaded_at': lead.downloaded_at,
                'ip_address': lead.ip_address,
                'user_agent': lead.user_agent,
            })
        except PyMongoError as e:
            logger.error("Failed to store lead email", extra={"productId": lead.product_id, "error": str(e)})
            return False

        logger.info("Lead email stored", extra={"leadId": lead.id, "productId": lead.product_id})
        return True

    def find_by_product(self, product_id: str) -> list[LeadEmail]:
        try:
            docs = list(self.collection.find({'product_id': product_id}).sort('downloaded_at', -1))
        except PyMongoError as e:
            logger.error("Failed to list lead emails", extra={"productId": product_id, "error": str(e)})
            return []
        return [
            LeadEmail(
                id=doc['_id'],
                email=doc['email'],
                product_id=doc['product_id'],
                downloaded_at=doc['downloaded_at'],
                ip_address=doc.get('ip_address', ''),
                user_agent=doc.get('user_agent', ''),
            )
            for doc in docs
        ]
