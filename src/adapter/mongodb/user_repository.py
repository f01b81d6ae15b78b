"""MongoDB implementation of UserRepository."""

import uuid
from datetime import datetime, timezone
from logging import getLogger

from pymongo.database import Database
from pymongo.errors import DuplicateKeyError, PyMongoError

from adapter.mongodb import USERS_COLLECTION_NAME
from adapter.mongodb.indexes import USER_INDEXES, apply_indexes
from domain.model.errors import DuplicateError
from domain.model.user import User

logger = getLogger(__name__)


class MongoUserRepository:
    def __init__(self, db: Database):
        self.collection = db[USERS_COLLECTION_NAME]

    def ensure_indexes(self) -> bool:
        """Create indexes for users collection."""
        return apply_indexes(self.collection, USER_INDEXES)

    def _to_domain(self, doc: dict) -> User:
        return User(
            id=doc['_id'],
            username=doc['username'],
            email=doc['email'],
            created_at=doc['created_at'],
            updated_at=doc['updated_at'],
            password_hash=doc.get('password_hash'),
        )

    def create(self, username: str, email: str, password_hash: str) -> User | None:
        """Create a new user and return the User object."""
        user_id = uuid.uuid4().hex
        now = datetime.now(timezone.utc)
        user_doc = {
            '_id': user_id,
            'username': username,
            'email': email.lower(),
            'password_hash': password_hash,
            'created_at': now,
            'updated_at': now,
        }
        try:
            self.collection.insert_one(user_doc)
        except DuplicateKeyError:
            logger.warning("User creation failed: username or email already exists", extra={"email": email})
            raise DuplicateError("Username or email already registered")
        except PyMongoError as e:
            logger.error("Failed to create user", extra={"email": email, "error": str(e)})
            return None

        logger.info("User created", extra={"userId": user_id})
        return self._to_domain(user_doc)

    def _find_one(self, query: dict, log_fields: dict) -> User | None:
        try:
            doc = self.collection.find_one(query)
        except PyMongoError as e:
            logger.error("Failed to get user", extra={**log_fields, "error": str(e)})
            return None
        return self._to_domain(doc) if doc else None

    def get_by_email(self, email: str) -> User | None:
        """Find a user by email (case-insensitive). Return User or None if not found."""
        return self._find_one({'email': email.lower()}, {"email": email})

    def get_by_username(self, username: str) -> User | None:
        return self._find_one({'username': username}, {"username": username})

    def get_by_id(self, user_id: str) -> User | None:
        """Find a user by ID. Return User or None if not found."""
        return self._find_one({'_id': user_id}, {"userId": user_id})
