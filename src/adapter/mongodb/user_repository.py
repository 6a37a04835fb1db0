"""MongoDB implementation of UserRepository."""

import uuid
from datetime import datetime, timezone
from logging import getLogger

from pymongo import ReturnDocument
from pymongo.database import Database
from pymongo.errors import DuplicateKeyError, PyMongoError

from adapter.mongodb import USERS_COLLECTION_NAME
from domain.model.errors import DomainError, EmailAlreadyExistsError
from domain.model.user import User, UserAccount

logger = getLogger(__name__)


class MongoUserRepository:
    def __init__(self, db: Database):
        self.collection = db[USERS_COLLECTION_NAME]

    def ensure_indexes(self) -> bool:
        """Create indexes for users collection."""
        from adapter.mongodb.indexes import create_index_safe

        try:
            create_index_safe(self.collection, [('email', 1)], 'idx_users_email', unique=True)
            return True
        except Exception as e:
            logger.error("Failed to create users indexes", extra={"error": str(e)})
            return False

    def _to_domain(self, doc: dict) -> UserAccount:
        """Convert MongoDB document to UserAccount domain model."""
        return UserAccount(
            user=User(
                id=doc['_id'],
                name=doc['name'],
                email=doc['email'],
                profile_picture=doc.get('profile_picture'),
            ),
            password_hash=doc['password_hash'],
            created_at=doc['created_at'],
            updated_at=doc['updated_at'],
            last_login=doc.get('last_login'),
        )

    def create(self, email: str, password_hash: str, name: str) -> UserAccount | None:
        """Insert a new account document and return it."""
        user_id = f"user-{uuid.uuid4().hex}"
        now = datetime.now(timezone.utc)
        doc = {
            '_id': user_id,
            'email': email,
            'password_hash': password_hash,
            'name': name,
            'profile_picture': None,
            'created_at': now,
            'updated_at': now,
        }
        try:
            self.collection.insert_one(doc)
        except DuplicateKeyError:
            logger.warning("User creation failed: email already exists", extra={"email": email})
            return None
        except PyMongoError as e:
            logger.error("Failed to create user", extra={"email": email, "error": str(e)})
            return None

        logger.info("User created", extra={"userId": user_id})
        return self._to_domain(doc)

    def get_by_email(self, email: str) -> UserAccount | None:
        try:
            doc = self.collection.find_one({'email': email})
        except PyMongoError as e:
            logger.error("Failed to get user by email", extra={"email": email, "error": str(e)})
            return None
        return self._to_domain(doc) if doc else None

    def update_profile(self, user_id: str, changes: dict) -> UserAccount | None:
        """Set profile fields and return the updated account, or None if missing.

        Raises:
            EmailAlreadyExistsError: the new email belongs to another account
            DomainError: the update could not be written
        """
        update = {k: v for k, v in changes.items() if k in User.EDITABLE_FIELDS}
        update['updated_at'] = datetime.now(timezone.utc)
        try:
            doc = self.collection.find_one_and_update(
                {'_id': user_id},
                {'$set': update},
                return_document=ReturnDocument.AFTER,
            )
        except DuplicateKeyError as e:
            logger.warning("Profile update failed: email already exists", extra={"userId": user_id})
            raise EmailAlreadyExistsError() from e
        except PyMongoError as e:
            logger.error("Failed to update profile", extra={"userId": user_id, "error": str(e)})
            raise DomainError("Failed to update profile") from e
        return self._to_domain(doc) if doc else None

    def update_last_login(self, user_id: str) -> bool:
        """Update the last login timestamp for a user. Return True if successful."""
        try:
            now = datetime.now(timezone.utc)
            result = self.collection.update_one(
                {'_id': user_id},
                {'$set': {'last_login': now, 'updated_at': now}}
            )
            return result.modified_count > 0
        except PyMongoError as e:
            logger.error("Failed to update last_login", extra={"userId": user_id, "error": str(e)})
            return False
