"""Re-encrypt product prices stored with the legacy cipher using the Fernet cipher.

Both ciphers use PRICE_ENCRYPTION_KEY. After a successful run set
PRICE_CIPHER_MODE=fernet (the default).

Usage:
    PYTHONPATH=src python scripts/migrate_price_cipher.py --dry-run
    PYTHONPATH=src python scripts/migrate_price_cipher.py
"""

import argparse
import logging
import os
import sys

from dotenv import load_dotenv

load_dotenv()

from adapter.crypto.price_cipher import FernetPriceCipher, LegacyPriceCipher
from adapter.mongodb.connection import get_mongodb_client, DATABASE_NAME
from adapter.mongodb.product_repository import MongoProductRepository
from services.price_migration_service import reencrypt_prices
from utils.logging import setup_structured_logging

logger = logging.getLogger(__name__)


def main() -> int:
    parser = argparse.ArgumentParser(description="Re-encrypt legacy product prices")
    parser.add_argument("--dry-run", action="store_true", help="Report what would change without writing")
    args = parser.parse_args()

    setup_structured_logging()

    secret = os.getenv("PRICE_ENCRYPTION_KEY")
    if not secret:
        logger.error("PRICE_ENCRYPTION_KEY environment variable is required")
        return 2

    client = get_mongodb_client()
    if client is None:
        logger.error("MongoDB unavailable")
        return 1

    report = reencrypt_prices(
        MongoProductRepository(client[DATABASE_NAME]),
        source=LegacyPriceCipher(secret),
        target=FernetPriceCipher(secret),
        dry_run=args.dry_run,
    )
    return 1 if report.failed else 0


if __name__ == "__main__":
    sys.exit(main())
