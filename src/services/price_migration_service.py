"""Re-encrypt stored prices from one cipher to another.

Used to move records written with the legacy deterministic cipher to the
authenticated default cipher.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone

from domain.model.errors import DecryptionError
from port.price_cipher import PriceCipher
from port.product_repository import ProductRepository

logger = logging.getLogger(__name__)


@dataclass
class MigrationReport:
    migrated: list[str] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)
    failed: list[str] = field(default_factory=list)


def reencrypt_prices(
    repo: ProductRepository,
    source: PriceCipher,
    target: PriceCipher,
    dry_run: bool = False,
) -> MigrationReport:
    """Decrypt every price with ``source`` and store it encrypted with ``target``.

    Prices already readable by ``target`` are skipped, so the migration can be
    re-run after a partial failure.
    """
    report = MigrationReport()
    for product in repo.find_all():
        try:
            target.decrypt(product.price)
            report.skipped.append(product.id)
            continue
        except DecryptionError:
            pass

        try:
            amount = source.decrypt(product.price)
        except DecryptionError as e:
            logger.error("Cannot decrypt price with source cipher", extra={"productId": product.id, "error": str(e)})
            report.failed.append(product.id)
            continue

        if not dry_run:
            product.price = target.encrypt(amount)
            product.updated_at = datetime.now(timezone.utc)
            if not repo.save(product):
                report.failed.append(product.id)
                continue
        report.migrated.append(product.id)

    logger.info(
        "Price re-encryption finished",
        extra={
            "migrated": len(report.migrated),
            "skipped": len(report.skipped),
            "failed": len(report.failed),
            "dryRun": dry_run,
        },
    )
    return report
