"""Unit tests for spec_sheet_service."""

import unittest
from datetime import datetime, timezone
from decimal import Decimal

from adapter.crypto.price_cipher import FernetPriceCipher
from adapter.fake.lead_email_repository import FakeLeadEmailRepository
from adapter.fake.product_repository import FakeProductRepository
from domain.model.auth_context import AuthenticationContext
from domain.model.errors import NotFoundError, ValidationError
from domain.model.user import User
from services.catalog_service import create_product
from services.spec_sheet_service import build_spec_sheet, check_access, store_lead_email


class RecordingRenderer:
    """Captures what would be printed instead of producing a real PDF."""

    def __init__(self):
        self.calls = []

    def render(self, product, price=None) -> bytes:
        self.calls.append((product, price))
        return b'%PDF-recorded'


def _member() -> AuthenticationContext:
    now = datetime.now(timezone.utc)
    return AuthenticationContext.for_user(
        User(id='user-1', username='alice', email='alice@example.com', created_at=now, updated_at=now)
    )


class TestSpecSheetService(unittest.TestCase):

    def setUp(self):
        self.products = FakeProductRepository()
        self.leads = FakeLeadEmailRepository()
        self.cipher = FernetPriceCipher('sheet-test-secret')
        self.renderer = RecordingRenderer()
        self.product = create_product(self.products, self.cipher, {
            'name': 'Drill',
            'description': 'Cordless drill',
            'image_url': 'https://img.example.com/drill.png',
            'price': Decimal('199.99'),
        })

    def test_check_access(self):
        self.assertEqual(
            check_access(AuthenticationContext.anonymous()),
            {'requiresEmail': True, 'isAuthenticated': False},
        )
        self.assertEqual(check_access(_member()), {'requiresEmail': False, 'isAuthenticated': True})

    def test_store_lead_email(self):
        lead = store_lead_email(
            self.leads, self.products, 'lead@example.com', self.product.id,
            ip_address='10.0.0.1', user_agent='pytest',
        )

        self.assertEqual(self.leads.find_by_product(self.product.id), [lead])
        self.assertEqual(lead.ip_address, '10.0.0.1')
        self.assertEqual(lead.user_agent, 'pytest')

    def test_store_lead_email_unknown_product(self):
        with self.assertRaises(NotFoundError):
            store_lead_email(self.leads, self.products, 'lead@example.com', 'missing')
        self.assertEqual(self.leads.store, [])

    def test_store_lead_email_invalid_email(self):
        with self.assertRaises(ValidationError):
            store_lead_email(self.leads, self.products, 'not an email', self.product.id)

    def test_sheet_without_price_for_anonymous(self):
        data = build_spec_sheet(
            self.products, self.cipher, self.renderer, AuthenticationContext.anonymous(), self.product.id
        )

        self.assertEqual(data, b'%PDF-recorded')
        self.assertIsNone(self.renderer.calls[0][1])

    def test_sheet_with_price_for_member(self):
        build_spec_sheet(self.products, self.cipher, self.renderer, _member(), self.product.id)

        self.assertEqual(self.renderer.calls[0][1], Decimal('199.99'))

    def test_sheet_with_unreadable_price_omits_it(self):
        self.products.store[self.product.id].price = 'corrupted'

        build_spec_sheet(self.products, self.cipher, self.renderer, _member(), self.product.id)

        self.assertIsNone(self.renderer.calls[0][1])

    def test_sheet_unknown_product(self):
        with self.assertRaises(NotFoundError):
            build_spec_sheet(self.products, self.cipher, self.renderer, _member(), 'missing')


if __name__ == '__main__':
    unittest.main()
