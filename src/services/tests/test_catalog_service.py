"""Unit tests for catalog_service."""

import unittest
from datetime import datetime, timezone
from decimal import Decimal

from adapter.crypto.price_cipher import FernetPriceCipher
from adapter.fake.product_repository import FakeProductRepository
from domain.model.auth_context import AuthenticationContext
from domain.model.errors import NotFoundError, ValidationError
from domain.model.user import User
from services.catalog_service import (
    create_product,
    delete_product,
    get_product,
    list_products,
    update_product,
)

FIELDS = {
    'name': 'Drill',
    'description': 'Cordless drill',
    'image_url': 'https://img.example.com/drill.png',
    'price': Decimal('199.99'),
    'technical_details': {'voltage': '18V'},
}


def _member() -> AuthenticationContext:
    now = datetime.now(timezone.utc)
    return AuthenticationContext.for_user(
        User(id='user-1', username='alice', email='alice@example.com', created_at=now, updated_at=now)
    )


class TestCatalogService(unittest.TestCase):

    def setUp(self):
        self.repo = FakeProductRepository()
        self.cipher = FernetPriceCipher('catalog-test-secret')
        self.anonymous = AuthenticationContext.anonymous()
        self.member = _member()

    def test_create_stores_ciphertext_and_original_price(self):
        product = create_product(self.repo, self.cipher, FIELDS)

        stored = self.repo.get_by_id(product.id, include_original_price=True)
        self.assertNotEqual(stored.price, '199.99')
        self.assertEqual(self.cipher.decrypt(stored.price), Decimal('199.99'))
        self.assertEqual(stored.original_price, Decimal('199.99'))

    def test_create_requires_price(self):
        with self.assertRaises(ValidationError):
            create_product(self.repo, self.cipher, {**FIELDS, 'price': None})

    def test_create_requires_name(self):
        with self.assertRaises(ValidationError):
            create_product(self.repo, self.cipher, {**FIELDS, 'name': '  '})

    def test_anonymous_view_has_no_price_key(self):
        product = create_product(self.repo, self.cipher, FIELDS)

        view = get_product(self.repo, self.cipher, self.anonymous, product.id)

        self.assertNotIn('price', view)
        self.assertNotIn('original_price', view)
        self.assertEqual(view['name'], 'Drill')

    def test_authenticated_view_has_decrypted_price(self):
        product = create_product(self.repo, self.cipher, FIELDS)

        view = get_product(self.repo, self.cipher, self.member, product.id)

        self.assertEqual(view['price'], Decimal('199.99'))
        self.assertNotIn('original_price', view)

    def test_view_uses_camel_case_keys(self):
        product = create_product(self.repo, self.cipher, FIELDS)

        view = get_product(self.repo, self.cipher, self.member, product.id)

        self.assertEqual(
            set(view),
            {'id', 'name', 'description', 'imageUrl', 'technicalDetails', 'createdAt', 'updatedAt', 'price'},
        )
        self.assertEqual(view['technicalDetails'], {'voltage': '18V'})

    def test_list_degrades_unreadable_price_only(self):
        good = create_product(self.repo, self.cipher, FIELDS)
        bad = create_product(self.repo, self.cipher, {**FIELDS, 'name': 'Saw'})
        self.repo.store[bad.id].price = 'corrupted'

        views = {v['id']: v for v in list_products(self.repo, self.cipher, self.member)}

        self.assertEqual(views[good.id]['price'], Decimal('199.99'))
        self.assertIn('price', views[bad.id])
        self.assertIsNone(views[bad.id]['price'])

    def test_list_anonymous(self):
        create_product(self.repo, self.cipher, FIELDS)
        create_product(self.repo, self.cipher, FIELDS)

        views = list_products(self.repo, self.cipher, self.anonymous)

        self.assertEqual(len(views), 2)
        self.assertTrue(all('price' not in v for v in views))

    def test_get_missing(self):
        with self.assertRaises(NotFoundError):
            get_product(self.repo, self.cipher, self.member, 'missing')

    def test_update_price_reencrypts(self):
        product = create_product(self.repo, self.cipher, FIELDS)

        update_product(self.repo, self.cipher, product.id, {'price': Decimal('249.50')})

        stored = self.repo.get_by_id(product.id, include_original_price=True)
        self.assertEqual(self.cipher.decrypt(stored.price), Decimal('249.50'))
        self.assertEqual(stored.original_price, Decimal('249.50'))

    def test_update_without_price_keeps_it(self):
        product = create_product(self.repo, self.cipher, FIELDS)
        ciphertext = self.repo.get_by_id(product.id).price

        updated = update_product(self.repo, self.cipher, product.id, {'name': 'Hammer drill'})

        stored = self.repo.get_by_id(product.id, include_original_price=True)
        self.assertEqual(updated.name, 'Hammer drill')
        self.assertEqual(stored.price, ciphertext)
        self.assertEqual(stored.original_price, Decimal('199.99'))

    def test_update_ignores_unknown_fields(self):
        product = create_product(self.repo, self.cipher, FIELDS)

        update_product(self.repo, self.cipher, product.id, {'id': 'hijack', 'original_price': 1})

        self.assertIsNotNone(self.repo.get_by_id(product.id))
        self.assertIsNone(self.repo.get_by_id('hijack'))

    def test_update_rejects_negative_price(self):
        product = create_product(self.repo, self.cipher, FIELDS)

        with self.assertRaises(ValidationError):
            update_product(self.repo, self.cipher, product.id, {'price': Decimal('-5')})

    def test_update_missing(self):
        with self.assertRaises(NotFoundError):
            update_product(self.repo, self.cipher, 'missing', {'name': 'x'})

    def test_delete(self):
        product = create_product(self.repo, self.cipher, FIELDS)

        delete_product(self.repo, product.id)

        self.assertIsNone(self.repo.get_by_id(product.id))
        with self.assertRaises(NotFoundError):
            delete_product(self.repo, product.id)


if __name__ == '__main__':
    unittest.main()
