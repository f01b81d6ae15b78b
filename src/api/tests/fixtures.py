"""Shared wiring for route tests: in-memory repositories and fixture keys."""

import unittest

from fastapi.testclient import TestClient

from adapter.crypto.price_cipher import FernetPriceCipher
from adapter.fake.lead_email_repository import FakeLeadEmailRepository
from adapter.fake.product_repository import FakeProductRepository
from adapter.fake.user_repository import FakeUserRepository
from api.dependencies import (
    get_app_settings,
    get_lead_email_repo,
    get_price_cipher,
    get_product_repo,
    get_spec_sheet_renderer,
    get_token_service,
    get_user_repo,
)
from api.main import app
from services import auth_service
from services.token_service import TokenService
from utils.config import Settings

PASSWORD = 'secret123'


class RecordingRenderer:
    def __init__(self):
        self.calls = []

    def render(self, product, price=None) -> bytes:
        self.calls.append((product, price))
        return b'%PDF-1.3 test'


class RouteTestCase(unittest.TestCase):
    """Base class wiring the app to fakes through dependency overrides."""

    def setUp(self):
        self.users = FakeUserRepository()
        self.products = FakeProductRepository()
        self.leads = FakeLeadEmailRepository()
        self.cipher = FernetPriceCipher('route-test-price-secret')
        self.tokens = TokenService('route-test-jwt-secret', expires_in=3600)
        self.renderer = RecordingRenderer()
        self.settings = Settings(
            jwt_secret_key='route-test-jwt-secret',
            price_encryption_key='route-test-price-secret',
            bcrypt_rounds=4,
            app_env='test',
        )

        app.dependency_overrides[get_user_repo] = lambda: self.users
        app.dependency_overrides[get_product_repo] = lambda: self.products
        app.dependency_overrides[get_lead_email_repo] = lambda: self.leads
        app.dependency_overrides[get_price_cipher] = lambda: self.cipher
        app.dependency_overrides[get_token_service] = lambda: self.tokens
        app.dependency_overrides[get_spec_sheet_renderer] = lambda: self.renderer
        app.dependency_overrides[get_app_settings] = lambda: self.settings

        self.client = TestClient(app)

    def tearDown(self):
        app.dependency_overrides.clear()

    def create_user(self, username='alice', email='alice@example.com'):
        return auth_service.register(self.users, username, email, PASSWORD, rounds=4)

    def auth_headers(self, user) -> dict:
        return {'Authorization': f'Bearer {self.tokens.issue(user)}'}

    def create_product(self, headers: dict, **overrides) -> dict:
        body = {
            'name': 'Drill',
            'description': 'Cordless drill',
            'imageUrl': 'https://img.example.com/drill.png',
            'price': 199.99,
            'technicalDetails': {'voltage': '18V'},
        }
        body.update(overrides)
        response = self.client.post('/api/products', json=body, headers=headers)
        self.assertEqual(response.status_code, 201, response.text)
        return response.json()['data']
