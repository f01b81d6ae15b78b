"""Test environment: fixture secrets must exist before api.main is imported."""

import os

os.environ.setdefault("JWT_SECRET_KEY", "test-jwt-secret")
os.environ.setdefault("PRICE_ENCRYPTION_KEY", "test-price-secret")
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("APP_ENV", "test")
