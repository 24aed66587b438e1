"""
Unit tests for password hashing and bearer tokens.
"""
from datetime import timedelta

import jwt
import pytest

from app.core.security import JWTManager, PasswordHasher

SECRET = 'unit-test-secret-key-0123456789abcdef'


class TestPasswordHasher:

    def test_hash_and_verify(self):
        hasher = PasswordHasher(rounds=4)
        hashed = hasher.hash('s3cret')

        assert hashed != 's3cret'
        assert hasher.verify('s3cret', hashed)
        assert not hasher.verify('wrong', hashed)

    def test_verify_rejects_empty_input(self):
        hasher = PasswordHasher(rounds=4)

        assert not hasher.verify('', hasher.hash('x'))
        assert not hasher.verify('x', '')

    def test_rounds_out_of_range(self):
        with pytest.raises(ValueError):
            PasswordHasher(rounds=3)


class TestJWTManager:

    def test_round_trip_claims(self):
        manager = JWTManager(secret_key=SECRET)
        token = manager.create_access_token('user-1', additional_claims={'role': 'admin'})
        payload = manager.verify_token(token)

        assert payload['sub'] == 'user-1'
        assert payload['role'] == 'admin'
        assert payload['token_type'] == 'access'

    def test_expired_token(self):
        manager = JWTManager(secret_key=SECRET)
        token = manager.create_access_token('user-1', expires_delta=timedelta(seconds=-5))

        with pytest.raises(jwt.ExpiredSignatureError):
            manager.verify_token(token)

    def test_wrong_secret(self):
        token = JWTManager(secret_key=SECRET).create_access_token('user-1')

        with pytest.raises(jwt.InvalidTokenError):
            JWTManager(secret_key=SECRET[::-1]).verify_token(token)

    def test_non_access_token_rejected(self):
        manager = JWTManager(secret_key=SECRET)
        token = jwt.encode({'sub': 'user-1', 'token_type': 'refresh'}, SECRET, algorithm='HS256')

        with pytest.raises(jwt.InvalidTokenError):
            manager.verify_token(token)
