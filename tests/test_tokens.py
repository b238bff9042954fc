from datetime import timedelta

import pytest
from jose import jwt

from anthropometric import settings
from anthropometric.auth import create_access_token, decode_token
from anthropometric.errors import InvalidToken, TokenExpired


def test_token_carries_subject_and_one_day_expiry():
    payload = decode_token(create_access_token("abc123"))
    assert payload["sub"] == "abc123"
    assert payload["exp"] - payload["iat"] == 24 * 60 * 60


def test_expired_token():
    token = create_access_token("abc123", expires_delta=timedelta(seconds=-1))
    with pytest.raises(TokenExpired):
        decode_token(token)


def test_token_signed_with_other_secret():
    token = jwt.encode({"sub": "abc123"}, "some-other-secret", algorithm=settings.JWT_ALG)
    with pytest.raises(InvalidToken):
        decode_token(token)


def test_token_without_subject():
    token = jwt.encode({"foo": "bar"}, settings.JWT_SECRET, algorithm=settings.JWT_ALG)
    with pytest.raises(InvalidToken):
        decode_token(token)
