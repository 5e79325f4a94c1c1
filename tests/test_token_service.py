from datetime import datetime, timedelta, timezone
import uuid

import jwt
import pytest

from application.services.token_service import TokenService
from core.config import settings
from core.exceptions import TokenExpiredException, TokenInvalidException


def test_round_trip_returns_user_id(token_service):
    user_id = uuid.uuid4()
    assert token_service.decode_user_id(token_service.create_access_token(user_id)) == user_id


def test_expired_token_is_distinguished():
    service = TokenService(secret_key="k", expire_minutes=-1)
    with pytest.raises(TokenExpiredException):
        service.decode_user_id(service.create_access_token(uuid.uuid4()))


def test_foreign_signature_is_invalid(token_service):
    other = TokenService(secret_key="another-key")
    with pytest.raises(TokenInvalidException):
        token_service.decode_user_id(other.create_access_token(uuid.uuid4()))


def test_non_uuid_subject_is_invalid(token_service):
    token = jwt.encode(
        {
            "sub": "42",
            "iss": settings.JWT_ISSUER,
            "type": "access",
            "exp": datetime.now(timezone.utc) + timedelta(minutes=1),
        },
        settings.SECRET_KEY,
        algorithm=settings.ALGORITHM,
    )
    with pytest.raises(TokenInvalidException):
        token_service.decode_user_id(token)


def test_empty_token_is_invalid(token_service):
    with pytest.raises(TokenInvalidException):
        token_service.decode_user_id("")
