import uuid
from datetime import datetime, timedelta, timezone

import jwt
import pytest

from pictureteam.auth.tokens import TokenIssuer, UserInfo
from pictureteam.utils.exceptions import InvalidTokenError
from pictureteam.utils.hashing import hash_password, verify_password


def test_hash_is_salted_and_self_describing():
    """Test that each hash uses a fresh salt and embeds Argon2id parameters."""
    first = hash_password("hunter2")
    second = hash_password("hunter2")

    assert first != second
    assert first.startswith("$argon2id$")
    assert "m=" in first and "t=" in first and "p=" in first


def test_verify_password():
    password_hash = hash_password("hunter2")

    assert verify_password(password_hash, "hunter2")
    assert not verify_password(password_hash, "hunter3")


def test_verify_malformed_hash_is_false():
    assert not verify_password("not-a-hash", "hunter2")
    assert not verify_password("", "hunter2")


def test_token_roundtrip():
    issuer = TokenIssuer("secret")
    user = UserInfo(id=uuid.uuid4(), admin=True)

    assert issuer.validate(issuer.issue(user)) == user


def test_token_claims():
    issuer = TokenIssuer("secret")
    user = UserInfo(id=uuid.uuid4(), admin=False)

    claims = jwt.decode(issuer.issue(user), "secret", algorithms=["HS256"], issuer="pictureTeam")

    assert claims["sub"] == "appUser"
    assert claims["user"] == {"id": str(user.id), "admin": False}
    expires = datetime.fromtimestamp(claims["exp"], tz=timezone.utc)
    assert timedelta(hours=23) < expires - datetime.now(timezone.utc) <= timedelta(hours=24)


def test_token_from_other_secret_is_invalid():
    token = TokenIssuer("old-secret").issue(UserInfo(id=uuid.uuid4(), admin=False))

    with pytest.raises(InvalidTokenError):
        TokenIssuer("new-secret").validate(token)


def test_expired_token_is_invalid():
    issuer = TokenIssuer("secret", ttl=timedelta(seconds=-10))
    token = issuer.issue(UserInfo(id=uuid.uuid4(), admin=False))

    with pytest.raises(InvalidTokenError):
        issuer.validate(token)


@pytest.mark.parametrize(
    "claims",
    [
        {"iss": "pictureTeam", "sub": "appUser"},
        {"iss": "pictureTeam", "sub": "appUser", "user": {"id": "nope", "admin": False}},
        {"iss": "pictureTeam", "sub": "appUser", "user": {"id": str(uuid.uuid4())}},
        {"iss": "someoneElse", "sub": "appUser", "user": {"id": str(uuid.uuid4()), "admin": False}},
        {"iss": "pictureTeam", "sub": "other", "user": {"id": str(uuid.uuid4()), "admin": False}},
    ],
)
def test_malformed_claims_are_invalid(claims):
    claims = {**claims, "exp": datetime.now(timezone.utc) + timedelta(hours=1)}
    token = jwt.encode(claims, "secret", algorithm="HS256")

    with pytest.raises(InvalidTokenError):
        TokenIssuer("secret").validate(token)


def test_garbage_token_is_invalid():
    with pytest.raises(InvalidTokenError):
        TokenIssuer("secret").validate("not.a.token")
