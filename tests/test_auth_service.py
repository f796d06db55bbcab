import pytest

from pictureteam.models import User
from pictureteam.utils.exceptions import (
    EmailExistsError,
    IncorrectPasswordError,
    InvalidEmailError,
    UserNotFoundError,
)


def count_users(session_factory):
    with session_factory() as db:
        return db.query(User).count()


@pytest.mark.parametrize("email", ["asdasd", "", "a@b", "no spaces@x.com", "@example.com"])
def test_register_invalid_email(services, session_factory, email):
    with pytest.raises(InvalidEmailError):
        services.auth.register(email, "secret")

    assert count_users(session_factory) == 0


def test_register_normalizes_email(services, session_factory):
    user_id = services.auth.register("  Alice@Example.COM ", "secret")

    with session_factory() as db:
        user = db.get(User, user_id)
        assert user.email == "alice@example.com"
        assert user.is_admin is False
        assert user.password_hash != "secret"


def test_register_duplicate_email(services, session_factory):
    services.auth.register("alice@example.com", "secret")

    with pytest.raises(EmailExistsError):
        services.auth.register("ALICE@example.com ", "other")

    assert count_users(session_factory) == 1


def test_login_returns_token_for_user(services):
    user_id = services.auth.register("A@B.com", "pw")

    token = services.auth.login("a@b.com", " pw ")
    info = services.auth.validate_token(token)

    assert info.id == user_id
    assert info.admin is False


def test_login_wrong_password(services):
    services.auth.register("alice@example.com", "secret")

    with pytest.raises(IncorrectPasswordError):
        services.auth.login("alice@example.com", "Secret")


def test_login_unknown_email(services):
    with pytest.raises(UserNotFoundError):
        services.auth.login("nobody@example.com", "secret")


def test_is_admin(services, make_user, make_admin):
    user_id = make_user()
    admin_id = make_admin()

    assert services.auth.is_admin(admin_id)
    assert not services.auth.is_admin(user_id)
