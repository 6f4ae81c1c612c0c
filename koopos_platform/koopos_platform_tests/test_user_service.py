"""
Unit tests for the registration and sign-in workflows.
"""
import pytest
from unittest.mock import Mock

from koopos_platform.koopos_platform.koopos_service.auth import PasswordHasher, TokenIssuer
from koopos_platform.koopos_platform.koopos_service.db import SessionLocal
from koopos_platform.koopos_platform.koopos_service.errors import ErrorKind, ServiceError
from koopos_platform.koopos_platform.koopos_service.models import User, UserDetail
from koopos_platform.koopos_platform.koopos_service.repositories import UserRepository
from koopos_platform.koopos_platform.koopos_service.schemas import SignInRequest, SignUpRequest
from koopos_platform.koopos_platform.koopos_service.services.user_service import UserService


@pytest.fixture
def db_session():
    session = SessionLocal()
    yield session
    session.close()


@pytest.fixture
def hasher():
    return PasswordHasher(["pbkdf2_sha256"])


@pytest.fixture
def tokens():
    return TokenIssuer("test-secret", "HS256", 5)


def sign_up(username="alice", email="a@x.com", role=1):
    return SignUpRequest(
        username=username,
        email=email,
        password="pw123",
        role=role,
        first_name="Alice",
        last_name="Liddell",
        phone_number="0812",
        address="Somewhere",
    )


def rows(db_session):
    db_session.expire_all()
    return db_session.query(User).count(), db_session.query(UserDetail).count()


def test_create_user_returns_empty_success(db_session, hasher, tokens):
    service = UserService(UserRepository(db_session), hasher, tokens)

    response = service.create_user(sign_up())

    assert response.response_status.response_code == "KPS-000"
    assert response.data is None
    assert rows(db_session) == (1, 1)
    user = db_session.query(User).one()
    assert hasher.verify("pw123", user.password)
    assert user.detail.user_id == user.id


def test_create_user_conflict_leaves_store_untouched(db_session, hasher, tokens):
    service = UserService(UserRepository(db_session), hasher, tokens)
    service.create_user(sign_up())

    with pytest.raises(ServiceError) as exc_info:
        service.create_user(sign_up(username="alice", email="new@x.com"))

    assert exc_info.value.kind is ErrorKind.CONFLICT
    assert rows(db_session) == (1, 1)


def test_create_user_unknown_role(db_session, hasher, tokens):
    service = UserService(UserRepository(db_session), hasher, tokens)

    with pytest.raises(ServiceError) as exc_info:
        service.create_user(sign_up(role=42))

    assert exc_info.value.kind is ErrorKind.NOT_FOUND
    assert exc_info.value.status_code == 404
    assert rows(db_session) == (0, 0)


def test_create_user_lost_race_is_conflict(db_session, hasher, tokens):
    """The unique constraint catches a duplicate that slipped past the existence check."""
    UserService(UserRepository(db_session), hasher, tokens).create_user(sign_up())

    class StaleRepository(UserRepository):
        def exists_by_username(self, username):
            return False

        def exists_by_email(self, email):
            return False

    service = UserService(StaleRepository(db_session), hasher, tokens)
    with pytest.raises(ServiceError) as exc_info:
        service.create_user(sign_up(email="other@x.com"))

    assert exc_info.value.kind is ErrorKind.CONFLICT
    assert rows(db_session) == (1, 1)


def test_create_user_detail_failure_rolls_back_principal(db_session, hasher, tokens):
    class FailingDetailRepository(UserRepository):
        def add_detail(self, detail):
            raise RuntimeError("disk full")

    service = UserService(FailingDetailRepository(db_session), hasher, tokens)
    with pytest.raises(RuntimeError):
        service.create_user(sign_up())

    assert rows(db_session) == (0, 0)


def test_sign_in_issues_token_for_username(db_session, hasher, tokens):
    UserService(UserRepository(db_session), hasher, tokens).create_user(sign_up())
    issuer = Mock(wraps=tokens)
    service = UserService(UserRepository(db_session), hasher, issuer)

    response = service.sign_in(SignInRequest(email="a@x.com", password="pw123"))

    issuer.issue.assert_called_once_with("alice")
    assert response.data.access_token
    assert tokens.decode(response.data.access_token) == "alice"


def test_sign_in_wrong_password(db_session, hasher, tokens):
    UserService(UserRepository(db_session), hasher, tokens).create_user(sign_up())
    issuer = Mock(wraps=tokens)
    service = UserService(UserRepository(db_session), hasher, issuer)

    with pytest.raises(ServiceError) as exc_info:
        service.sign_in(SignInRequest(username="alice", password="wrong"))

    assert exc_info.value.kind is ErrorKind.AUTHENTICATION
    issuer.issue.assert_not_called()


def test_sign_in_verifier_error_is_authentication_failure(db_session, hasher, tokens):
    UserService(UserRepository(db_session), hasher, tokens).create_user(sign_up())
    broken = Mock()
    broken.verify.side_effect = ValueError("hash could not be identified")
    service = UserService(UserRepository(db_session), broken, tokens)

    with pytest.raises(ServiceError) as exc_info:
        service.sign_in(SignInRequest(username="alice", password="pw123"))

    assert exc_info.value.kind is ErrorKind.AUTHENTICATION
    assert isinstance(exc_info.value.__cause__, ValueError)


def test_sign_in_unknown_user(db_session, hasher, tokens):
    service = UserService(UserRepository(db_session), hasher, tokens)

    with pytest.raises(ServiceError) as exc_info:
        service.sign_in(SignInRequest(username="nobody", password="pw123"))

    assert exc_info.value.kind is ErrorKind.NOT_FOUND
