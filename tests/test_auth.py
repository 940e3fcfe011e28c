import json
import os
import stat

import pytest

from auth import AuthProvider
from errors import InvalidCredentials, RegistrationFailed
from secure_store import SecureStore


@pytest.fixture
def store(tmp_path):
    return SecureStore(str(tmp_path / "nested" / "session.json"))


def test_login_role_from_email(store):
    auth = AuthProvider(store)
    assert auth.login("shop.admin@example.com", "pw").role == "admin"
    assert auth.login("jane@example.com", "pw").role == "customer"


@pytest.mark.parametrize("email, password", [("not-an-email", "pw"), ("jane@example.com", "")])
def test_login_failures(store, email, password):
    auth = AuthProvider(store)
    with pytest.raises(InvalidCredentials):
        auth.login(email, password)
    assert auth.current_user() is None


def test_register_is_always_a_customer(store):
    user = AuthProvider(store).register("admin@example.com", "secret1", " Ada ")
    assert user.role == "customer"
    assert user.name == "Ada"


@pytest.mark.parametrize("email, password, name", [
    ("bad", "secret1", "Ada"),
    ("ada@example.com", "123", "Ada"),
    ("ada@example.com", "secret1", "  "),
])
def test_register_failures(store, email, password, name):
    with pytest.raises(RegistrationFailed):
        AuthProvider(store).register(email, password, name)


def test_session_survives_restart(store):
    AuthProvider(store).login("jane@example.com", "pw")
    restored = AuthProvider(store)
    user = restored.restore()
    assert user.email == "jane@example.com"
    assert restored.token.startswith("mock-jwt-token-")


def test_logout_deletes_stored_session(store):
    auth = AuthProvider(store)
    auth.login("jane@example.com", "pw")
    auth.logout()
    assert auth.current_user() is None
    assert store.get_item("token") is None
    assert store.get_item("user") is None
    assert AuthProvider(store).restore() is None


def test_store_file_is_owner_only(store):
    store.set_item("token", "abc")
    mode = stat.S_IMODE(os.stat(store.path).st_mode)
    assert mode & 0o077 == 0
    with open(store.path) as fh:
        assert json.load(fh) == {"token": "abc"}


def test_corrupt_store_reads_as_empty(store):
    os.makedirs(os.path.dirname(store.path), exist_ok=True)
    with open(store.path, "w") as fh:
        fh.write("{not json")
    assert store.get_item("token") is None
    assert AuthProvider(store).restore() is None
