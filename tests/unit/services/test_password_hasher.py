"""
Unit tests for PasswordHasher
"""
import pytest
from passlib.utils.binary import ab64_decode

from src.app.services.password_hasher import MIN_ITERATIONS, PasswordHasher


def test_hash_then_verify(hasher):
    encoded = hasher.hash("secret1")

    assert hasher.verify("secret1", encoded) is True


def test_wrong_password_is_rejected(hasher):
    encoded = hasher.hash("secret1")

    assert hasher.verify("secret2", encoded) is False
    assert hasher.verify("", encoded) is False


def test_hash_uses_fresh_salt(hasher):
    first = hasher.hash("same-password")
    second = hasher.hash("same-password")

    assert first != second
    assert hasher.verify("same-password", first)
    assert hasher.verify("same-password", second)


def test_encoding_is_self_describing(hasher):
    empty, scheme, iterations, salt, key = hasher.hash("secret1").split("$")

    assert empty == ""
    assert scheme == "pbkdf2-sha256"
    assert int(iterations) == MIN_ITERATIONS
    assert len(ab64_decode(salt)) == 16
    assert len(ab64_decode(key)) == 32


def test_old_records_verify_after_iteration_increase():
    old = PasswordHasher(iterations=100_000).hash("secret1")
    newer = PasswordHasher(iterations=150_000)

    assert newer.verify("secret1", old) is True
    assert newer.hash("secret1").split("$")[2] == "150000"


def test_unpaired_surrogate_password(hasher):
    encoded = hasher.hash("abcdef\ud800")

    assert hasher.verify("abcdef\ud800", encoded) is True
    assert hasher.verify("\ud800", encoded) is False
    assert hasher.verify("\ud800", hasher.hash("secret1")) is False
    assert hasher.dummy_verify("\ud800") is False


@pytest.mark.parametrize(
    "encoded",
    [
        "",
        "not-a-hash",
        "$pbkdf2-sha256$abc$AAAA$AAAA",
        "$pbkdf2-sha256$100000$!!!$AAAA",
        "$pbkdf2-sha256$100000$AAAA$",
        "$2b$12$AAAAAAAAAAAAAAAAAAAAAA",
        "$pbkdf2-sha256$100000$AAAA$AAAA$extra",
    ],
)
def test_malformed_encoding_fails_closed(hasher, encoded):
    assert hasher.verify("secret1", encoded) is False


def test_non_string_encoding_fails_closed(hasher):
    assert hasher.verify("secret1", None) is False


def test_dummy_verify_never_succeeds(hasher):
    assert hasher.dummy_verify("anything") is False


def test_iterations_below_minimum_are_rejected():
    with pytest.raises(ValueError):
        PasswordHasher(iterations=1000)
