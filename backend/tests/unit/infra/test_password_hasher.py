# tests/unit/infra/test_password_hasher.py
from __future__ import annotations

from commerce_auth.infra.security import WerkzeugPasswordHasher


def test_hash_is_salted_and_verifiable():
    hasher = WerkzeugPasswordHasher("pbkdf2:sha256:1000")
    first, second = hasher.hash("hunter2"), hasher.hash("hunter2")

    assert first != second
    assert "hunter2" not in first
    assert hasher.verify("hunter2", first)
    assert not hasher.verify("hunter3", first)


def test_default_method_round_trip():
    hasher = WerkzeugPasswordHasher()
    assert hasher.verify("pw", hasher.hash("pw"))


def test_corrupt_or_empty_hash_never_matches():
    hasher = WerkzeugPasswordHasher()
    assert hasher.verify("pw", "") is False
    assert hasher.verify("pw", "not-a-werkzeug-hash") is False
