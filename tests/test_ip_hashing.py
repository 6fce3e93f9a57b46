# tests/test_ip_hashing.py
import hashlib
import logging

from safepsy_api.utils.ip_hashing import IPHasher

from tests.conftest import TEST_SALT, make_settings


def test_disabled_by_default():
    assert IPHasher().hash("1.2.3.4") is None
    assert IPHasher.from_settings(make_settings()).hash("1.2.3.4") is None


def test_hash_is_deterministic():
    hasher = IPHasher(enabled=True, salt=TEST_SALT)
    assert hasher.hash("1.2.3.4") == hasher.hash("1.2.3.4")
    assert hasher.hash("1.2.3.4") == hashlib.sha256(("1.2.3.4" + TEST_SALT).encode()).hexdigest()


def test_changing_salt_changes_hash():
    first = IPHasher(enabled=True, salt=TEST_SALT).hash("1.2.3.4")
    second = IPHasher(enabled=True, salt=TEST_SALT[::-1]).hash("1.2.3.4")
    assert first != second


def test_hash_is_hex_sha256():
    digest = IPHasher(enabled=True, salt=TEST_SALT).hash("1.2.3.4")
    assert len(digest) == 64
    int(digest, 16)


def test_short_salt_logs_warning_and_skips(caplog):
    hasher = IPHasher(enabled=True, salt="too-short")
    with caplog.at_level(logging.WARNING):
        assert hasher.hash("1.2.3.4") is None
    assert "IP_SALT is not secure" in caplog.text


def test_blank_ip_is_not_hashed():
    hasher = IPHasher(enabled=True, salt=TEST_SALT)
    assert hasher.hash("") is None
    assert hasher.hash("   ") is None
    assert hasher.hash(None) is None


def test_from_settings_uses_salt():
    hasher = IPHasher.from_settings(make_settings(ip_hashing_enabled=True, ip_salt=TEST_SALT))
    assert hasher.hash("1.2.3.4") == IPHasher(enabled=True, salt=TEST_SALT).hash("1.2.3.4")
