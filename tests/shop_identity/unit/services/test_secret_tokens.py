"""Unit tests for one-time secret helpers."""

from shop_identity.services import generate_secret, hash_secret


def test_generate_secret_is_random_and_url_safe():
    first, second = generate_secret(), generate_secret()

    assert first != second
    assert len(first) >= 40
    assert all(c.isalnum() or c in "-_" for c in first)


def test_hash_secret_is_stable_sha256_hex():
    digest = hash_secret("abc")

    assert digest == hash_secret("abc")
    assert digest == "ba7816bf8f01cfea414140de5dae2223b00361a396177a9cb410ff61f20015ad"
    assert hash_secret("abd") != digest
