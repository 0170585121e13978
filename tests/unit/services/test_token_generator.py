from datetime import datetime, timedelta

from src.app.services.token_generator import digest_of, new_opaque_token


def test_digest_is_deterministic():
    assert digest_of("some-token") == digest_of("some-token")
    assert digest_of("some-token") != digest_of("some-token!")


def test_new_token_has_256_bits_and_stores_only_digest():
    token = new_opaque_token(timedelta(minutes=20))

    assert len(token.plaintext) == 64  # 32 random bytes, hex encoded
    assert token.digest == digest_of(token.plaintext)
    assert token.plaintext not in token.digest
    assert len(token.digest) == 64


def test_new_tokens_are_unique():
    tokens = {new_opaque_token(timedelta(minutes=20)).plaintext for _ in range(50)}
    assert len(tokens) == 50


def test_expiry_is_now_plus_window():
    now = datetime(2024, 1, 1, 12, 0, 0)
    token = new_opaque_token(timedelta(minutes=20), clock=lambda: now)
    assert token.expires_at == datetime(2024, 1, 1, 12, 20, 0)
