import pytest

from colima.sha import Digest, sha1, sha256


def test_sha256_empty_string():
    assert sha256("").hex() == "e3b0c44298fc1c149afbf4c8996fb92427ae41e4649b934ca495991b7852b855"


def test_sha1_empty_string():
    assert sha1("").hex() == "da39a3ee5e6b4b0d3255bfef95601890afd80709"


@pytest.mark.parametrize("text", ["", "https://example.com/file", "ünïcode"])
def test_digest_lengths(text):
    assert len(bytes(sha256(text))) == 32
    assert len(bytes(sha1(text))) == 20
    assert len(sha256(text).hex()) == 64
    assert len(sha1(text).hex()) == 40


def test_str_is_hex():
    digest = sha256("abc")
    assert str(digest) == digest.hex()
    assert bytes.fromhex(digest.hex()) == bytes(digest)


def test_deterministic_and_distinct():
    assert sha256("a") == sha256("a")
    assert sha256("a").hex() != sha256("b").hex()
    assert sha1("a") == sha1("a")


def test_hex_is_lower_case():
    digest = Digest(b"\xab\xcd")
    assert digest.hex() == "abcd"