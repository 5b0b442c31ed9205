from council_portal.utils.hash_utils import (
    generate_token,
    hash_password,
    hash_token,
    verify_password,
)


def test_hash_password_round_trips() -> None:
    encoded = hash_password("correct horse")

    assert encoded.startswith("$2")
    assert verify_password("correct horse", encoded)
    assert not verify_password("wrong horse", encoded)


def test_hash_password_salts_each_digest() -> None:
    assert hash_password("same") != hash_password("same")


def test_verify_password_rejects_malformed_digest() -> None:
    assert not verify_password("anything", "not-a-digest")
    assert not verify_password("anything", "pbkdf2_sha256$abc$salt$digest")


def test_hash_password_accepts_long_passwords() -> None:
    password = "長" * 40

    assert verify_password(password, hash_password(password))


def test_hash_token_is_stable_and_hides_token() -> None:
    token = generate_token()

    assert token.startswith("cp-")
    assert hash_token(token) == hash_token(token)
    assert token not in hash_token(token)
    assert generate_token() != token
