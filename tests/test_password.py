import pytest

from security.password import hash_password, verify_password


def test_hash_verifies_and_is_salted():
    first = hash_password("john123", rounds=4)
    second = hash_password("john123", rounds=4)
    assert first != second
    assert first.startswith("$2b$04$")
    assert verify_password("john123", first)
    assert not verify_password("john124", first)


@pytest.mark.parametrize("rounds", [3, 32])
def test_rounds_out_of_range(rounds):
    with pytest.raises(ValueError):
        hash_password("john123", rounds=rounds)


@pytest.mark.parametrize("plain", ["", None, 123])
def test_empty_or_non_string_password_cannot_be_hashed(plain):
    with pytest.raises(ValueError):
        hash_password(plain, rounds=4)


@pytest.mark.parametrize("plain, pw_hash", [
    ("john123", ""),
    ("john123", "not-a-bcrypt-hash"),
    ("john123", None),
    (None, "$2b$04$abcdefghijklmnopqrstuuabcdefghijklmnopqrstuvwxyz01234"),
    ("", "$2b$04$abcdefghijklmnopqrstuuabcdefghijklmnopqrstuvwxyz01234"),
])
def test_unusable_input_is_a_mismatch(plain, pw_hash):
    assert verify_password(plain, pw_hash) is False
