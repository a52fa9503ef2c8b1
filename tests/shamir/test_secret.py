import pytest

from secretsharing import Secret
from secretsharing.config import DEFAULT_SECRET_BITLENGTH, MAX_BITLENGTH
from secretsharing.errors import ConfigurationError, SecretBitLengthError, SecretFormatError

KNOWN_VALUE = 1234567890123456789012345678901234567890
KNOWN_STRING = "MWl6aWJqZjR6dmRibXZxNjZkNndtOGcxY2k="


class TestSecretConstruction:
    def test_random_by_default(self) -> None:
        s = Secret()
        assert s.bit_length == DEFAULT_SECRET_BITLENGTH
        assert s.has_value()
        assert s.has_valid_integrity_tag()

    def test_random_of_custom_bit_length(self) -> None:
        assert Secret.random(512).bit_length == 512
        with pytest.raises(ConfigurationError):
            Secret.random(MAX_BITLENGTH + 1)

    def test_explicit_value(self) -> None:
        s = Secret(1234567890)
        assert s.value == 1234567890
        assert s.bit_length == (1234567890).bit_length()

    def test_rejects_oversized_value(self) -> None:
        with pytest.raises(SecretBitLengthError):
            Secret(int("1" * 1234))
        assert Secret(2**MAX_BITLENGTH - 1).bit_length == MAX_BITLENGTH

    @pytest.mark.parametrize("value", [-1, 1.5, "123", True])
    def test_rejects_non_integer_or_negative(self, value) -> None:
        with pytest.raises(ConfigurationError):
            Secret(value)


class TestSecretIntegrity:
    def test_tag_follows_value(self) -> None:
        s = Secret(1234567890)
        first = s.integrity_tag
        s.value = 987654321
        assert s.integrity_tag != first
        assert s.has_valid_integrity_tag()

    def test_foreign_tag_is_invalid(self) -> None:
        s = Secret(1234567890)
        assert not s.has_valid_integrity_tag(Secret(1234567891).integrity_tag)

    @pytest.mark.parametrize("tag", ["", "not-hex", "ab", "00" * 32])
    def test_malformed_tag_returns_false(self, tag: str) -> None:
        s = Secret(1234567890)
        s.integrity_tag = tag
        assert s.has_valid_integrity_tag() is False

    def test_unset_value_is_invalid(self) -> None:
        s = Secret(1)
        s.value = None
        assert not s.has_value()
        assert not s.has_valid_integrity_tag()


class TestSecretEncoding:
    def test_known_vector(self) -> None:
        s1 = Secret(KNOWN_VALUE)
        assert s1.to_string() == KNOWN_STRING
        s2 = Secret.from_string(KNOWN_STRING)
        assert s2 == s1
        assert s2.value == KNOWN_VALUE

    def test_random_roundtrip(self) -> None:
        for bits in (1, 255, 4096):
            s = Secret.random(bits)
            assert Secret.from_string(s.to_string()) == s

    def test_zero_roundtrip(self) -> None:
        assert Secret.from_string(Secret(0).to_string()).value == 0

    @pytest.mark.parametrize("text", ["foo", "", "foo\nbar", "IT8=", "LTU="])
    def test_rejects_bad_strings(self, text: str) -> None:
        with pytest.raises(SecretFormatError):
            Secret.from_string(text)


def test_equality() -> None:
    assert Secret(1234567890) == Secret(1234567890)
    assert Secret(1234567890) != Secret(987654321)
    assert Secret(5) != 5


def test_secret_is_unhashable() -> None:
    with pytest.raises(TypeError):
        hash(Secret(5))
