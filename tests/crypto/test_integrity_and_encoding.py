import pytest

from secretsharing.crypto import (
    base36_to_int,
    compute_integrity_tag,
    int_to_base36,
    random_int,
    tags_match,
    urlsafe_decode,
    urlsafe_encode,
    values_equal,
)


def test_integrity_tag_is_stable_hex() -> None:
    tag = compute_integrity_tag(1234567890)
    assert tag == compute_integrity_tag(1234567890)
    assert len(tag) == 64
    int(tag, 16)
    assert tag != compute_integrity_tag(1234567891)


def test_tags_match_rejects_malformed_candidates() -> None:
    tag = compute_integrity_tag(5)
    assert tags_match(tag, tag)
    assert not tags_match(tag, "")
    assert not tags_match(tag, None)
    assert not tags_match(tag, "zz" * 32)
    assert not tags_match(tag, tag[:-2])
    assert not tags_match(tag, compute_integrity_tag(6))


def test_values_equal() -> None:
    assert values_equal(0, 0)
    assert values_equal(2**300 + 5, 2**300 + 5)
    assert not values_equal(255, 256)


def test_base36_known_value() -> None:
    assert int_to_base36(1234567890123456789012345678901234567890) == "1izibjf4zvdbmvq66d6wm8g1ci"
    assert base36_to_int("1izibjf4zvdbmvq66d6wm8g1ci") == 1234567890123456789012345678901234567890
    assert int_to_base36(0) == "0"


def test_base36_rejects_garbage() -> None:
    with pytest.raises(ValueError):
        base36_to_int("not base36!")
    with pytest.raises(ValueError):
        base36_to_int("")


def test_urlsafe_decode_is_strict() -> None:
    assert urlsafe_decode(urlsafe_encode(b"\xfb\xff")) == b"\xfb\xff"
    with pytest.raises(ValueError):
        urlsafe_decode("foo")
    with pytest.raises(ValueError):
        urlsafe_decode("Zm9v\nYmFy")


def test_random_int_has_exact_bit_length() -> None:
    for bits in (1, 7, 8, 9, 256, 4096):
        assert random_int(bits).bit_length() == bits
