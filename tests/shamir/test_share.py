import base64
import json

import pytest

from secretsharing import Secret, Share
from secretsharing.crypto import smallest_prime_of_bit_length
from secretsharing.errors import (
    ChecksumMismatchError,
    ShareFieldError,
    ShareFormatError,
    UnsupportedVersionError,
)
from secretsharing.shamir import LEGACY_VERSION

LEGACY_SHARE = "0016C984F871AA524431793D2F0BB86319D870BEAF3FE106CEAF262E826DCB3FD1A0B81341"
PRIME = 2**127 - 1
TAG = Secret(1234567890).integrity_tag


OVERSIZED_Y = (
    b'{"version":1,"hmac":"ab","k":2,"n":3,"x":1,"y":' + b"9" * 5000 + b',"prime":7,"prime_bitlength":3}'
)


def make_share(**overrides) -> Share:
    fields = dict(x=1, y=12345, prime=PRIME, prime_bit_length=127, k=2, n=3, integrity_tag=TAG)
    fields.update(overrides)
    return Share(**fields)


class TestStructuredShare:
    def test_roundtrip(self) -> None:
        share = make_share()
        parsed = Share.from_string(share.to_string())
        assert parsed == share
        assert parsed.x == 1
        assert parsed.y == 12345
        assert parsed.prime == PRIME
        assert parsed.integrity_tag == TAG

    def test_payload_is_compact_json_with_wire_keys(self) -> None:
        text = make_share().to_string()
        assert "\n" not in text
        payload = json.loads(base64.urlsafe_b64decode(text))
        assert list(payload) == ["version", "hmac", "k", "n", "x", "y", "prime", "prime_bitlength"]
        assert payload["version"] == 1
        assert payload["hmac"] == TAG

    @pytest.mark.parametrize("missing", ["x", "y", "prime", "prime_bit_length", "k", "n", "integrity_tag"])
    def test_missing_field_raises(self, missing: str) -> None:
        with pytest.raises(ShareFieldError, match=missing):
            make_share(**{missing: None})

    def test_invalid_ranges_raise(self) -> None:
        with pytest.raises(ShareFieldError):
            make_share(k=4, n=3)
        with pytest.raises(ShareFieldError):
            make_share(y=PRIME)
        with pytest.raises(ShareFieldError):
            make_share(x=0)

    def test_from_mapping_accepts_wire_and_attribute_names(self) -> None:
        wire = {"version": 1, "hmac": TAG, "k": 2, "n": 3, "x": 1, "y": 12345, "prime": PRIME, "prime_bitlength": 127}
        assert Share.from_mapping(wire) == make_share()
        assert Share.from_mapping(make_share().to_dict()) == make_share()

    def test_from_mapping_rejects_unknown_keys(self) -> None:
        data = make_share().to_dict()
        data["unknown_arg"] = True
        with pytest.raises(ShareFieldError):
            Share.from_mapping(data)

    def test_unknown_version_rejected(self) -> None:
        payload = {"version": 2, "hmac": TAG, "k": 2, "n": 3, "x": 1, "y": 1, "prime": PRIME, "prime_bitlength": 127}
        text = base64.urlsafe_b64encode(json.dumps(payload).encode()).decode()
        with pytest.raises(UnsupportedVersionError):
            Share.from_string(text)

    @pytest.mark.parametrize(
        "text",
        [
            "",
            "not base64!",
            "Zm9v",
            base64.urlsafe_b64encode(b"[1, 2]").decode(),
            base64.urlsafe_b64encode(OVERSIZED_Y).decode(),
        ],
    )
    def test_garbage_rejected(self, text: str) -> None:
        with pytest.raises(ShareFormatError):
            Share.from_string(text)

    def test_non_string_rejected(self) -> None:
        with pytest.raises(ShareFormatError):
            Share.from_string(12345)

    def test_equality_and_hash(self) -> None:
        assert make_share() == make_share()
        assert make_share() != make_share(x=2)
        assert len({make_share(), make_share(), make_share(x=2)}) == 2


class TestLegacyShare:
    def test_known_string_roundtrip(self) -> None:
        share = Share.from_string(LEGACY_SHARE)
        assert share.version == LEGACY_VERSION
        assert share.is_legacy
        assert share.x == 1
        assert share.prime_bit_length == 261
        assert share.prime == smallest_prime_of_bit_length(261)
        assert share.k is None and share.integrity_tag is None
        assert share.to_string() == LEGACY_SHARE
        assert Share.from_string(share.to_string()) == share

    def test_wrong_version_rejected(self) -> None:
        with pytest.raises(UnsupportedVersionError):
            Share.from_string("1" + LEGACY_SHARE[1:])

    def test_checksum_change_rejected(self) -> None:
        # A0B8 -> A1B8 alters y without updating the checksum
        tampered = LEGACY_SHARE.replace("A0B8", "A1B8")
        with pytest.raises(ChecksumMismatchError):
            Share.from_string(tampered)

    def test_too_short_rejected(self) -> None:
        with pytest.raises(ShareFormatError):
            Share.from_string("0016C98")

    def test_legacy_construction_needs_point_fields(self) -> None:
        with pytest.raises(ShareFieldError):
            Share(x=1, y=None, prime=PRIME, prime_bit_length=127, k=None, n=None, integrity_tag=None, version=0)
