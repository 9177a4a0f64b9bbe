"""Unit tests for value codecs."""

import datetime
from decimal import Decimal

import pytest

from sqldto.mapping.codecs import (
    CastDateTime,
    CastIp2Long,
    Codec,
    FromDateTime,
    IntoDateTime,
    IntoViaConstructor,
    JsonValue,
    ToString,
)
from sqldto.protocols import FromStorage, ToStorage


def test_datetime_to_storage() -> None:
    value = datetime.datetime(2016, 1, 2, 3, 4, 5)
    assert FromDateTime().to_storage(value) == "2016-01-02 03:04:05"


def test_datetime_from_storage() -> None:
    assert IntoDateTime().from_storage("2016-01-02 03:04:05") == datetime.datetime(2016, 1, 2, 3, 4, 5)


def test_datetime_from_storage_accepts_datetime() -> None:
    """Test drivers that already return datetimes are passed through."""
    value = datetime.datetime(2020, 5, 6, 7, 8, 9)
    assert IntoDateTime().from_storage(value) is value


def test_cast_datetime_is_bidirectional() -> None:
    codec = CastDateTime()
    assert isinstance(codec, ToStorage)
    assert isinstance(codec, FromStorage)
    value = datetime.datetime(1999, 12, 31, 23, 59, 59)
    assert codec.from_storage(codec.to_storage(value)) == value


def test_ip2long() -> None:
    codec = CastIp2Long()
    assert codec.to_storage("221.32.3.143") == 3709862799
    assert codec.from_storage(3709862799) == "221.32.3.143"
    assert codec.from_storage("3709862799") == "221.32.3.143"


def test_ip2long_rejects_invalid_address() -> None:
    with pytest.raises(ValueError):
        CastIp2Long().to_storage("not-an-ip")


def test_json_value() -> None:
    codec = JsonValue()
    assert codec.to_storage({"a": [1, 2]}) == '{"a":[1,2]}'
    assert codec.from_storage('{"a":[1,2]}') == {"a": [1, 2]}


def test_to_string_is_write_only() -> None:
    codec = ToString()
    assert codec.to_storage(Decimal("1.50")) == "1.50"
    assert isinstance(codec, ToStorage)
    assert not isinstance(codec, FromStorage)


def test_into_via_constructor_is_read_only() -> None:
    codec = IntoViaConstructor(Decimal)
    assert codec.from_storage("2.25") == Decimal("2.25")
    assert isinstance(codec, FromStorage)
    assert not isinstance(codec, ToStorage)
    assert repr(codec) == "IntoViaConstructor('Decimal')"


@pytest.mark.parametrize(
    "codec",
    [CastDateTime(), CastIp2Long(), JsonValue()],
    ids=["datetime", "ip2long", "json"],
)
def test_none_passes_through(codec: object) -> None:
    """Test NULL columns stay None in both directions."""
    assert codec.to_storage(None) is None  # type: ignore[attr-defined]
    assert codec.from_storage(None) is None  # type: ignore[attr-defined]


def test_one_way_codecs_pass_none_through() -> None:
    assert ToString().to_storage(None) is None
    assert IntoViaConstructor(Decimal).from_storage(None) is None


def test_codec_exposes_only_given_directions() -> None:
    write_only = Codec(to_storage=str.upper)
    assert isinstance(write_only, ToStorage)
    assert not isinstance(write_only, FromStorage)
    assert write_only.to_storage("abc") == "ABC"

    both = Codec(to_storage=str, from_storage=int)
    assert both.to_storage(5) == "5"
    assert both.from_storage("5") == 5


def test_codec_requires_a_direction() -> None:
    with pytest.raises(ValueError, match="at least one"):
        Codec()
