"""Unit tests for Statement row mapping."""

from unittest.mock import MagicMock

import pytest

from sqldto.mapping.metadata import MetadataCache
from sqldto.statement import Statement
from tests.models import Person


@pytest.fixture
def handle() -> MagicMock:
    mock = MagicMock()
    mock.execute.return_value = True
    return mock


def test_execute_positional(handle: MagicMock) -> None:
    statement: Statement = Statement(handle, "SELECT ?", None, MetadataCache())
    assert statement.execute([1]) is True
    handle.execute.assert_called_once_with([1])


def test_execute_mapping(handle: MagicMock) -> None:
    statement: Statement = Statement(handle, "SELECT :a", None, MetadataCache())
    statement.execute({"a": 1})
    handle.execute.assert_called_once_with({"a": 1})


def test_execute_record_binds_named_parameters(handle: MagicMock) -> None:
    """Test a record is dehydrated into named parameters."""
    statement: Statement = Statement(handle, "UPDATE people SET first_name = :first_name", None, MetadataCache())
    statement.execute(Person(id=1, firstName="Ada", lastName="L", nick=None))
    handle.execute.assert_called_once_with({"id": 1, "first_name": "Ada", "last_name": "L", "alias": None})


def test_fetch_into_record(handle: MagicMock) -> None:
    handle.fetch_one.return_value = {"id": 1, "first_name": "Ada", "last_name": "L", "alias": None}
    statement: Statement[Person] = Statement(handle, "SELECT * FROM people", Person, MetadataCache())
    person = statement.fetch_one()
    assert isinstance(person, Person)
    assert person.firstName == "Ada"


def test_fetch_all_into_record(handle: MagicMock) -> None:
    handle.fetch_all.return_value = [
        {"id": 1, "first_name": "A", "last_name": "B", "alias": None},
        {"id": 2, "first_name": "C", "last_name": "D", "alias": "x"},
    ]
    statement: Statement[Person] = Statement(handle, "SELECT * FROM people", Person, MetadataCache())
    people = statement.fetch_all()
    assert [p.id for p in people] == [1, 2]


def test_fetch_one_exhausted(handle: MagicMock) -> None:
    handle.fetch_one.return_value = None
    statement: Statement[Person] = Statement(handle, "SELECT * FROM people", Person, MetadataCache())
    assert statement.fetch_one() is None


def test_fetch_primitive(handle: MagicMock) -> None:
    handle.fetch_one.return_value = {"COUNT(*)": "4"}
    statement: Statement[int] = Statement(handle, "SELECT COUNT(*) FROM people", int, MetadataCache())
    assert statement.fetch_one() == 4


@pytest.mark.parametrize("target", [None, dict], ids=["none", "dict"])
def test_fetch_raw_rows(handle: MagicMock, target: object) -> None:
    handle.fetch_all.return_value = [{"a": 1}]
    statement: Statement = Statement(handle, "SELECT 1 AS a", target, MetadataCache())
    assert statement.fetch_all() == [{"a": 1}]


def test_record_target_metadata_resolved_eagerly(handle: MagicMock) -> None:
    cache = MetadataCache()
    Statement(handle, "SELECT * FROM people", Person, cache)
    assert Person in cache


def test_repr(handle: MagicMock) -> None:
    statement: Statement = Statement(handle, "SELECT 1", int, MetadataCache())
    assert repr(statement) == "Statement('SELECT 1', target='int')"
    assert statement.handle is handle
