# ==============================================
# Tests for the Operations
# ==============================================
#
# Operations run against InMemoryRepository; the file-backed path
# is covered in test_dispatcher.py and test_cli.py.
# ==============================================

import io
import json

import pytest

from user_store.config import AppConfig
from user_store.errors import FileOpenError, InvalidItem, ParseError
from user_store.models import Arguments, Record
from user_store.operations import (
    add_record,
    find_record,
    list_records,
    parse_item,
    remove_record,
)
from user_store.persistence.repository import InMemoryRepository


def run(handler, repository, config=None, **kwargs):
    """Run one operation and return its output bytes."""
    out = io.BytesIO()
    handler(Arguments(file_name="mem", **kwargs), out, repository, config or AppConfig())
    return out.getvalue()


class TestParseItem:
    """Lenient and strict item parsing."""

    def test_valid_item(self):
        assert parse_item('{"id":"2","email":"b@x.com","age":25}') == Record("2", "b@x.com", 25)

    def test_malformed_item_is_zero_record(self):
        assert parse_item("{not json") == Record()

    def test_non_object_item_is_zero_record(self):
        assert parse_item("[1, 2]") == Record()

    def test_wrong_typed_field_is_zeroed(self):
        assert parse_item('{"id":"2","email":"b@x.com","age":"old"}') == Record("2", "b@x.com", 0)

    def test_strict_malformed_item(self):
        with pytest.raises(InvalidItem):
            parse_item("{not json", strict=True)

    def test_strict_non_object_item(self):
        with pytest.raises(InvalidItem):
            parse_item('"2"', strict=True)

    def test_strict_wrong_typed_field(self):
        with pytest.raises(InvalidItem):
            parse_item('{"id":2}', strict=True)

    def test_strict_valid_item(self):
        assert parse_item('{"id":"2"}', strict=True) == Record("2", "", 0)


class TestList:
    def test_echoes_raw_bytes(self, memory_repository, sample_file_content):
        assert run(list_records, memory_repository) == sample_file_content

    def test_malformed_content_passes_through(self):
        assert run(list_records, InMemoryRepository(b"not json")) == b"not json"

    def test_missing_file(self):
        with pytest.raises(FileOpenError):
            run(list_records, InMemoryRepository())

    def test_does_not_write(self, memory_repository):
        run(list_records, memory_repository)
        assert memory_repository.writes == 0


class TestAdd:
    ITEM = '{"id":"2","email":"b@x.com","age":25}'

    def test_appends_and_echoes(self, memory_repository):
        output = run(add_record, memory_repository, item=self.ITEM)
        expected = (
            b'[{"id":"1","email":"a@x.com","age":30},'
            b'{"id":"2","email":"b@x.com","age":25}]'
        )
        assert output == expected
        assert memory_repository.data == expected

    def test_creates_missing_store(self):
        repository = InMemoryRepository()
        output = run(add_record, repository, item=self.ITEM)
        assert output == b'[{"id":"2","email":"b@x.com","age":25}]'
        assert repository.data == output

    def test_empty_store_file(self):
        repository = InMemoryRepository(b"")
        run(add_record, repository, item=self.ITEM)
        assert json.loads(repository.data) == [{"id": "2", "email": "b@x.com", "age": 25}]

    def test_duplicate_id(self, memory_repository, sample_file_content):
        output = run(add_record, memory_repository, item='{"id":"1","email":"x@x.com","age":1}')
        assert output == b"Item with id 1 already exists"
        assert memory_repository.data == sample_file_content
        assert memory_repository.writes == 0

    def test_malformed_store(self):
        repository = InMemoryRepository(b"[{")
        with pytest.raises(ParseError):
            run(add_record, repository, item=self.ITEM)
        assert repository.data == b"[{"

    def test_lenient_malformed_item_adds_zero_record(self):
        repository = InMemoryRepository(b"[]")
        output = run(add_record, repository, item="oops")
        assert output == b'[{"id":"","email":"","age":0}]'

    def test_strict_malformed_item_leaves_store(self, memory_repository, sample_file_content):
        with pytest.raises(InvalidItem):
            run(add_record, memory_repository, config=AppConfig(strict_items=True), item="oops")
        assert memory_repository.data == sample_file_content


class TestRemove:
    def test_removes_and_echoes(self, memory_repository):
        output = run(remove_record, memory_repository, id="1")
        assert output == b"[]"
        assert memory_repository.data == b"[]"

    def test_not_found(self, memory_repository, sample_file_content):
        output = run(remove_record, memory_repository, id="9")
        assert output == b"Item with id 9 not found"
        assert memory_repository.data == sample_file_content
        assert memory_repository.writes == 0

    def test_removes_every_match_keeping_order(self):
        repository = InMemoryRepository(json.dumps([
            {"id": "a", "email": "1", "age": 1},
            {"id": "b", "email": "2", "age": 2},
            {"id": "a", "email": "3", "age": 3},
            {"id": "c", "email": "4", "age": 4},
        ]).encode())
        run(remove_record, repository, id="a")
        assert [r["id"] for r in json.loads(repository.data)] == ["b", "c"]

    def test_empty_file_is_parse_error(self):
        with pytest.raises(ParseError):
            run(remove_record, InMemoryRepository(b""), id="1")

    def test_missing_file(self):
        with pytest.raises(FileOpenError):
            run(remove_record, InMemoryRepository(), id="1")


class TestFindById:
    def test_found(self, memory_repository):
        assert run(find_record, memory_repository, id="1") == b'{"id":"1","email":"a@x.com","age":30}'

    def test_not_found_is_empty(self, memory_repository):
        assert run(find_record, memory_repository, id="9") == b""

    def test_empty_store(self):
        assert run(find_record, InMemoryRepository(b"[]"), id="1") == b""

    def test_last_match_wins(self):
        repository = InMemoryRepository(
            b'[{"id":"1","email":"first","age":1},{"id":"1","email":"last","age":2}]'
        )
        assert json.loads(run(find_record, repository, id="1"))["email"] == "last"

    def test_never_writes(self, memory_repository):
        run(find_record, memory_repository, id="1")
        assert memory_repository.writes == 0

    def test_malformed_store(self):
        with pytest.raises(ParseError):
            run(find_record, InMemoryRepository(b"{}"), id="1")


class TestSurrogateEscapes:
    """Lone \\uXXXX surrogate escapes are legal JSON; they become U+FFFD."""

    REPLACEMENT = "\ufffd".encode("utf-8")

    def test_lenient_item(self):
        repository = InMemoryRepository(b"[]")
        output = run(add_record, repository, item='{"id":"\\ud800","email":"e","age":1}')
        assert output == b'[{"id":"' + self.REPLACEMENT + b'","email":"e","age":1}]'
        assert repository.data == output

    def test_strict_item(self):
        repository = InMemoryRepository(b"[]")
        config = AppConfig(strict_items=True)
        output = run(add_record, repository, config=config, item='{"id":"7","email":"\\udc00x"}')
        assert json.loads(output) == [{"id": "7", "email": "\ufffdx", "age": 0}]

    def test_find_in_store(self):
        repository = InMemoryRepository(b'[{"id":"1","email":"\\ud800","age":2}]')
        output = run(find_record, repository, id="1")
        assert output == b'{"id":"1","email":"' + self.REPLACEMENT + b'","age":2}'

    def test_surrogate_pair_kept(self):
        repository = InMemoryRepository(b'[{"id":"1","email":"\\ud83d\\ude00","age":2}]')
        assert json.loads(run(find_record, repository, id="1"))["email"] == "\U0001F600"


class TestAddItemOrdering:
    """A rejected item never creates the store."""

    def test_strict_invalid_item_does_not_create_store(self):
        repository = InMemoryRepository()
        with pytest.raises(InvalidItem):
            run(add_record, repository, config=AppConfig(strict_items=True), item="[]")
        assert not repository.exists()
