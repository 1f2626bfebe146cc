import json
import logging
import os
from typing import Iterable, List, Optional

from user_store.config import DEFAULT_FILE_MODE
from user_store.errors import (
    FileOpenError,
    IOReadError,
    IOWriteError,
    ParseError,
)
from user_store.models import Record, RecordFieldError


logger = logging.getLogger(__name__)


# ==============================================
# Encoding
# ==============================================
#
# The store is a compact JSON array: no whitespace, keys in the
# order id, email, age, non-ASCII written as UTF-8. An empty store
# is "[]".
#
def _dumps(value) -> str:
    return json.dumps(value, ensure_ascii=False, separators=(",", ":"))


def _encode(text: str, encoding: str) -> bytes:
    try:
        return text.encode(encoding)
    except UnicodeEncodeError as e:
        raise ParseError(f"store cannot be encoded as {encoding}: {e}") from e


def encode_record(record: Record, encoding: str = "utf-8") -> bytes:
    """Serialize a single record."""
    return _encode(_dumps(record.to_dict()), encoding)


def encode_records(records: Iterable[Record], encoding: str = "utf-8") -> bytes:
    """Serialize a whole store."""
    return _encode(_dumps([record.to_dict() for record in records]), encoding)


def decode_records(
    data: bytes,
    encoding: str = "utf-8",
    allow_empty: bool = False,
) -> List[Record]:
    """
    Parse store content into records.

    Args:
        data: Raw file content
        encoding: Text encoding of the content
        allow_empty: Treat zero-length content as an empty store
            instead of a parse failure

    Returns:
        Records in file order

    Raises:
        ParseError: content is not a JSON array of user objects
    """
    if allow_empty and len(data) == 0:
        return []

    try:
        decoded = json.loads(data.decode(encoding))
    except UnicodeDecodeError as e:
        raise ParseError(f"store is not valid {encoding}: {e}") from e
    except json.JSONDecodeError as e:
        raise ParseError(f"store is not valid JSON: {e}") from e

    if decoded is None:
        return []
    if not isinstance(decoded, list):
        raise ParseError(
            f"store must be a JSON array, got {type(decoded).__name__}"
        )

    records = []
    for index, item in enumerate(decoded):
        if item is None:
            records.append(Record())
            continue
        if not isinstance(item, dict):
            raise ParseError(
                f"record {index} must be a JSON object, got {type(item).__name__}"
            )
        try:
            records.append(Record.from_dict(item))
        except RecordFieldError as e:
            raise ParseError(f"record {index}: {e}") from e
    return records


# ==============================================
# RecordRepository
# ==============================================
#
# Base class. Subclasses provide raw byte access; the base class
# turns bytes into records and back.
#
#   Backend hooks (subclass):
#   - exists() -> bool
#   - ensure_exists() -> None     create an empty store if absent
#   - read_bytes() -> bytes       FileOpenError if absent
#   - write_bytes(data) -> None   replace the whole store
#
#   Record level:
#   - load(allow_empty=False) -> list[Record]
#   - save(records) -> bytes      returns what was written
#
class RecordRepository:
    """Load/save boundary between the operations and the store encoding."""

    def __init__(self, encoding: str = "utf-8"):
        self.encoding = encoding

    def exists(self) -> bool:
        raise NotImplementedError

    def ensure_exists(self) -> None:
        raise NotImplementedError

    def read_bytes(self) -> bytes:
        raise NotImplementedError

    def write_bytes(self, data: bytes) -> None:
        raise NotImplementedError

    def load(self, allow_empty: bool = False) -> List[Record]:
        """
        Read and parse the entire store.

        Args:
            allow_empty: Treat an empty store file as an empty array

        Returns:
            Records in file order
        """
        data = self.read_bytes()
        records = decode_records(data, self.encoding, allow_empty=allow_empty)
        logger.debug("Loaded %d records from %s", len(records), self)
        return records

    def save(self, records: List[Record]) -> bytes:
        """
        Serialize and overwrite the entire store.

        Returns:
            The serialized bytes that were written
        """
        data = encode_records(records, self.encoding)
        self.write_bytes(data)
        logger.info("Saved %d records to %s", len(records), self)
        return data


class FileRepository(RecordRepository):
    """Store kept in a single JSON file on disk."""

    def __init__(
        self,
        path: str,
        file_mode: int = DEFAULT_FILE_MODE,
        encoding: str = "utf-8",
    ):
        super().__init__(encoding)
        self.path = os.fspath(path)
        self.file_mode = file_mode

    def __str__(self) -> str:
        return self.path

    def exists(self) -> bool:
        return os.path.isfile(self.path)

    def ensure_exists(self) -> None:
        try:
            fd = os.open(self.path, os.O_RDWR | os.O_CREAT, self.file_mode)
        except OSError as e:
            raise FileOpenError(self.path, e.strerror or str(e)) from e
        os.close(fd)

    def read_bytes(self) -> bytes:
        try:
            f = open(self.path, "rb")
        except OSError as e:
            raise FileOpenError(self.path, e.strerror or str(e)) from e
        with f:
            try:
                return f.read()
            except OSError as e:
                raise IOReadError(f"cannot read {self.path}: {e}") from e

    def write_bytes(self, data: bytes) -> None:
        try:
            with open(self.path, "wb") as f:
                f.write(data)
        except OSError as e:
            raise IOWriteError(f"cannot write {self.path}: {e}") from e


class InMemoryRepository(RecordRepository):
    """
    Store kept in an in-memory buffer.

    `data` is None while the "file" does not exist. `writes` counts
    how many times the store was rewritten.
    """

    def __init__(self, data: Optional[bytes] = None, encoding: str = "utf-8"):
        super().__init__(encoding)
        self.data = data
        self.writes = 0

    def __str__(self) -> str:
        return "<memory>"

    def exists(self) -> bool:
        return self.data is not None

    def ensure_exists(self) -> None:
        if self.data is None:
            self.data = b""

    def read_bytes(self) -> bytes:
        if self.data is None:
            raise FileOpenError(str(self), "no such file")
        return bytes(self.data)

    def write_bytes(self, data: bytes) -> None:
        self.data = bytes(data)
        self.writes += 1
