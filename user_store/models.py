# ==============================================
# Models (Data Classes)
# ==============================================
#
# PURPOSE:
#   The values that flow through the record store.
#
# ENUMS:
# ------
# - Operation(Enum): ADD, LIST, REMOVE, FIND_BY_ID
#     The unit of work performed per invocation. Values are the
#     exact strings accepted on the command line.
#
# CLASSES:
# --------
# - Record (dataclass)
#     A single user entry {id, email, age}.
#     - to_dict() -> dict              → Serialize (key order id, email, age)
#     - from_dict(data, strict) -> Record (classmethod) → Deserialize
#
# - Arguments (frozen dataclass)
#     The parsed command-line flags, built once and passed
#     explicitly to the dispatcher and every operation.
#     - from_mapping(mapping) -> Arguments (classmethod)
#
# ==============================================

from enum import Enum
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional


class Operation(Enum):
    """Operations the record store can perform."""
    ADD = "add"
    LIST = "list"
    REMOVE = "remove"
    FIND_BY_ID = "findById"

    @classmethod
    def parse(cls, value: str) -> Optional["Operation"]:
        """Return the operation named `value`, or None if there is none."""
        for operation in cls:
            if operation.value == value:
                return operation
        return None


class RecordFieldError(ValueError):
    """A record field holds a value of the wrong JSON type."""


def _is_int(value: Any) -> bool:
    # JSON true/false decode to bool, which is an int subclass
    return isinstance(value, int) and not isinstance(value, bool)


def _replace_surrogates(value: str) -> str:
    # json.loads joins valid surrogate pairs, so any left are lone
    return "".join(
        "\ufffd" if "\ud800" <= char <= "\udfff" else char
        for char in value
    )


# field name → (type check, zero value)
_FIELDS = {
    "id": (lambda v: isinstance(v, str), ""),
    "email": (lambda v: isinstance(v, str), ""),
    "age": (_is_int, 0),
}


@dataclass
class Record:
    """
    A single user entry.

    Identity is `id`; `add` keeps ids unique within a store.
    """
    id: str = ""
    email: str = ""
    age: int = 0

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization"""
        return {
            "id": self.id,
            "email": self.email,
            "age": self.age,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], strict: bool = True) -> "Record":
        """
        Create from a decoded JSON object.

        Keys match field names case-insensitively ("ID", "Email"); when
        several keys map to one field the last one wins. Missing keys
        take zero values and unknown keys are ignored. Lone UTF-16
        surrogates in strings become U+FFFD.

        A key with the wrong type raises RecordFieldError when `strict`;
        otherwise it is skipped and the field keeps its current value.

        Args:
            data: Decoded JSON object
            strict: Reject wrongly typed fields instead of skipping them

        Returns:
            Record
        """
        values = {name: zero for name, (_, zero) in _FIELDS.items()}
        for key, value in data.items():
            name = key.lower()
            if name not in _FIELDS or value is None:
                # JSON null leaves a field unchanged
                continue
            is_valid, _ = _FIELDS[name]
            if not is_valid(value):
                if strict:
                    raise RecordFieldError(
                        f"field '{key}' has invalid value {value!r}"
                    )
                continue
            if isinstance(value, str):
                value = _replace_surrogates(value)
            values[name] = value
        return cls(**values)


@dataclass(frozen=True)
class Arguments:
    """
    Explicit configuration for one invocation.

    Field names follow Python conventions; `from_mapping` accepts the
    flag names used on the command line (`operation`, `fileName`,
    `item`, `id`).
    """
    operation: str = ""
    file_name: str = ""
    item: str = ""
    id: str = ""

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Optional[str]]) -> "Arguments":
        return cls(
            operation=mapping.get("operation") or "",
            file_name=mapping.get("fileName") or "",
            item=mapping.get("item") or "",
            id=mapping.get("id") or "",
        )
