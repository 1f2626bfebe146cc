# ==============================================
# Operations
# ==============================================
#
# PURPOSE:
#   The four units of work. Each one reads the whole store from a
#   RecordRepository, optionally rewrites it, and writes its result
#   bytes to an output sink (any binary stream with .write()).
#
# FUNCTIONS:
# ----------
# - list_records(args, writer, repository, config)
#     Echo the raw store bytes. The content is not parsed.
#
# - add_record(args, writer, repository, config)
#     Create the store if absent, append the item unless its id is
#     already taken, rewrite and echo the store.
#
# - remove_record(args, writer, repository, config)
#     Drop every record with the given id, rewrite and echo the
#     store. Nothing is written if no record matched.
#
# - find_record(args, writer, repository, config)
#     Echo the last record with the given id, or nothing.
#
# RESULT MESSAGES:
# ----------------
#   "Item with id {id} already exists"   (add, duplicate id)
#   "Item with id {id} not found"        (remove, no match)
#
# ==============================================

import json
import logging
from typing import BinaryIO

from user_store.config import AppConfig
from user_store.errors import InvalidItem
from user_store.models import Arguments, Record, RecordFieldError
from user_store.persistence.repository import (
    RecordRepository,
    encode_record,
)


logger = logging.getLogger(__name__)

ALREADY_EXISTS_MESSAGE = "Item with id {id} already exists"
NOT_FOUND_MESSAGE = "Item with id {id} not found"


def parse_item(item: str, strict: bool = False) -> Record:
    """
    Parse the -item argument into a Record.

    In lenient mode any failure is ignored: malformed JSON or a
    non-object value gives an empty record, and a wrongly typed
    field keeps its zero value.

    Raises:
        InvalidItem: only when `strict` and the item is not a valid record
    """
    try:
        decoded = json.loads(item)
    except json.JSONDecodeError as e:
        if strict:
            raise InvalidItem(f"item is not valid JSON: {e}") from e
        logger.debug("Ignoring malformed item %r", item)
        return Record()

    if not isinstance(decoded, dict):
        if strict:
            raise InvalidItem(
                f"item must be a JSON object, got {type(decoded).__name__}"
            )
        logger.debug("Ignoring non-object item %r", item)
        return Record()

    try:
        return Record.from_dict(decoded, strict=strict)
    except RecordFieldError as e:
        raise InvalidItem(f"item {e}") from e


def list_records(
    args: Arguments,
    writer: BinaryIO,
    repository: RecordRepository,
    config: AppConfig,
) -> None:
    data = repository.read_bytes()
    logger.debug("Read %d bytes from %s", len(data), repository)
    writer.write(data)


def add_record(
    args: Arguments,
    writer: BinaryIO,
    repository: RecordRepository,
    config: AppConfig,
) -> None:
    item = parse_item(args.item, strict=config.strict_items)
    repository.ensure_exists()
    records = repository.load(allow_empty=True)

    for record in records:
        if record.id == item.id:
            message = ALREADY_EXISTS_MESSAGE.format(id=item.id)
            writer.write(message.encode(repository.encoding, errors="replace"))
            return

    records.append(item)
    data = repository.save(records)
    writer.write(data)


def remove_record(
    args: Arguments,
    writer: BinaryIO,
    repository: RecordRepository,
    config: AppConfig,
) -> None:
    records = repository.load()

    kept = [record for record in records if record.id != args.id]
    if len(kept) == len(records):
        message = NOT_FOUND_MESSAGE.format(id=args.id)
        writer.write(message.encode(repository.encoding, errors="replace"))
        return

    logger.debug("Removing %d records with id %s", len(records) - len(kept), args.id)
    data = repository.save(kept)
    writer.write(data)


def find_record(
    args: Arguments,
    writer: BinaryIO,
    repository: RecordRepository,
    config: AppConfig,
) -> None:
    records = repository.load()

    found = None
    for record in records:
        # last match wins
        if record.id == args.id:
            found = record

    if found is None:
        writer.write(b"")
        return
    writer.write(encode_record(found, repository.encoding))
