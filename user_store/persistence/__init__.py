# ==============================================
# PERSISTENCE (the store file)
# ==============================================
#
# This package owns the JSON file that holds the user records.
# Operations only talk to a RecordRepository, never to the file
# encoding directly.
#
# Modules:
# --------
# - repository.py  → load/save records, file and in-memory backends
#
# ==============================================

from .repository import (
    RecordRepository,
    FileRepository,
    InMemoryRepository,
    encode_record,
    encode_records,
    decode_records,
)

__all__ = [
    "RecordRepository",
    "FileRepository",
    "InMemoryRepository",
    "encode_record",
    "encode_records",
    "decode_records",
]
