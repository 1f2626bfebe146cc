# ==============================================
# Dispatcher
# ==============================================
#
# PURPOSE:
#   Single entry point used by the CLI (and by tests):
#     validate arguments → pick operation → run it.
#   Validation errors propagate before any file is touched.
#
# ==============================================

import logging
from typing import BinaryIO, Callable, Dict, Optional

from user_store.config import AppConfig, get_config
from user_store.models import Arguments, Operation
from user_store.operations import (
    add_record,
    find_record,
    list_records,
    remove_record,
)
from user_store.persistence.repository import FileRepository, RecordRepository
from user_store.validation import validate_args


logger = logging.getLogger(__name__)

OperationHandler = Callable[[Arguments, BinaryIO, RecordRepository, AppConfig], None]

HANDLERS: Dict[Operation, OperationHandler] = {
    Operation.LIST: list_records,
    Operation.ADD: add_record,
    Operation.REMOVE: remove_record,
    Operation.FIND_BY_ID: find_record,
}


def perform(
    args: Arguments,
    writer: BinaryIO,
    repository: Optional[RecordRepository] = None,
    config: Optional[AppConfig] = None,
) -> None:
    """
    Validate `args` and run the operation they name.

    Args:
        args: Parsed command-line flags
        writer: Binary output sink for the result
        repository: Store to operate on. Defaults to a FileRepository
            for args.file_name.
        config: Application configuration. If None, loads from environment.

    Raises:
        UserStoreError: validation, I/O or parse failure
    """
    operation = validate_args(args)
    config = config or get_config()

    if repository is None:
        repository = FileRepository(
            args.file_name,
            file_mode=config.file_mode,
            encoding=config.encoding,
        )

    logger.debug("Running %s on %s", operation.value, repository)
    HANDLERS[operation](args, writer, repository, config)
