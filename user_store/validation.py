# ==============================================
# Argument Validator
# ==============================================
#
# PURPOSE:
#   Check that an Arguments value names a known operation and
#   carries every flag that operation needs. Pure: no I/O.
#
# REQUIRED FLAGS:
# ---------------
#   list      → fileName
#   add       → fileName, item
#   remove    → fileName, id
#   findById  → fileName, id
#
# ==============================================

from user_store.errors import (
    MissingFileName,
    MissingId,
    MissingItem,
    MissingOperation,
    UnknownOperation,
)
from user_store.models import Arguments, Operation


def validate_args(args: Arguments) -> Operation:
    """
    Validate arguments for a single invocation.

    Args:
        args: Parsed command-line flags

    Returns:
        The operation to perform

    Raises:
        MissingOperation, UnknownOperation, MissingFileName,
        MissingItem, MissingId
    """
    if not args.operation:
        raise MissingOperation()

    operation = Operation.parse(args.operation)
    if operation is None:
        raise UnknownOperation(args.operation)

    if not args.file_name:
        raise MissingFileName()

    if operation is Operation.ADD:
        if not args.item:
            raise MissingItem()
    elif operation in (Operation.REMOVE, Operation.FIND_BY_ID):
        if not args.id:
            raise MissingId()

    return operation
