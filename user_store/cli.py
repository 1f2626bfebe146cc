# ==============================================
# CLI — Command Line Entry Point
# ==============================================
#
# PURPOSE:
#   Parse flags, run one operation, write the result to stdout.
#
# COMMANDS:
# ---------
# 1. List every record:
#    user-store -operation=list -fileName=users.json
#
# 2. Add a record:
#    user-store -operation=add -fileName=users.json \
#        -item='{"id":"1","email":"a@x.com","age":30}'
#
# 3. Remove a record:
#    user-store -operation=remove -fileName=users.json -id=1
#
# 4. Find a record:
#    user-store -operation=findById -fileName=users.json -id=1
#
# `python -m user_store ...` works the same way. Double-dash
# spellings (--operation) are accepted too.
#
# EXIT STATUS:
# ------------
#   0 → success (result bytes on stdout, no trailing newline)
#   1 → any UserStoreError ("error: <message>" on stderr)
#
# ==============================================

import argparse
import logging
import sys
from typing import BinaryIO, List, Optional

from user_store.config import AppConfig, get_config
from user_store.dispatcher import perform
from user_store.errors import UserStoreError
from user_store.models import Arguments


logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="user-store",
        description="Maintain user records stored as a JSON array in a file.",
        allow_abbrev=False,
    )
    # Missing flags default to "" so the validator reports them
    ap.add_argument("-operation", "--operation", dest="operation", default="",
                    help="add, list, remove or findById")
    ap.add_argument("-fileName", "--fileName", dest="file_name", default="",
                    help="path to the JSON record file")
    ap.add_argument("-item", "--item", dest="item", default="",
                    help='JSON record for add, e.g. {"id":"1","email":"a@x.com","age":30}')
    ap.add_argument("-id", "--id", dest="id", default="",
                    help="record id for remove and findById")
    return ap


def parse_args(argv: Optional[List[str]] = None) -> Arguments:
    ns = build_parser().parse_args(argv)
    return Arguments(
        operation=ns.operation,
        file_name=ns.file_name,
        item=ns.item,
        id=ns.id,
    )


def configure_logging(config: AppConfig) -> None:
    # stdout carries only result bytes
    logging.basicConfig(
        level=getattr(logging, config.log_level, logging.WARNING),
        format=LOG_FORMAT,
        stream=sys.stderr,
    )


def main(
    argv: Optional[List[str]] = None,
    stdout: Optional[BinaryIO] = None,
) -> int:
    """
    Run the command line tool.

    Args:
        argv: Flags without the program name. Defaults to sys.argv[1:].
        stdout: Binary result sink. Defaults to sys.stdout.buffer.

    Returns:
        Process exit status
    """
    config = get_config()
    configure_logging(config)

    args = parse_args(argv)
    writer = stdout if stdout is not None else sys.stdout.buffer

    try:
        perform(args, writer, config=config)
    except UserStoreError as e:
        logger.debug("Operation %r failed", args.operation, exc_info=True)
        print(f"error: {e}", file=sys.stderr)
        return 1
    finally:
        writer.flush()

    return 0


if __name__ == "__main__":
    sys.exit(main())
