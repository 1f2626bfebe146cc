# ==============================================
# User Store
# ==============================================
#
# Package Structure:
#
# user_store/
# ├── persistence/      # Store file: load/save records
# ├── config.py         # Configuration management
# ├── errors.py         # Error taxonomy
# ├── models.py         # Record, Arguments, Operation
# ├── validation.py     # Argument validator
# ├── operations.py     # add / list / remove / findById
# ├── dispatcher.py     # validate → route → run
# └── cli.py            # Command line entry point
#
# ==============================================

from .dispatcher import perform
from .errors import UserStoreError
from .models import Arguments, Operation, Record

__version__ = "0.1.0"

__all__ = [
    "perform",
    "UserStoreError",
    "Arguments",
    "Operation",
    "Record",
]
