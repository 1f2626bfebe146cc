import sys

from user_store.cli import main

sys.exit(main())
