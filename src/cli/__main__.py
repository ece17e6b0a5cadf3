"""Allow ``python -m src.cli`` to run the artist search CLI."""

import sys

from src.cli.search import main

sys.exit(main())
