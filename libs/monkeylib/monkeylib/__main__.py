"""Entry point for ``python -m monkeylib``."""

import sys

from monkeylib.repl import main

sys.exit(main())
