"""Entry point for python -m digital_rain."""

import sys

from .tui.app import main

sys.exit(main())
