"""Allow ``python -m mt_media_store``."""

import sys

from .cli import main

sys.exit(main())
