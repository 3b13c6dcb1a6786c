"""Allow ``python -m ychartsdl``."""

import sys

from .app.main import main

sys.exit(main())
