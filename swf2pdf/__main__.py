"""Allow ``python -m swf2pdf``."""

import sys

from swf2pdf.cli import main

sys.exit(main())
