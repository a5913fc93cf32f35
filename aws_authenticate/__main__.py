"""Entry point for python -m aws_authenticate."""

import sys

from .cli import main

sys.exit(main())
