import sys

from .cli import analyze_main

sys.exit(analyze_main())
