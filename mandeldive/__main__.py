"""
Allow running the package directly: python -m mandeldive
"""
import sys

from .cli import main

sys.exit(main())
