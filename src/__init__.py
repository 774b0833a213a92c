"""Bacterial growth simulator source package.

Exports the calculator API for convenient imports. The `viz` package and the
Streamlit `ui` package build on top of it and are imported separately to keep
plotting dependencies out of module import time.
"""

from .growth_calculator import *  # re-export calculator helpers
from .growth_calculator import __all__ as _calculator_all

# Explicitly expose the calculator API when users do `from src import *`.
__all__ = list(_calculator_all)
