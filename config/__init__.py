"""
Initializes the config package.

The config package holds the defaults of a flag check run, making them
accessible throughout the harness.
"""

# This import is done to facilitate cleaner imports in the project
# `from config import HarnessConfig` instead of `from config.app import HarnessConfig`
from .app import HarnessConfig

__all__ = ["HarnessConfig"]
