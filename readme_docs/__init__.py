"""
Synchronize local documentation files with a ReadMe category.

Clears, creates and updates ReadMe documents from files matching a glob pattern, and resolves the version a new
documentation version is based on.
"""

__version__ = "0.1.0"

__all__ = ["__version__"]

__author__ = "Levente Hunyadi"
__copyright__ = "Copyright 2022-2026, Levente Hunyadi"
__license__ = "MIT"
__maintainer__ = "Levente Hunyadi"
__status__ = "Production"
