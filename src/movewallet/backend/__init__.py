"""
Backend Integration Layer.

Provides access to the backend that builds, hashes and broadcasts transactions.
"""

from movewallet.backend.interface import BackendInterface
from movewallet.backend.http import HttpBackend

__all__ = [
    "BackendInterface",
    "HttpBackend",
]
