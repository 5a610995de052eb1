"""
Adapters package
----------------

Storage abstraction so that the report can read its sources and write its
artefacts both locally (filesystem) and in the cloud (S3) with the same
cleaning and statistics code.
"""

from .storage import (  # noqa: F401
    LocalStorageAdapter,
    S3StorageAdapter,
    StorageAdapter,
)

__all__ = [
    "StorageAdapter",
    "LocalStorageAdapter",
    "S3StorageAdapter",
]
