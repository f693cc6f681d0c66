"""
Media and content storage adapters.
"""

from notaire.infrastructure.storage.ipfs_content_storage import IpfsContentStorage
from notaire.infrastructure.storage.local_media_store import LocalMediaStore

__all__ = ["IpfsContentStorage", "LocalMediaStore"]
