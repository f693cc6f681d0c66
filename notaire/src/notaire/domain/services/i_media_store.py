"""
Media store interface.
"""

from abc import ABC, abstractmethod


class IMediaStore(ABC):
    """Primary storage for raw asset media."""

    @abstractmethod
    async def save(self, asset_id: str, data: bytes) -> str:
        """
        Persist media bytes for an asset.

        Args:
            asset_id: Asset the media belongs to
            data: Raw media bytes

        Returns:
            Media reference usable to retrieve the bytes

        Raises:
            StorageWriteFailedError: If the bytes cannot be written
        """
