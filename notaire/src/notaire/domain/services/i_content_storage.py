"""
Content storage interface.

Uploads blobs to a content-addressable network and returns the
content identifier.
"""

from abc import ABC, abstractmethod


class IContentStorage(ABC):
    """Abstract interface for content-addressable storage."""

    @abstractmethod
    async def put(self, data: bytes, filename: str = "blob") -> str:
        """
        Upload bytes and return their content identifier.

        One attempt per call, no retry.

        Args:
            data: Raw bytes to upload
            filename: Name reported to the storage daemon

        Returns:
            Content identifier (CID)

        Raises:
            ContentStorageUnavailableError: If the daemon is unreachable
            UploadRejectedError: If the daemon refuses the upload
        """

    @abstractmethod
    def gateway_url(self, cid: str) -> str:
        """Return an HTTP URL serving the given content."""

    @staticmethod
    def content_uri(cid: str) -> str:
        """Return the scheme reference used inside metadata documents."""
        return f"ipfs://{cid}"

    async def close(self) -> None:
        """Release network resources."""
