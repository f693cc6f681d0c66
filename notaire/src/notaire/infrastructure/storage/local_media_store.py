"""
Filesystem media store.
"""

import asyncio
from pathlib import Path

from notaire.domain.exceptions import StorageWriteFailedError
from notaire.domain.services.i_media_store import IMediaStore
from notaire.infrastructure.monitoring.logger import get_logger

logger = get_logger(__name__)


class LocalMediaStore(IMediaStore):
    """
    Stores raw media as {base_path}/{asset_id}{extension}.

    Writes go to a temporary file first and are renamed into place,
    so a failed write never leaves a truncated file behind.
    """

    def __init__(self, base_path: str, extension: str = ".jpg"):
        self.base_path = Path(base_path)
        self.extension = extension

    async def save(self, asset_id: str, data: bytes) -> str:
        target = self.base_path / f"{asset_id}{self.extension}"

        try:
            await asyncio.to_thread(self._write, target, data)
        except OSError as e:
            logger.error(f"Failed to write media for asset {asset_id}: {e}")
            raise StorageWriteFailedError(str(target), str(e)) from e

        logger.debug(f"Stored {len(data)} bytes of media at {target}")
        return str(target)

    @staticmethod
    def _write(target: Path, data: bytes) -> None:
        target.parent.mkdir(parents=True, exist_ok=True)
        tmp = target.with_suffix(target.suffix + ".part")
        tmp.write_bytes(data)
        tmp.replace(target)
