"""Attachment binary storage on the local filesystem."""
from __future__ import annotations

import logging
from pathlib import Path

import aiofiles.os

logger = logging.getLogger(__name__)


class LocalDataStore:
    """Stores attachment and thumbnail binaries under a root directory.

    File ids are paths relative to the root, e.g. ``42/launch-7/screenshot.png``.
    """

    def __init__(self, root: Path | str) -> None:
        self.root = Path(root)

    def _resolve(self, file_id: str) -> Path:
        path = (self.root / file_id).resolve()
        if not path.is_relative_to(self.root.resolve()):
            raise ValueError(f"File id escapes the data store root: {file_id}")
        return path

    async def exists(self, file_id: str) -> bool:
        return await aiofiles.os.path.exists(self._resolve(file_id))

    async def delete(self, file_id: str) -> bool:
        """Delete a stored binary.

        Returns:
            True if the file was removed, False if it did not exist.
        """
        path = self._resolve(file_id)
        try:
            await aiofiles.os.remove(path)
        except FileNotFoundError:
            logger.warning("Binary %s is already gone from the data store", file_id)
            return False
        logger.debug("Removed binary %s", file_id)
        return True
