"""Scratch files exchanged with external processes."""

import logging
import os
import tempfile
from typing import Optional

from engines.errors import CodecIOError

logger = logging.getLogger(__name__)


class TemporaryFile:
    """Unique file named '<basename>-XXXXXX.<extension>', removed when the block exits.

    Usage:
        with TemporaryFile("image", "png") as path:
            ...
    """

    def __init__(self, basename: str, extension: str, directory: Optional[str] = None):
        self.basename = basename
        self.extension = extension
        self.directory = directory
        self.path: Optional[str] = None

    def __enter__(self) -> str:
        try:
            fd, path = tempfile.mkstemp(
                prefix=f"{self.basename}-", suffix=f".{self.extension}", dir=self.directory
            )
        except OSError as e:
            raise CodecIOError(
                f"Could not create temporary file for {self.basename}.{self.extension}: {e}"
            ) from e
        os.close(fd)
        self.path = path
        logger.debug("Created temporary file %s", path)
        return path

    def __exit__(self, exc_type, exc, tb) -> None:
        if self.path is None:
            return
        try:
            os.remove(self.path)
        except FileNotFoundError:
            pass
        except OSError as e:
            logger.warning("Could not remove temporary file %s: %s", self.path, e)
        self.path = None
