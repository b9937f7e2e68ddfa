from __future__ import annotations

"""Local persistence of the last fetched rates document.

The file holds the verbatim JSON text received from the remote source.
Writes land in a temporary sibling first and are moved over the target with
os.replace, so a failed write leaves the previous cache intact.
"""
import logging
import os
import tempfile
from pathlib import Path
from typing import Union

from .exceptions import CacheFileError

logger = logging.getLogger("oxr_rates.rates.cache")


class CacheFile:
    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    def exists(self) -> bool:
        return self.path.is_file()

    def read_text(self) -> str:
        try:
            return self.path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise CacheFileError(f"cannot read rates cache {self.path}: {e}") from e

    def write_text(self, text: str) -> None:
        tmp_name = None
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp"
            )
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                fh.write(text)
                fh.flush()
                os.fsync(fh.fileno())
            os.replace(tmp_name, self.path)
        except OSError as e:
            if tmp_name and os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise CacheFileError(f"cannot write rates cache {self.path}: {e}") from e
        logger.debug("rates cache written", extra={"cache_path": str(self.path)})
