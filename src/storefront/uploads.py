"""Disk storage for product images.

Each upload is written once under a freshly generated name
(``<epoch-ms>-<random hex><original extension>``) using exclusive create, so
a later upload can never overwrite an earlier file. Files are served
read-only from the ``/uploads`` static mount and are never deleted here.
"""

from __future__ import annotations

import re
import secrets
import shutil
import time
from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO, Callable, Optional

from .errors import NO_FILE, Result, internal_error, validation_error
from .logging import get_logger

logger = get_logger("storefront.uploads")

URL_PREFIX = "/uploads"

_SAFE_EXTENSION = re.compile(r"^\.[A-Za-z0-9]{1,16}$")


@dataclass(frozen=True, slots=True)
class IncomingFile:
    filename: Optional[str]
    stream: BinaryIO


@dataclass(frozen=True, slots=True)
class StoredFile:
    name: str
    directory: Path
    size: int

    @property
    def path(self) -> Path:
        return self.directory / self.name

    @property
    def url(self) -> str:
        return f"{URL_PREFIX}/{self.name}"


class UploadHandler:
    def __init__(
        self,
        directory: Path | str,
        *,
        clock: Callable[[], float] = time.time,
        token_bytes: int = 8,
    ) -> None:
        self._directory = Path(directory)
        self._clock = clock
        self._token_bytes = token_bytes

    @property
    def directory(self) -> Path:
        return self._directory

    def ensure_directory(self) -> Path:
        self._directory.mkdir(parents=True, exist_ok=True)
        return self._directory

    def generate_name(self, original_filename: str) -> str:
        extension = Path(original_filename).suffix
        if not _SAFE_EXTENSION.match(extension):
            extension = ""
        millis = int(self._clock() * 1000)
        return f"{millis}-{secrets.token_hex(self._token_bytes)}{extension}"

    def receive(self, incoming: Optional[IncomingFile]) -> Result[StoredFile]:
        if incoming is None or not incoming.filename:
            return Result.failure(validation_error("An image file is required", NO_FILE))

        directory = self.ensure_directory()
        while True:
            name = self.generate_name(incoming.filename)
            target = directory / name
            try:
                with target.open("xb") as handle:
                    shutil.copyfileobj(incoming.stream, handle)
            except FileExistsError:
                logger.warning("upload_name_collision", name=name)
                continue
            except OSError:
                logger.exception("upload_write_failed", name=name)
                target.unlink(missing_ok=True)
                return Result.failure(internal_error("Failed to store uploaded file"))
            break

        stored = StoredFile(name=name, directory=directory, size=target.stat().st_size)
        logger.info("upload_stored", name=stored.name, size=stored.size)
        return Result.success(stored)


__all__ = ["IncomingFile", "StoredFile", "URL_PREFIX", "UploadHandler"]
