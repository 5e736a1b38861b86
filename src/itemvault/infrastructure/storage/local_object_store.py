"""Local filesystem object store.

Keys map to files below a root directory. Used for development and tests.
"""

import asyncio
import os
import tempfile
from pathlib import Path

from itemvault.infrastructure.storage.base import JSON_CONTENT_TYPE, ObjectStore


class LocalObjectStore(ObjectStore):
    """Object store backed by a directory."""

    def __init__(self, root_path: str | Path) -> None:
        self.root_path = Path(root_path).resolve()

    def _path_for(self, key: str) -> Path:
        path = (self.root_path / key).resolve()
        if self.root_path not in path.parents:
            raise ValueError(f"Invalid object key: {key}")
        return path

    async def ensure_container(self) -> None:
        await asyncio.to_thread(self.root_path.mkdir, parents=True, exist_ok=True)

    async def get_object(self, key: str) -> bytes | None:
        path = self._path_for(key)
        try:
            return await asyncio.to_thread(path.read_bytes)
        except FileNotFoundError:
            return None

    def _write_atomic(self, path: Path, body: bytes) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.")
        try:
            with os.fdopen(fd, "wb") as tmp:
                tmp.write(body)
            os.replace(tmp_name, path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise

    async def put_object(
        self, key: str, body: bytes, content_type: str = JSON_CONTENT_TYPE
    ) -> None:
        await asyncio.to_thread(self._write_atomic, self._path_for(key), body)

    async def delete_object(self, key: str) -> None:
        path = self._path_for(key)
        await asyncio.to_thread(path.unlink, missing_ok=True)

    async def test_connection(self) -> tuple[bool, str | None]:
        """Verify that the root directory is writable."""
        try:
            self.root_path.mkdir(parents=True, exist_ok=True)
            probe_file = self.root_path / ".object_store_probe"
            probe_file.write_text("ok", encoding="utf-8")
            probe_file.unlink(missing_ok=True)
            return True, f"Local object store is writable at '{self.root_path}'."
        except OSError as e:
            return False, f"Local object store test failed: {str(e)}"
