from __future__ import annotations

from pathlib import Path
from typing import Iterator, Optional

import httpx

from .util import filename_from_disposition, guess_extension, safe_filename


class FileResponse:
    """Binary download backed by a streamed HTTP response.

    The underlying connection stays open until the body is fully consumed or
    ``close()`` is called; use it as a context manager to be safe.
    """

    def __init__(self, response: httpx.Response):
        self._response = response

    @property
    def response(self) -> httpx.Response:
        return self._response

    @property
    def content_type(self) -> Optional[str]:
        return self._response.headers.get("content-type")

    @property
    def filename(self) -> Optional[str]:
        return filename_from_disposition(self._response.headers.get("content-disposition"))

    def iter_bytes(self, chunk_size: Optional[int] = None) -> Iterator[bytes]:
        for chunk in self._response.iter_bytes(chunk_size):
            if chunk:
                yield chunk

    def read(self) -> bytes:
        return self._response.read()

    def save(self, target: Path) -> Path:
        """Write the body to ``target``.

        An existing directory receives a file named from the response headers.
        """
        target = Path(target)
        if target.is_dir():
            name = self.filename
            if name:
                stem, dot, ext = name.rpartition(".")
                name = f"{safe_filename(stem)}.{safe_filename(ext)}" if dot and stem else safe_filename(name)
            else:
                name = f"download.{guess_extension(self.content_type)}"
            target = target / name
        target.parent.mkdir(parents=True, exist_ok=True)
        try:
            with target.open("wb") as f:
                for chunk in self.iter_bytes():
                    f.write(chunk)
        finally:
            self.close()
        return target

    def close(self) -> None:
        self._response.close()

    def __enter__(self) -> FileResponse:
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()
