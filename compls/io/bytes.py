"""
Readers and writers for encoded byte streams.
"""

import os
from contextlib import contextmanager
from typing import IO, Iterator


def _prepare_output(path: str) -> None:
    """Refuse to overwrite `path` and create its parent directory."""
    if os.path.exists(path):
        raise FileExistsError(f"File already exists: {path}")
    parent_dir = os.path.dirname(path)
    if parent_dir:
        os.makedirs(parent_dir, exist_ok=True)


@contextmanager
def _open_output(path: str, mode: str, **kwargs) -> Iterator[IO]:
    """
    Open a temporary file next to `path` and move it into place on success.

    If the body raises, the temporary file is removed and `path` is never
    created.
    """
    _prepare_output(path)
    partial = f"{path}.part"
    try:
        with open(partial, mode, **kwargs) as f:
            yield f
    except BaseException:
        if os.path.exists(partial):
            os.remove(partial)
        raise
    os.replace(partial, path)


class BytesReader:
    """
    Reader for an encoded stream stored in a file.

    Example:
        reader = BytesReader("routes.bin")
        for line in decoder.decode_stream(reader.read()):
            ...
    """

    # Default chunk size for reading (64KB)
    DEFAULT_CHUNK_SIZE = 64 * 1024

    def __init__(self, path: str, chunk_size: int = DEFAULT_CHUNK_SIZE):
        """
        Args:
            path: Path to the file to read.
            chunk_size: Size of each chunk to yield in bytes.
        """
        if chunk_size <= 0:
            raise ValueError(f"chunk_size must be positive, got {chunk_size}")
        self._path = path
        self._chunk_size = chunk_size

    def read(self) -> Iterator[bytes]:
        """
        Yield the file's content in chunks.

        Raises:
            FileNotFoundError: If the file does not exist.
        """
        if not os.path.exists(self._path):
            raise FileNotFoundError(f"File not found: {self._path}")

        with open(self._path, "rb") as f:
            while True:
                chunk = f.read(self._chunk_size)
                if not chunk:
                    break
                yield chunk


class BytesWriter:
    """
    Writer for an encoded stream.

    Example:
        writer = BytesWriter("routes.bin")
        writer.write(encoder.encode_stream(lines))
    """

    def __init__(self, path: str):
        self._path = path

    def write(self, data: Iterator[bytes]) -> int:
        """
        Write all chunks to the file.

        Returns:
            Number of bytes written.

        Raises:
            FileExistsError: If the target file already exists.
            Any error raised while consuming the input propagates and no
            file is left at the target path.
        """
        total = 0
        with _open_output(self._path, "wb") as f:
            for chunk in data:
                f.write(chunk)
                total += len(chunk)
        return total
