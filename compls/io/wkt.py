"""
Line-oriented WKT files of line strings.

Each non-blank line holds one geometry, either
    LINESTRING (76.9017028 43.1802978, 76.8936157 43.2443809)
or
    LINESTRING EMPTY
"""

import os
import re
from typing import Iterator, Optional

import numpy as np

from ..linestring import as_points
from .bytes import _open_output

_LINESTRING = re.compile(r"^\s*LINESTRING\s*(?:\((?P<coords>[^()]*)\)|(?P<empty>EMPTY))\s*$", re.IGNORECASE)


def parse_wkt(text: str) -> np.ndarray:
    """
    Parse one WKT line string into an array of shape (N, 2).

    Raises:
        ValueError: If the text is not a two-dimensional LINESTRING.
    """
    match = _LINESTRING.match(text)
    if match is None:
        raise ValueError(f"Not a WKT LINESTRING: {text.strip()!r}")
    if match.group("empty"):
        return np.empty((0, 2), dtype=np.float64)

    points = []
    for pair in match.group("coords").split(","):
        values = pair.split()
        if len(values) != 2:
            raise ValueError(f"Expected 'x y' coordinate pair, got {pair.strip()!r}")
        points.append([float(v) for v in values])
    return np.array(points, dtype=np.float64)


def format_wkt(linestring, digits: Optional[int] = None) -> str:
    """
    Format a line string as WKT.

    Args:
        linestring: Points as accepted by `as_points`.
        digits: Fixed number of decimals. If None, the shortest repr that
            round-trips each float is used.
    """
    points = as_points(linestring)
    if len(points) == 0:
        return "LINESTRING EMPTY"

    def fmt(value: float) -> str:
        return repr(value) if digits is None else f"{value:.{digits}f}"

    return "LINESTRING (" + ", ".join(f"{fmt(x)} {fmt(y)}" for x, y in points.tolist()) + ")"


class WktReader:
    """
    Reader for a file of WKT line strings, one per line.

    Example:
        reader = WktReader("routes.wkt")
        for points in reader.read():
            ...
    """

    def __init__(self, path: str):
        self._path = path

    def read(self) -> Iterator[np.ndarray]:
        """
        Yield each line string as an array of shape (N, 2).

        Raises:
            FileNotFoundError: If the file does not exist.
            ValueError: If a line is not a WKT LINESTRING.
        """
        if not os.path.exists(self._path):
            raise FileNotFoundError(f"File not found: {self._path}")

        with open(self._path, "r", encoding="utf-8") as f:
            for lineno, line in enumerate(f, start=1):
                if not line.strip():
                    continue
                try:
                    yield parse_wkt(line)
                except ValueError as e:
                    raise ValueError(f"{self._path}:{lineno}: {e}") from e


class WktWriter:
    """
    Writer for a file of WKT line strings, one per line.
    """

    def __init__(self, path: str, digits: Optional[int] = None):
        """
        Args:
            path: Path to the file to write.
            digits: Fixed number of decimals, see `format_wkt`.
        """
        self._path = path
        self._digits = digits

    def write(self, linestrings: Iterator) -> int:
        """
        Write all line strings to the file.

        Returns:
            Number of line strings written.

        Raises:
            FileExistsError: If the target file already exists.
            Any error raised while consuming the input propagates and no
            file is left at the target path.
        """
        count = 0
        with _open_output(self._path, "w", encoding="utf-8") as f:
            for linestring in linestrings:
                f.write(format_wkt(linestring, self._digits) + "\n")
                count += 1
        return count
