"""Dynamic-programming shortest path down a grid of weights (pathfinder)."""

from __future__ import annotations

import sys
import time
from typing import Iterator, Sequence, TextIO

NUM_RUNS = 100


def read_dimensions(stream: TextIO) -> tuple[int, int]:
    """Read the ``rows cols`` header line."""
    line = stream.readline()
    if not line:
        raise ValueError("missing matrix dimensions")
    try:
        rows, cols = (int(f) for f in line.split()[:2])
    except ValueError as exc:
        raise ValueError(f"invalid matrix dimensions: {line.strip()!r}") from exc
    if rows < 0 or cols < 0:
        raise ValueError(f"invalid matrix dimensions: {line.strip()!r}")
    return rows, cols


def _tokens(stream: TextIO) -> Iterator[str]:
    for line in stream:
        yield from line.split()


def read_values(stream: TextIO, count: int, row_size: int) -> list[int]:
    """Read ``count`` integers laid out ``row_size`` per row, skipping blank lines."""
    if row_size <= 0:
        raise ValueError("row size must be positive")
    values: list[int] = []
    tokens = _tokens(stream)
    while len(values) < count:
        token = next(tokens, None)
        if token is None:
            raise ValueError("error reading value")
        try:
            values.append(int(token))
        except ValueError as exc:
            raise ValueError(f"error reading value {token!r}") from exc
    return values


def read_input(path):
    """Read ``(rows, cols, wall, reference)`` from ``path``; lists are flat, row-major."""
    with open(path, encoding="utf-8") as stream:
        rows, cols = read_dimensions(stream)
        wall = read_values(stream, rows * cols, cols)
        reference = read_values(stream, cols, cols)
    return rows, cols, wall, reference


def find_path(wall: Sequence[int], rows: int, cols: int) -> list[int]:
    """Return the cheapest accumulated cost to reach each cell of the last row.

    Each step moves down one row to the same column or an adjacent one.
    """
    if rows < 1 or cols < 0:
        raise ValueError("the wall needs at least one row")
    if len(wall) < rows * cols:
        raise ValueError("wall data shorter than its dimensions")
    dst = list(wall[:cols])
    for t in range(1, rows):
        src = dst
        row = wall[t * cols:(t + 1) * cols]
        dst = [w + min(src[max(n - 1, 0):n + 2]) for n, w in enumerate(row)]
    return dst


def differs(result: Sequence[int], reference: Sequence[int]) -> bool:
    """Verification check of the benchmark: only the leading element is compared."""
    for value, expected in zip(result, reference):
        return value != expected
    return False


def format_result(row: Sequence[int]) -> str:
    """Render a row as space-terminated integers followed by a newline."""
    return "".join(f"{int(v)} " for v in row) + "\n"


def main(argv=None) -> int:
    args = sys.argv[1:] if argv is None else list(argv)
    if len(args) != 1:
        print("Usage: <input_file> ")
        return 0
    path = args[0]

    start = time.perf_counter()
    try:
        rows, cols, wall, reference = read_input(path)
    except OSError:
        print(f"ERROR: Unable to open file `{path}'.")
        return 1
    except ValueError as exc:
        print(f"Error reading the input: {exc}")
        return 1
    print(f"Matrix Dimensions: M {rows}, N {cols} ")
    print(f"TIME TO INIT DATA: {time.perf_counter() - start:f}")

    print(f"NUMBER OF RUNS: {NUM_RUNS}")
    start = time.perf_counter()
    try:
        for _ in range(NUM_RUNS):
            result = find_path(wall, rows, cols)
    except ValueError as exc:
        print(f"ERROR: {exc}")
        return 1
    print(f"TIME TO FIND THE SMALLEST PATH: {time.perf_counter() - start:f}")

    if differs(result, reference):
        print("Verification failed!")
    else:
        print("Verification passed!")
    return 0


if __name__ == "__main__":
    sys.exit(main())