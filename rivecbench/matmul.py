"""Dense matrix multiplication benchmark with verification against a reference."""

from __future__ import annotations

import sys
import time
from typing import Iterator, Sequence, TextIO


def read_dimensions(stream: TextIO) -> tuple[int, int, int]:
    """Read the ``M K N`` header line."""
    line = stream.readline()
    if not line:
        raise ValueError("missing matrix dimensions")
    fields = line.split()
    try:
        dims = tuple(int(f) for f in fields[:3])
    except ValueError as exc:
        raise ValueError(f"invalid matrix dimensions: {line.strip()!r}") from exc
    if len(dims) != 3 or any(d < 0 for d in dims):
        raise ValueError(f"invalid matrix dimensions: {line.strip()!r}")
    return dims


def _tokens(stream: TextIO) -> Iterator[str]:
    for line in stream:
        yield from line.split()


def read_values(stream: TextIO, count: int, row_size: int) -> list[float]:
    """Read ``count`` numbers laid out ``row_size`` per row, skipping blank lines."""
    if row_size <= 0:
        raise ValueError("row size must be positive")
    values: list[float] = []
    if count <= 0:
        return values
    tokens = _tokens(stream)
    while len(values) < count:
        for _ in range(min(row_size, count - len(values))):
            token = next(tokens, None)
            if token is None:
                raise ValueError("error reading value")
            try:
                values.append(float(token))
            except ValueError as exc:
                raise ValueError(f"error reading value {token!r}") from exc
    return values


def read_input(path):
    """Read dimensions, matrices A and B and the reference product from ``path``.

    Returns ``(m, k, n, a, b, reference)`` with flat row-major lists.
    """
    with open(path, encoding="utf-8") as stream:
        m, k, n = read_dimensions(stream)
        a = read_values(stream, m * k, k)
        b = read_values(stream, k * n, n)
        reference = read_values(stream, m * n, n)
    return m, k, n, a, b, reference


def matmul(a: Sequence[float], b: Sequence[float], m: int, k: int, n: int) -> list[float]:
    """Multiply the row-major ``m x k`` matrix ``a`` by the ``k x n`` matrix ``b``."""
    if len(a) < m * k or len(b) < k * n:
        raise ValueError("matrix data shorter than its dimensions")
    rows = [a[i * k:(i + 1) * k] for i in range(m)]
    cols = [b[j:k * n:n] for j in range(n)]
    return [sum(x * y for x, y in zip(row, col)) for row in rows for col in cols]


def differs(rows: int, cols: int, a: Sequence[float], b: Sequence[float]) -> bool:
    """Return True if the first ``rows * cols`` elements of ``a`` and ``b`` differ."""
    size = rows * cols
    return any(x != y for x, y in zip(a[:size], b[:size]))


def main(argv=None) -> int:
    args = sys.argv[1:] if argv is None else list(argv)
    if len(args) != 1:
        print("Usage:\n\tmatmul <inputFile>")
        return 1
    path = args[0]
    try:
        m, k, n, a, b, reference = read_input(path)
    except OSError:
        print(f"ERROR: Unable to open file `{path}'.")
        return 1
    except ValueError as exc:
        print(f"Error reading the input: {exc}")
        return 1
    print(f"Matrix Dimensions: M {m}, K {k}, N {n} ")

    start = time.perf_counter()
    result = matmul(a, b, m, k, n)
    print("matmul_serial done")
    print(f"matmul_serial time: {time.perf_counter() - start:f}")

    if differs(m, n, result, reference):
        print("Verification failed!")
        return 1
    print("Verification passed!")
    return 0


if __name__ == "__main__":
    sys.exit(main())