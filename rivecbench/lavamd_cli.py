"""Command line driver for the lavaMD particle interaction benchmark."""

from __future__ import annotations

import sys
import time
from dataclasses import dataclass
from typing import Iterable, Sequence

import numpy as np

from rivecbench.lavamd import (
    NUMBER_PAR_PER_BOX,
    build_boxes,
    is_integer,
    kernel,
    random_inputs,
)

ALPHA = 0.5


@dataclass
class LavaMDConfig:
    """Settings taken from the command line."""

    cores: int = 1
    boxes1d: int = 1
    output_file: str | None = None

    @property
    def number_boxes(self) -> int:
        return self.boxes1d ** 3

    @property
    def space_elem(self) -> int:
        return self.number_boxes * NUMBER_PAR_PER_BOX


def _integer_value(args: Sequence[str], index: int, option: str) -> int:
    if index >= len(args):
        raise ValueError(f"ERROR: Missing value to -{option} parameter")
    text = args[index]
    if not is_integer(text):
        raise ValueError(f"ERROR: Value to -{option} parameter in not a number")
    value = int(text)
    if value < 0:
        raise ValueError(f"ERROR: Wrong value to -{option} parameter, cannot be <=0")
    return value


def parse_args(argv: Sequence[str]) -> LavaMDConfig:
    """Parse ``-cores``, ``-boxes1d`` and ``-outputFile`` options.

    Raises ValueError carrying the error message for bad input.
    """
    args = list(argv)
    config = LavaMDConfig()
    index = 0
    while index < len(args):
        option = args[index]
        if option == "-cores":
            config.cores = _integer_value(args, index + 1, "cores")
            index += 1
        elif option == "-boxes1d":
            config.boxes1d = _integer_value(args, index + 1, "boxes1d")
            index += 1
        elif option == "-outputFile":
            if index + 1 >= len(args):
                raise ValueError("ERROR: Missing output file name")
            config.output_file = args[index + 1]
            index += 1
        else:
            raise ValueError("ERROR: Unknown parameter")
        index += 1
    return config


def format_forces(fv: Iterable[Sequence[float]]) -> str:
    """Render one ``v, x, y, z`` line per particle."""
    return "".join(
        f"{float(v):f}, {float(x):f}, {float(y):f}, {float(z):f}\n" for v, x, y, z in fv
    )


def write_forces(path, fv) -> None:
    """Write the forces to ``path`` in the text format of :func:`format_forces`."""
    with open(path, "w", encoding="utf-8") as stream:
        stream.write(format_forces(fv))


def run(config: LavaMDConfig, seed=None) -> np.ndarray:
    """Build the box grid, draw random inputs and return the computed forces."""
    boxes = build_boxes(config.boxes1d)
    rv, qv = random_inputs(len(boxes), seed)
    return kernel(ALPHA, boxes, rv, qv)


def main(argv=None) -> int:
    args = sys.argv[1:] if argv is None else list(argv)
    try:
        config = parse_args(args)
    except ValueError as exc:
        print(exc)
        return 0

    print(f"Configuration used: cores = {config.cores}, boxes1d = {config.boxes1d}")
    print(f"outputfile = {config.output_file} ")

    start = time.perf_counter()
    fv = run(config)
    elapsed = time.perf_counter() - start

    if config.output_file is None:
        print(f"ERROR: Unable to open file `{config.output_file}'.")
        return 1
    try:
        write_forces(config.output_file, fv)
    except OSError:
        print(f"ERROR: Unable to open file `{config.output_file}'.")
        return 1

    print(f"Kernel time {elapsed:f}")
    return 0


if __name__ == "__main__":
    sys.exit(main())