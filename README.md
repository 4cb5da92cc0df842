# rivecbench

A collection of small scientific benchmark kernels, each runnable from the
command line and usable as a library:

- **lavaMD** (`rivecbench.lavamd`, `rivecbench.lavamd_cli`) – particle
  interactions inside a 3-D grid of boxes of 96 particles each.
- **somier** (`rivecbench.somier`, `rivecbench.somier_cli`) – a 3-D
  mass-spring lattice, stepped through time.
- **matmul** (`rivecbench.matmul`) – dense matrix multiplication checked
  against a reference.
- **pathfinder** (`rivecbench.pathfinder`) – dynamic-programming shortest path
  down a grid of weights.
- **particle filter** (`rivecbench.pf_model`, `rivecbench.particlefilter`) –
  tracking a moving disk in a noisy synthetic video.

## Installation

```
pip install .
```

The only runtime dependency is `numpy`.

## Command-line use

```
rivecbench-lavamd -boxes1d 2 -outputFile forces.txt
rivecbench-somier 5 10
rivecbench-matmul input.txt
rivecbench-pathfinder input.txt
rivecbench-particlefilter -x 128 -y 128 -z 10 -np 1000
```

- `rivecbench-lavamd` accepts `-cores N`, `-boxes1d N` and `-outputFile PATH`.
  It fills a `boxes1d`³ grid with random distances and charges (values from
  0.1 to 1.0), computes the forces and writes one `v, x, y, z` line per
  particle to the output file. An output file must be given. `-cores` is
  accepted and reported but does not change how the work is done.
- `rivecbench-somier STEPS N` simulates an `N`×`N`×`N` lattice whose middle
  node starts with velocity 0.1 on every axis, running `STEPS - 1` time steps
  and printing the lattice state before each. Unless exactly two arguments are
  given it uses 5 steps on a 10×10×10 lattice. At the end it prints the
  velocity and position of the middle node.
- `rivecbench-matmul FILE` reads a file whose first line holds `M K N`,
  followed by matrix A (`M`×`K`), matrix B (`K`×`N`) and the reference product
  (`M`×`N`); blank lines between them are skipped. It reports whether the
  computed product equals the reference exactly and exits with status 1 if it
  does not.
- `rivecbench-pathfinder FILE` reads a file whose first line holds
  `rows cols`, followed by the grid of integer weights and a reference result
  row. It computes the cheapest path costs 100 times and reports verification;
  as in the benchmark, only the leading element of the result row is compared.
- `rivecbench-particlefilter -x X -y Y -z FRAMES -np PARTICLES` builds a
  synthetic video of the given size, seeded from the current time, and prints
  the estimated object position (`XE`, `YE`) and its distance from the start
  for every frame after the first.

Each command prints the time spent in its work.

## Library use

```python
from rivecbench import lavamd, matmul, pathfinder, somier

boxes = lavamd.build_boxes(2)
rv, qv = lavamd.random_inputs(len(boxes), seed=1)
forces = lavamd.kernel(0.5, boxes, rv, qv)      # shape (768, 4): v, x, y, z

X, center = somier.init_positions(10)
F = somier.compute_forces(X, 10.0)
V = somier.velocities(somier.zeros(10), somier.acceleration(F, 1.0), 0.001)

c = matmul.matmul([1, 2, 3, 4], [5, 6, 7, 8], 2, 2, 2)   # [19, 22, 43, 50]
row = pathfinder.find_path([1, 2, 3, 4, 5, 6], 2, 3)     # [5, 6, 8]
```

`rivecbench.somier_cli.simulate` runs a whole simulation and returns a
`SimulationResult`; `format_grid` and `compare_grids` there render and compare
lattice fields.

The particle-filter building blocks (`SeedArray`, `video_sequence`,
`strel_disk`, `find_index`, `find_index_bin` and others) live in
`rivecbench.pf_model`. The filter itself is
`rivecbench.particlefilter.particle_filter`, which returns one
`FrameEstimate` per frame after the first.

## Limitations

All kernels run in a single thread; there is no parallel or multi-core mode.
The lavaMD command always draws fresh random inputs and offers no way to read
particles from a file.

## Running the tests

```
pip install .[test]
pytest
```