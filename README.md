# casimirsim

Building blocks for simulations of colloidal particles with attractive
patches, in a periodic box. Lengths are in units of the particle diameter.

The package gives you:

- `casimirsim.vectors`: the immutable `Vector` with `dot`, `cross`, `norm`,
  `normalized`, `scaled` and `times` (component-wise product), and the
  arithmetic operators. It also has `pbc(vector, box)`, which wraps a vector
  into a box centred on the origin, and `cosangle_to_angle`, which turns a
  cosine into an angle in degrees clamped to [0, 180].
- `casimirsim.system`: the data model. It holds `Quaternion`, `ParticleType`
  (sites, diameter and `radius`, activity, gravity parameters), `Particle`
  (position, orientation, patch vectors and bonds), `Bond` and `Slice` (a
  configuration of particles). `Particle.add_bond` records at most six bonds
  per particle. `SimType` lists the propagation modes. `SimulationError` is
  raised for inconsistent states and input.
- `casimirsim.neighborlist`: `NeighborList`, a Verlet list that groups
  neighbour pairs by periodic image (`ImageEntry`). It also sorts particles
  into cells (`cell_of`, `build_cells`). The module also has the helpers
  `wrap_positions` and `brute_force_count`.
- `casimirsim.config`: `InputConfig` and the readers `parse_input` and
  `read_input` for the `keyword value` file `path.inp`. `parse_site_settings`
  reads the `s_accent` and `S_fixed` lines, one value per particle type.
  `parse_switch_coefficients` reads the `Scoefficients<n>.inp` files.
- `casimirsim.particles`: `parse_particle_types` reads `particles.inp`.
  `read_configuration` reads `conf.inp`. `check_unit_vector` normalises the
  site vectors and rejects those that are nearly zero. Three functions set up
  an initial configuration: `place_chain` puts the particles in one chain,
  `place_chains` puts them in several parallel chains, and `place_random`
  places them at random without overlap.
- `casimirsim.trajectory`: `TrajectoryReader` reads frames of
  `trajectory.xyz` in increasing order. `read_restart_time` reads the time on
  the last line of a trajectory. `normalize_quaternion` returns a unit
  quaternion. `remove_matching_files` deletes the files in a directory whose
  name contains a given string.

## Installation

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## Example

```python
from casimirsim.neighborlist import NeighborList
from casimirsim.vectors import Vector

box = Vector(10.0, 10.0, 10.0)
nl = NeighborList(box=box, rcutoff=1.05)
wrapped = nl.update([Vector(0.0, 0.0, 0.0), Vector(1.5, 0.0, 0.0), Vector(4.9, 0.0, 0.0)])
for i, j, image in nl.pairs():
    print(i, j, image)
print(nl.neighbor_count())
```

`NeighborList.update` wraps the positions into the box and returns them. It
then lists every pair `i < j` that is closer than `cutoff` (2.0 by default).
The cutoff must be larger than `rcutoff`, otherwise `SimulationError` is
raised.

Reading a trajectory:

```python
from casimirsim.trajectory import TrajectoryReader
from casimirsim.vectors import Vector

with TrajectoryReader("trajectory.xyz", nparts=10, box=Vector(20.0, 20.0, 20.0)) as reader:
    time, frame = reader.read_frame(0)
    for position, orientation in frame:
        print(position, orientation)
```

Each line of the trajectory holds `time particle x y z q0 q1 q2 q3`. A frame
has one line per particle. A frame that the file does not contain raises
`SimulationError`.

## Input files

`path.inp` holds one `keyword value` pair per line, for example `boxl 20.0`,
`npart 10`, `dT 0.16`, `r_wetting 0.45`, `surface_charge -0.2`,
`s_cutoff 0.05`, `gravity 1.0` and `start_type 2`. Lines that hold only a
section title such as `SYSTEM` or `CRITICAL_CASIMIR` structure the file.
Unknown keywords are ignored.

`particles.inp` starts with the number of particle types. Each type follows
with the number of sites, the number of particles, the diameter, the patch
width in degrees and the activity. After that come its site vectors, and,
when the activity is positive, the direction of the active force.

`conf.inp` starts with the particle count and the box lengths. A position and
a quaternion follow for every particle.

## What this package does not do

The package has no pair potential and computes no energies, forces or bonds
between particles. It has no Monte Carlo or Brownian dynamics propagation,
writes no potential tables, and has no command-line program. It provides the
data model, the input and trajectory readers, the neighbour list and the
initial placement that such a simulation is built on.