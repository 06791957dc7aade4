# larsupera

Pure-Python bookkeeping for Monte Carlo truth from liquid-argon TPC
simulations. It works out which simulated tracks and showers belong to
which primary particle. It applies energy cuts to them, and it builds
lookup tables keyed by track id.

## Modules

- `larsupera.records`: plain records for truth-level input.
  - `Vertex` is a frozen, ordered `(x, y, z, t)` point.
  - `MCStep` is a trajectory step with energy `e`. Its `vertex()`
    method returns the step as a `Vertex`.
  - `MCTrack` holds its steps in `steps`. `len()` and iteration go over
    those steps.
  - `MCShower` holds its deposited profile in `det_profile` and its
    daughter ids in `daughter_track_ids`.
  - Both `MCTrack` and `MCShower` have `is_primary()`. It is true when
    the record is its own mother.
- `larsupera.range`: `Range`, a closed interval `[start, end]`.
  - `set()` raises `ValueError` if `start > end`. A `Range()` built
    without bounds is invalid until `set()` is called.
  - `inside()` and `outside()` test a single value.
  - `a < b` holds only when `a` ends before `b` starts. The other
    operand may also be a plain value.
  - `+` and `+=` merge ranges. `+=` also accepts a single value.
- `larsupera.particle_tree`: `SourceType`, `MCNode`, `MCRoot` and
  `MCParticleTree`. `MCParticleTree.register(tracks, showers)` rebuilds
  the tree and returns the list of primaries. It works in three steps:
  1. Records that are their own mother become primaries.
  2. The remaining records are attached by mother id, or failing that by
     ancestor id. This repeats until nothing more attaches.
  3. If `dt_max > 0`, each record still unattached goes to the primary
     with the smallest positive time difference, provided that
     difference is at most `dt_max`.

  A non-zero `origin_filter` ignores records of any other origin.
  `find_primary()` looks up a primary index and returns `None` when
  there is none. `dump()` returns a text listing.
- `larsupera.particle_filter`: `ParticleFilter`.
  - `accept_track`, `accept_shower` and `accept_node` apply minimum
    initial and deposited energy cuts.
  - Per-PDG minima can be added. The three per-PDG lists must have equal
    lengths, otherwise `ValueError` is raised.
  - A non-zero `pass_origin` rejects nodes of any other origin.
- `larsupera.track_maps`: lookup tables keyed by track id.
  - `map_track_clusters(particles, showers)` maps each track id to a
    cluster id. Shower daughters inherit their shower's cluster.
  - `select_tracks(tracks, showers, origin)` returns the set of track
    ids touched by records of an origin.
  - `map_track_types(tracks, showers, to_type, origin, unknown)` returns
    a list indexed by track id that gives each track's type.
  - `INVALID_TRACK_ID` is the marker for a daughter id that does not
    exist.

## Installation

```
pip install .
```

There are no runtime dependencies. To run the tests:

```
pip install .[test]
pytest
```

## Example

```python
from larsupera.range import Range
from larsupera.records import MCStep, MCTrack
from larsupera.particle_tree import MCParticleTree

window = Range(2.0, 5.0)
assert window.inside(3.0)
merged = window + Range(4.0, 9.0)   # Range(2.0, 9.0)

tracks = [
    MCTrack(track_id=1, mother_track_id=1, ancestor_track_id=1, pdg=13,
            start=MCStep(t=0.0), end=MCStep(t=5.0)),
    MCTrack(track_id=2, mother_track_id=1, ancestor_track_id=1, pdg=11,
            start=MCStep(t=3.0), end=MCStep(t=4.0)),
]
tree = MCParticleTree(origin_filter=0, dt_max=0.0)
primaries = tree.register(tracks, [])
assert len(primaries) == 1 and len(primaries[0].daughters) == 1
print(tree.dump())
```

## Configuration

`configure(cfg)` methods read their settings from a plain mapping such
as a `dict`. A missing required key raises `KeyError`.

- `MCParticleTree.configure` needs `DTMax`. It also accepts an optional
  `Verbosity` from 0 to 5, which sets the module logger's level.
- `ParticleFilter.configure` needs all of these keys:
  - `Origin`
  - `FilterTargetPDG`
  - `FilterTargetInitEMin`
  - `FilterTargetDepEMin`
  - `ShowerInitEMin`
  - `ShowerDepEMin`
  - `TrackInitEMin`
  - `TrackDepEMin`

## What this package does not do

The package only does the truth bookkeeping described above. It does
not:

- read or write event files;
- build wire-plane images or 3D voxel sets;
- produce channel-status or key-point outputs;
- correct waveforms;
- provide a command-line tool.

Callers supply the records and use the results in their own pipeline.