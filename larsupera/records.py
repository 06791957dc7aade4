"""Plain records for simulated particle trajectories and showers."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator


@dataclass(frozen=True, order=True)
class Vertex:
    """A space-time point: position in cm and time in ns."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0
    t: float = 0.0


@dataclass(frozen=True)
class MCStep:
    """One step of a simulated trajectory, with its energy."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0
    t: float = 0.0
    e: float = 0.0

    def vertex(self) -> Vertex:
        """The step's position and time as a vertex."""
        return Vertex(self.x, self.y, self.z, self.t)


@dataclass
class MCTrack:
    """A simulated track: its identity, lineage and trajectory steps."""

    track_id: int
    mother_track_id: int
    ancestor_track_id: int
    pdg: int = 0
    mother_pdg: int = 0
    ancestor_pdg: int = 0
    origin: int = 0
    start: MCStep = field(default_factory=MCStep)
    end: MCStep = field(default_factory=MCStep)
    steps: list[MCStep] = field(default_factory=list)

    def is_primary(self) -> bool:
        """True if the track is its own mother."""
        return self.track_id == self.mother_track_id

    def __len__(self) -> int:
        return len(self.steps)

    def __iter__(self) -> Iterator[MCStep]:
        return iter(self.steps)


@dataclass
class MCShower:
    """A simulated shower: its identity, lineage and deposited profile."""

    track_id: int
    mother_track_id: int
    ancestor_track_id: int
    pdg: int = 0
    mother_pdg: int = 0
    ancestor_pdg: int = 0
    origin: int = 0
    start: MCStep = field(default_factory=MCStep)
    end: MCStep = field(default_factory=MCStep)
    det_profile: MCStep = field(default_factory=MCStep)
    daughter_track_ids: list[int] = field(default_factory=list)

    def is_primary(self) -> bool:
        """True if the shower is its own mother."""
        return self.track_id == self.mother_track_id