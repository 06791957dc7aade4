"""Grouping of simulated tracks and showers under their primary particles."""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field, fields
from enum import IntEnum
from typing import Any

from larsupera.records import MCShower, MCTrack, Vertex

logger = logging.getLogger(__name__)

_FAR = 1.0e20

# Verbosity levels used by configuration files, mapped onto logging levels.
_VERBOSITY = {
    0: logging.DEBUG,
    1: logging.INFO,
    2: logging.INFO + 5,
    3: logging.WARNING,
    4: logging.ERROR,
    5: logging.CRITICAL,
}


class SourceType(IntEnum):
    """Which kind of simulated record a node was built from."""

    MC_TRACK = 0
    MC_SHOWER = 1
    UNKNOWN = 2


@dataclass
class MCNode:
    """A reference to one simulated track or shower."""

    origin: int = 0
    pdg: int = 0
    track_id: int | None = None
    start: Vertex = field(default_factory=Vertex)
    end: Vertex = field(default_factory=Vertex)
    source_index: int | None = None
    source_type: SourceType = SourceType.UNKNOWN

    @classmethod
    def _from_record(
        cls, record: MCTrack | MCShower, index: int | None, source_type: SourceType
    ) -> MCNode:
        return cls(
            origin=int(record.origin),
            pdg=record.pdg,
            track_id=record.track_id,
            start=record.start.vertex(),
            end=record.end.vertex(),
            source_index=index,
            source_type=source_type,
        )

    @classmethod
    def from_track(cls, track: MCTrack, index: int | None = None) -> MCNode:
        """Build a node from a track found at ``index`` in its list."""
        return cls._from_record(track, index, SourceType.MC_TRACK)

    @classmethod
    def from_shower(cls, shower: MCShower, index: int | None = None) -> MCNode:
        """Build a node from a shower found at ``index`` in its list."""
        return cls._from_record(shower, index, SourceType.MC_SHOWER)

    def dump(self) -> str:
        return (
            f"Source {int(self.source_type)} Origin: {self.origin} "
            f"PDG {self.pdg} TrackID {self.track_id}\n"
        )


@dataclass
class MCRoot(MCNode):
    """A primary node together with the nodes attached to it."""

    daughters: list[MCNode] = field(default_factory=list)

    @classmethod
    def from_node(cls, node: MCNode) -> MCRoot:
        return cls(**{f.name: getattr(node, f.name) for f in fields(MCNode)})

    def _members(self) -> list[MCNode]:
        return [self, *self.daughters]

    def is_daughter(self, parent_id: int) -> bool:
        """True if ``parent_id`` is this root's track id or one of its daughters'."""
        return any(member.track_id == parent_id for member in self._members())

    def is_daughter_vertex(self, vertex: Vertex) -> bool:
        """True if ``vertex`` is the start or end of the root or a daughter."""
        return any(vertex in (member.start, member.end) for member in self._members())

    def dt(self, node: MCNode) -> float:
        """Smallest positive time from any start or end in this tree to the node's start.

        Returns -1 when no point of the tree precedes the node.
        """
        candidates = [
            node.start.t - point.t
            for member in self._members()
            for point in (member.start, member.end)
        ]
        positive = [value for value in candidates if value > 0]
        return min(positive) if positive else -1.0


class MCParticleTree:
    """Builds primaries from tracks and showers and attaches their descendants."""

    def __init__(self, origin_filter: int = 0, dt_max: float = 0.0) -> None:
        self.origin_filter = origin_filter
        self.dt_max = dt_max
        self.primaries: list[MCRoot] = []
        self._used_tracks: list[bool] = []
        self._used_showers: list[bool] = []

    def configure(self, cfg: Mapping[str, Any]) -> None:
        """Read ``DTMax`` (required) and an optional ``Verbosity`` level."""
        if "Verbosity" in cfg:
            level = int(cfg["Verbosity"])
            logger.setLevel(_VERBOSITY.get(level, logging.CRITICAL))
        self.dt_max = float(cfg["DTMax"])

    def _passes(self, record: MCTrack | MCShower) -> bool:
        return not self.origin_filter or record.origin == self.origin_filter

    def register(
        self, tracks: Sequence[MCTrack], showers: Sequence[MCShower]
    ) -> list[MCRoot]:
        """Rebuild the tree from one event's tracks and showers; return the primaries."""
        self.primaries = []
        self._used_tracks = [False] * len(tracks)
        self._used_showers = [False] * len(showers)

        self._define_primaries(tracks, showers)
        self._define_secondaries(tracks, showers)
        self._estimate_secondaries(tracks, showers)

        if logger.isEnabledFor(logging.INFO):
            lines = []
            for idx, primary in enumerate(self.primaries):
                lines.append(
                    f"      Primary {idx} Source {int(primary.source_type)} "
                    f"@ {primary.source_index} ... PDG {primary.pdg} "
                    f"TrackID {primary.track_id} with {len(primary.daughters)} children"
                )
                for child_idx, node in enumerate(primary.daughters):
                    lines.append(
                        f"          Child {child_idx} Source {int(node.source_type)} "
                        f"@ {node.source_index} ... PDG {node.pdg} TrackID {node.track_id}"
                    )
                lines.append("")
            logger.info("Particle tree summary...\n%s", "\n".join(lines))
        return self.primaries

    def find_primary(
        self, parent_id: int | None, ancestor_id: int | None
    ) -> int | None:
        """Index of the primary holding ``parent_id``, else ``ancestor_id``, else None."""
        for wanted, how in ((parent_id, "parent"), (ancestor_id, "ancestor")):
            if wanted is None:
                continue
            for idx, primary in enumerate(self.primaries):
                if primary.is_daughter(wanted):
                    logger.debug("Primary found via %s id %s", how, wanted)
                    return idx
        return None

    def _define_primaries(
        self, tracks: Sequence[MCTrack], showers: Sequence[MCShower]
    ) -> None:
        for records, used, make in (
            (tracks, self._used_tracks, MCRoot.from_track),
            (showers, self._used_showers, MCRoot.from_shower),
        ):
            for idx, record in enumerate(records):
                if not self._passes(record) or not record.is_primary():
                    continue
                logger.info(
                    "Registering primary PDG %s G4 Track %s Mother Track %s Origin %s",
                    record.pdg, record.track_id, record.mother_track_id, record.origin,
                )
                self.primaries.append(make(record, idx))
                used[idx] = True

    def _define_secondaries(
        self, tracks: Sequence[MCTrack], showers: Sequence[MCShower]
    ) -> None:
        while True:
            attached = 0
            for records, used, make in (
                (tracks, self._used_tracks, MCNode.from_track),
                (showers, self._used_showers, MCNode.from_shower),
            ):
                for idx, record in enumerate(records):
                    if used[idx] or not self._passes(record):
                        continue
                    primary_idx = self.find_primary(
                        record.mother_track_id, record.ancestor_track_id
                    )
                    if primary_idx is None:
                        continue
                    primary = self.primaries[primary_idx]
                    logger.info(
                        "Associating index %s PDG %s Origin %s with primary %s PDG %s Origin %s",
                        idx, record.pdg, record.origin,
                        primary_idx, primary.pdg, primary.origin,
                    )
                    primary.daughters.append(make(record, idx))
                    used[idx] = True
                    attached += 1
            if not attached:
                break

    def _estimate_secondaries(
        self, tracks: Sequence[MCTrack], showers: Sequence[MCShower]
    ) -> None:
        if self.dt_max <= 0:
            return

        primary_min_time = min((p.start.t for p in self.primaries), default=_FAR)
        primary_min_time = min(primary_min_time, _FAR)

        for records, used, make in (
            (tracks, self._used_tracks, MCNode.from_track),
            (showers, self._used_showers, MCNode.from_shower),
        ):
            for idx, record in enumerate(records):
                if used[idx] or not self._passes(record):
                    continue
                node = make(record, idx)
                if node.start.t < primary_min_time:
                    logger.info(
                        "Ignoring track id %s pdg %s as it comes before any primary in time",
                        node.track_id, record.pdg,
                    )
                    continue
                best_idx: int | None = None
                min_dt = _FAR
                for primary_idx, primary in enumerate(self.primaries):
                    dt = primary.dt(node)
                    if dt < 0:
                        continue
                    if dt < min_dt:
                        min_dt = dt
                        best_idx = primary_idx
                if best_idx is None or min_dt > self.dt_max:
                    continue
                logger.info(
                    "Associating (time-approx) index %s PDG %s with primary %s",
                    idx, record.pdg, best_idx,
                )
                self.primaries[best_idx].daughters.append(node)
                used[idx] = True

    def dump(self) -> str:
        """Text listing of every primary and its secondaries."""
        parts = []
        for idx, primary in enumerate(self.primaries):
            parts.append(f"Primary {idx}\n as MCNode: {MCNode.dump(primary)}\n")
            parts.append("Dumping secondaries...\n")
            parts.extend(f"    {secondary.dump()}" for secondary in primary.daughters)
        parts.append("... all dumped\n")
        return "".join(parts)