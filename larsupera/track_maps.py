"""Lookup tables from simulated track ids to clusters, selections and types."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence
from typing import Any, Protocol, TypeVar

from larsupera.records import MCShower, MCTrack

# Marker the simulation uses for a daughter id that does not exist.
INVALID_TRACK_ID = 0xFFFFFFFF

T = TypeVar("T")


class ClusteredParticle(Protocol):
    """Anything carrying a cluster id and the simulated track id it came from."""

    id: int
    track_id: int


def _passes(record: MCTrack | MCShower, origin: int) -> bool:
    return not origin or int(record.origin) == origin


def map_track_clusters(
    particles: Iterable[ClusteredParticle], showers: Iterable[MCShower]
) -> dict[int, int]:
    """Map each track id to the cluster id of the particle it belongs to.

    Every particle maps its own track id to its id.  Showers whose track id
    is already mapped then pass their cluster on to all their daughter
    track ids.
    """
    clusters: dict[int, int] = {}
    for particle in particles:
        clusters[int(particle.track_id)] = int(particle.id)
    for shower in showers:
        cluster_id = clusters.get(shower.track_id)
        if cluster_id is None:
            continue
        for daughter_id in shower.daughter_track_ids:
            clusters[daughter_id] = cluster_id
    return clusters


def select_tracks(
    tracks: Iterable[MCTrack], showers: Iterable[MCShower], origin: int = 0
) -> set[int]:
    """Track ids touched by records of the given origin (any origin if 0).

    A record contributes its own, its mother's and its ancestor's track id;
    a shower also contributes its valid daughter track ids.
    """
    selected: set[int] = set()
    for track in tracks:
        if not _passes(track, origin):
            continue
        selected.update((track.track_id, track.mother_track_id, track.ancestor_track_id))
    for shower in showers:
        if not _passes(shower, origin):
            continue
        selected.update(
            (shower.track_id, shower.mother_track_id, shower.ancestor_track_id)
        )
        selected.update(
            d for d in shower.daughter_track_ids if d != INVALID_TRACK_ID
        )
    return selected


def _assign(table: list[Any], track_id: int, value: Any, unknown: Any) -> None:
    if track_id < 0:
        raise ValueError(f"Invalid negative track id {track_id}")
    if track_id >= len(table):
        table.extend([unknown] * (track_id + 1 - len(table)))
    table[track_id] = value


def map_track_types(
    tracks: Sequence[MCTrack],
    showers: Sequence[MCShower],
    to_type: Callable[[int], T],
    origin: int = 0,
    unknown: Any = None,
) -> list[Any]:
    """Table indexed by track id giving the particle type of that track.

    Types come from ``to_type`` applied to the PDG codes of each record and
    of its mother and ancestor; shower daughters inherit the shower's type.
    Ids never assigned hold ``unknown``.  Records of another origin are
    ignored when ``origin`` is non-zero.
    """
    table: list[Any] = []
    for record in [*tracks, *showers]:
        if not _passes(record, origin):
            continue
        _assign(table, record.track_id, to_type(record.pdg), unknown)
        _assign(table, record.mother_track_id, to_type(record.mother_pdg), unknown)
        _assign(table, record.ancestor_track_id, to_type(record.ancestor_pdg), unknown)
        if isinstance(record, MCShower):
            shower_type = table[record.track_id]
            for daughter_id in record.daughter_track_ids:
                if daughter_id == INVALID_TRACK_ID:
                    continue
                _assign(table, daughter_id, shower_type, unknown)
    return table