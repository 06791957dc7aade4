"""Energy and origin cuts deciding which simulated particles are kept."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any

from larsupera.particle_tree import MCNode, SourceType
from larsupera.records import MCShower, MCTrack


def _deposited(track: MCTrack) -> float:
    """Energy lost between the first and last step, or 0 for fewer than two steps."""
    if len(track.steps) < 2:
        return 0.0
    return track.steps[0].e - track.steps[-1].e


@dataclass
class ParticleFilter:
    """Decides whether a track, shower or tree node passes the configured cuts.

    Tracks and showers must carry enough initial and deposited energy.  For
    a listed PDG code the PDG-specific minima apply as well.  A non-zero
    ``pass_origin`` also rejects nodes of any other origin.
    """

    pass_origin: int = 0
    filter_pdg: list[int] = field(default_factory=list)
    filter_min_einit: list[float] = field(default_factory=list)
    filter_min_edep: list[float] = field(default_factory=list)
    shower_min_einit: float = 0.0
    shower_min_edep: float = 0.0
    track_min_einit: float = 0.0
    track_min_edep: float = 0.0

    def __post_init__(self) -> None:
        self._check_lengths()

    def _check_lengths(self) -> None:
        if len(self.filter_pdg) != len(self.filter_min_einit):
            raise ValueError(
                "FilterTargetPDG and FilterTargetInitEMin not the same length!"
            )
        if len(self.filter_pdg) != len(self.filter_min_edep):
            raise ValueError(
                "FilterTargetPDG and FilterTargetDepEMin not the same length!"
            )

    def configure(self, cfg: Mapping[str, Any]) -> None:
        """Read every cut from ``cfg``; all keys are required."""
        pass_origin = int(cfg["Origin"])
        filter_pdg = [int(v) for v in cfg["FilterTargetPDG"]]
        filter_min_einit = [float(v) for v in cfg["FilterTargetInitEMin"]]
        filter_min_edep = [float(v) for v in cfg["FilterTargetDepEMin"]]
        if len(filter_pdg) != len(filter_min_einit):
            raise ValueError(
                "FilterTargetPDG and FilterTargetInitEMin not the same length!"
            )
        if len(filter_pdg) != len(filter_min_edep):
            raise ValueError(
                "FilterTargetPDG and FilterTargetDepEMin not the same length!"
            )
        shower_min_einit = float(cfg["ShowerInitEMin"])
        shower_min_edep = float(cfg["ShowerDepEMin"])
        track_min_einit = float(cfg["TrackInitEMin"])
        track_min_edep = float(cfg["TrackDepEMin"])

        self.pass_origin = pass_origin
        self.filter_pdg = filter_pdg
        self.filter_min_einit = filter_min_einit
        self.filter_min_edep = filter_min_edep
        self.shower_min_einit = shower_min_einit
        self.shower_min_edep = shower_min_edep
        self.track_min_einit = track_min_einit
        self.track_min_edep = track_min_edep

    def _pdg_cuts(self, pdg: int) -> list[tuple[float, float]]:
        return [
            (einit, edep)
            for code, einit, edep in zip(
                self.filter_pdg, self.filter_min_einit, self.filter_min_edep
            )
            if code == pdg
        ]

    @staticmethod
    def _track_edep_ok(track: MCTrack, minimum: float) -> bool:
        if minimum <= 0:
            return True
        if len(track.steps) < 2:
            return False
        return _deposited(track) >= minimum

    def accept_track(self, track: MCTrack) -> bool:
        """True if the track passes the general and its PDG-specific cuts."""
        einit = track.start.e
        if einit < self.track_min_einit:
            return False
        if not self._track_edep_ok(track, self.track_min_edep):
            return False
        return all(
            einit >= min_einit and self._track_edep_ok(track, min_edep)
            for min_einit, min_edep in self._pdg_cuts(track.pdg)
        )

    def accept_shower(self, shower: MCShower) -> bool:
        """True if the shower passes the general and its PDG-specific cuts."""
        einit = shower.start.e
        edep = shower.det_profile.e
        if einit < self.shower_min_einit or edep < self.shower_min_edep:
            return False
        return all(
            einit >= min_einit and edep >= min_edep
            for min_einit, min_edep in self._pdg_cuts(shower.pdg)
        )

    def accept_node(
        self,
        node: MCNode,
        tracks: Sequence[MCTrack],
        showers: Sequence[MCShower],
    ) -> bool:
        """True if the node's origin matches and its source record passes the cuts.

        Nodes of unknown source type pass the energy cuts unconditionally.
        """
        if self.pass_origin and node.origin != self.pass_origin:
            return False
        if node.source_type is SourceType.MC_TRACK:
            if node.source_index is None:
                raise ValueError("Track node has no source index")
            return self.accept_track(tracks[node.source_index])
        if node.source_type is SourceType.MC_SHOWER:
            if node.source_index is None:
                raise ValueError("Shower node has no source index")
            return self.accept_shower(showers[node.source_index])
        return True