import pytest

from larsupera.particle_filter import ParticleFilter
from larsupera.particle_tree import MCNode, SourceType
from larsupera.records import MCShower, MCStep, MCTrack


def _track(pdg=13, einit=100.0, energies=(100.0, 40.0), origin=1):
    steps = [MCStep(e=e) for e in energies]
    return MCTrack(
        track_id=1,
        mother_track_id=1,
        ancestor_track_id=1,
        pdg=pdg,
        origin=origin,
        start=MCStep(e=einit),
        steps=steps,
    )


def _shower(pdg=11, einit=100.0, edep=50.0, origin=1):
    return MCShower(
        track_id=2,
        mother_track_id=2,
        ancestor_track_id=2,
        pdg=pdg,
        origin=origin,
        start=MCStep(e=einit),
        det_profile=MCStep(e=edep),
    )


def _cfg(**overrides):
    cfg = {
        "Origin": 0,
        "FilterTargetPDG": [],
        "FilterTargetInitEMin": [],
        "FilterTargetDepEMin": [],
        "ShowerInitEMin": 0.0,
        "ShowerDepEMin": 0.0,
        "TrackInitEMin": 0.0,
        "TrackDepEMin": 0.0,
    }
    cfg.update(overrides)
    return cfg


def test_configure_reads_all_values():
    pf = ParticleFilter()
    pf.configure(
        _cfg(
            Origin=1,
            FilterTargetPDG=[2212],
            FilterTargetInitEMin=[10.0],
            FilterTargetDepEMin=[5.0],
            ShowerInitEMin=1.0,
            ShowerDepEMin=2.0,
            TrackInitEMin=3.0,
            TrackDepEMin=4.0,
        )
    )
    assert pf.pass_origin == 1
    assert pf.filter_pdg == [2212]
    assert pf.filter_min_einit == [10.0]
    assert pf.filter_min_edep == [5.0]
    assert (pf.shower_min_einit, pf.shower_min_edep) == (1.0, 2.0)
    assert (pf.track_min_einit, pf.track_min_edep) == (3.0, 4.0)


@pytest.mark.parametrize(
    "key, value",
    [("FilterTargetInitEMin", [1.0, 2.0]), ("FilterTargetDepEMin", [])],
)
def test_configure_length_mismatch(key, value):
    base = dict(FilterTargetPDG=[13], FilterTargetInitEMin=[1.0], FilterTargetDepEMin=[1.0])
    base[key] = value
    with pytest.raises(ValueError):
        ParticleFilter().configure(_cfg(**base))


def test_configure_missing_key():
    cfg = _cfg()
    del cfg["TrackDepEMin"]
    with pytest.raises(KeyError):
        ParticleFilter().configure(cfg)


def test_constructor_length_mismatch():
    with pytest.raises(ValueError):
        ParticleFilter(filter_pdg=[13], filter_min_einit=[], filter_min_edep=[1.0])


def test_track_initial_energy_cut():
    pf = ParticleFilter(track_min_einit=50.0)
    assert pf.accept_track(_track(einit=60.0)) is True
    assert pf.accept_track(_track(einit=40.0)) is False


def test_track_deposit_cut_and_short_track():
    pf = ParticleFilter(track_min_edep=30.0)
    assert pf.accept_track(_track(energies=(100.0, 60.0))) is True
    assert pf.accept_track(_track(energies=(100.0, 80.0))) is False
    assert pf.accept_track(_track(energies=(100.0,))) is False


def test_short_track_passes_without_deposit_cut():
    pf = ParticleFilter()
    assert pf.accept_track(_track(energies=())) is True


def test_pdg_specific_track_cut_only_for_matching_pdg():
    pf = ParticleFilter(filter_pdg=[2212], filter_min_einit=[200.0], filter_min_edep=[0.0])
    assert pf.accept_track(_track(pdg=2212, einit=150.0)) is False
    assert pf.accept_track(_track(pdg=13, einit=150.0)) is True
    assert pf.accept_track(_track(pdg=2212, einit=250.0)) is True


def test_pdg_specific_track_deposit_cut():
    pf = ParticleFilter(filter_pdg=[13], filter_min_einit=[0.0], filter_min_edep=[50.0])
    assert pf.accept_track(_track(energies=(100.0, 80.0))) is False
    assert pf.accept_track(_track(energies=(100.0,))) is False
    assert pf.accept_track(_track(energies=(100.0, 10.0))) is True


def test_shower_cuts():
    pf = ParticleFilter(shower_min_einit=20.0, shower_min_edep=10.0)
    assert pf.accept_shower(_shower(einit=30.0, edep=15.0)) is True
    assert pf.accept_shower(_shower(einit=10.0, edep=15.0)) is False
    assert pf.accept_shower(_shower(einit=30.0, edep=5.0)) is False


def test_pdg_specific_shower_cut():
    pf = ParticleFilter(filter_pdg=[22], filter_min_einit=[0.0], filter_min_edep=[40.0])
    assert pf.accept_shower(_shower(pdg=22, edep=30.0)) is False
    assert pf.accept_shower(_shower(pdg=11, edep=30.0)) is True


def test_accept_node_dispatches_by_source():
    pf = ParticleFilter(track_min_einit=50.0, shower_min_edep=20.0)
    tracks = [_track(einit=10.0), _track(einit=90.0)]
    showers = [_shower(edep=30.0), _shower(edep=5.0)]
    assert pf.accept_node(MCNode.from_track(tracks[0], 0), tracks, showers) is False
    assert pf.accept_node(MCNode.from_track(tracks[1], 1), tracks, showers) is True
    assert pf.accept_node(MCNode.from_shower(showers[0], 0), tracks, showers) is True
    assert pf.accept_node(MCNode.from_shower(showers[1], 1), tracks, showers) is False


def test_accept_node_origin_filter():
    pf = ParticleFilter(pass_origin=1)
    tracks = [_track(origin=1), _track(origin=2)]
    assert pf.accept_node(MCNode.from_track(tracks[0], 0), tracks, []) is True
    assert pf.accept_node(MCNode.from_track(tracks[1], 1), tracks, []) is False


def test_accept_node_unknown_source_passes():
    pf = ParticleFilter(track_min_einit=1e9, shower_min_einit=1e9)
    node = MCNode(source_type=SourceType.UNKNOWN)
    assert pf.accept_node(node, [], []) is True


def test_accept_node_bad_index():
    pf = ParticleFilter()
    node = MCNode.from_track(_track(), 3)
    with pytest.raises(IndexError):
        pf.accept_node(node, [_track()], [])
    with pytest.raises(ValueError):
        pf.accept_node(MCNode(source_type=SourceType.MC_SHOWER), [], [])