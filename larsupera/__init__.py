"""Monte Carlo truth bookkeeping for liquid-argon TPC simulation: records, ranges, particle trees, filters and track-id maps."""

__version__ = "0.1.0"
__all__ = [
    "records",
    "range",
    "particle_tree",
    "particle_filter",
    "track_maps",
]