"""topo-profile - Topographic elevation profiles for planned trips."""

__version_date__ = "2026-10-19"
