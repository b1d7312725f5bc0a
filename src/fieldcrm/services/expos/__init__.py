"""Expo calendar service helpers."""

from .normalizer import normalize_expo
from .query import ExpoFilters, compute_expo_stats, query_expos
from .service import delete_expo, expo_stats, get_expo, list_expos, save_expo

__all__ = [
    "ExpoFilters",
    "compute_expo_stats",
    "delete_expo",
    "expo_stats",
    "get_expo",
    "list_expos",
    "normalize_expo",
    "query_expos",
    "save_expo",
]
