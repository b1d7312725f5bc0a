"""Route group exports."""

from . import customers, expos, geo, health, team, visits

__all__ = ["customers", "expos", "geo", "health", "team", "visits"]
