"""Application services."""

from .directory import BuildingDirectory, LoadFailed, LoadResult, LoadState, LoadSucceeded

__all__ = ["BuildingDirectory", "LoadFailed", "LoadResult", "LoadState", "LoadSucceeded"]
