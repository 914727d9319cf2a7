"""Furigana tool package."""

from .config import ChunkingConfig, FuriganaConfig

__all__ = ["ChunkingConfig", "FuriganaConfig"]
