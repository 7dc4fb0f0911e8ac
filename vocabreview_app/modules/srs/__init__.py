"""Spaced-repetition scheduler (mastery ladder)."""

from .config import SrsConstants
from .engine import SrsEngine
from .schemas import ProgressState

__all__ = ['SrsConstants', 'SrsEngine', 'ProgressState']
