"""Dictionary and study-list access for the quiz engine."""

from .repository import SavedWordRepository, WordRepository

__all__ = ['WordRepository', 'SavedWordRepository']
