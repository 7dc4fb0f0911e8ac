from dataclasses import dataclass, field
from typing import Dict


@dataclass(frozen=True)
class ProgressStats:
    """Aggregate mastery figures over a learner's saved words."""
    total_saved_words: int = 0
    started_words: int = 0          # mastery level >= 1
    intermediate_words: int = 0     # mastery level >= 3
    mastered_words: int = 0         # mastery level 5
    average_mastery_level: float = 0.0
    mastery_counts: Dict[int, int] = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {
            'totalSavedWords': self.total_saved_words,
            'wordsReviewed': self.started_words,
            'startedWords': self.started_words,
            'intermediateWords': self.intermediate_words,
            'masteredWords': self.mastered_words,
            'averageMasteryLevel': self.average_mastery_level,
            'masteryStats': {str(level): count for level, count in sorted(self.mastery_counts.items())},
        }
