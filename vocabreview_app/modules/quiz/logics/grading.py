# File: vocabreview_app/modules/quiz/logics/grading.py
# Pure grading and scoring helpers, no database access.

from decimal import ROUND_HALF_UP, Decimal

from ....utils.text_utils import normalize_text

_CENT = Decimal('0.01')


def grade_answer(user_answer: str, correct_answer: str) -> bool:
    """Trimmed, case-insensitive equality."""
    return normalize_text(user_answer) == normalize_text(correct_answer)


def calculate_score(correct_count: int, total_questions: int) -> Decimal:
    """Percentage of correct answers rounded half-up to two decimals (66.67 for 2 of 3)."""
    if not total_questions:
        return Decimal('0.00')
    ratio = Decimal(correct_count) * 100 / Decimal(total_questions)
    return ratio.quantize(_CENT, rounding=ROUND_HALF_UP)


def format_score(score) -> str:
    return f"{Decimal(score or 0).quantize(_CENT, rounding=ROUND_HALF_UP)}"


def completion_percentage(answered: int, total: int) -> float:
    if not total:
        return 0.0
    return round(answered / total * 100, 2)
