"""
Tests for answer grading, score rounding and the shared text normalizer.
"""

from decimal import Decimal

import pytest

from vocabreview_app.modules.quiz.logics.grading import (
    calculate_score,
    completion_percentage,
    format_score,
    grade_answer,
)
from vocabreview_app.utils.text_utils import normalize_text


class TestNormalizeText:

    @pytest.mark.parametrize('raw, expected', [
        ('  Happy ', 'happy'),
        ('STRASSE', 'strasse'),
        ('Straße', 'strasse'),
        (None, ''),
        ('', ''),
    ])
    def test_trims_and_casefolds(self, raw, expected):
        assert normalize_text(raw) == expected


class TestGradeAnswer:

    def test_ignores_case_and_surrounding_whitespace(self):
        assert grade_answer('  JOYFUL ', 'joyful') is True

    def test_inner_text_must_match(self):
        assert grade_answer('joy ful', 'joyful') is False


class TestScore:

    def test_rounds_half_up(self):
        assert calculate_score(2, 3) == Decimal('66.67')
        assert calculate_score(1, 3) == Decimal('33.33')
        assert calculate_score(5, 5) == Decimal('100.00')

    def test_empty_session(self):
        assert calculate_score(0, 0) == Decimal('0.00')
        assert completion_percentage(0, 0) == 0.0

    def test_format_score(self):
        assert format_score(Decimal('66.666')) == '66.67'
        assert format_score(None) == '0.00'
        assert completion_percentage(1, 3) == 33.33
