# File: vocabreview_app/modules/questions/engine.py
# QuestionGenerator - builds one multiple-choice question from a word record.

import random
from typing import Callable, Dict, Iterable, List, Optional

from ...core.error_handlers import InsufficientDataError
from ...core.logging_config import get_logger
from ...utils.text_utils import normalize_text
from .config import QuestionDefaultConfig
from .schemas import (
    GeneratedQuestion,
    QuestionType,
    QuizType,
    Relation,
    WordCorpus,
    WordRecord,
)

logger = get_logger(__name__)


class QuestionGenerator:
    """
    Generates quiz questions and their distractor options.

    Randomness (definition pick, distractor pick, option order, mixed-mode
    order) all comes from ``rng`` so a seeded ``random.Random`` makes the
    output reproducible.
    """

    def __init__(
        self,
        corpus: WordCorpus,
        rng: Optional[random.Random] = None,
        option_count: int = QuestionDefaultConfig.OPTION_COUNT,
        pool_size: int = QuestionDefaultConfig.DISTRACTOR_POOL_SIZE,
    ):
        self.corpus = corpus
        self.rng = rng or random.Random()
        self.option_count = option_count
        self.pool_size = pool_size

    @property
    def distractor_count(self) -> int:
        return self.option_count - 1

    def generate(self, word: WordRecord, quiz_type) -> GeneratedQuestion:
        """
        Build one question for ``word`` according to the session's quiz type.

        Raises:
            InsufficientDataError: If the word cannot back the requested question.
            ValueError: If ``quiz_type`` is not a QuizType value.
        """
        return QUIZ_TYPE_GENERATORS[QuizType(quiz_type)](self, word)

    # === Question kinds ===

    def definition_to_word(self, word: WordRecord) -> GeneratedQuestion:
        definition = self._pick_definition(word)
        candidates = self.corpus.sample_words(word.id, self.pool_size)
        distractors = self._pick_distractors(candidates, exclude=[word.word])

        return GeneratedQuestion(
            question_type=QuestionType.DEFINITION_TO_WORD,
            question_text=f'Which word matches this definition?\n\n"{definition.definition}"',
            correct_answer=word.word,
            options=self._shuffle_options(word.word, distractors),
        )

    def word_to_definition(self, word: WordRecord) -> GeneratedQuestion:
        definition = self._pick_definition(word)
        candidates = self.corpus.sample_definitions(word.id, self.pool_size)
        distractors = self._pick_distractors(candidates, exclude=[definition.definition])

        return GeneratedQuestion(
            question_type=QuestionType.WORD_TO_DEFINITION,
            question_text=f'What is the correct definition for the word "{word.word}"?',
            correct_answer=definition.definition,
            options=self._shuffle_options(definition.definition, distractors),
        )

    def synonym(self, word: WordRecord) -> GeneratedQuestion:
        return self._related_word_question(word, Relation.SYNONYM)

    def antonym(self, word: WordRecord) -> GeneratedQuestion:
        return self._related_word_question(word, Relation.ANTONYM)

    def mixed(self, word: WordRecord) -> GeneratedQuestion:
        """Try every question kind in random order; definition-to-word is the fallback."""
        kinds = list(QUESTION_TYPE_GENERATORS)
        self.rng.shuffle(kinds)

        for kind in kinds:
            try:
                return QUESTION_TYPE_GENERATORS[kind](self, word)
            except InsufficientDataError as exc:
                logger.debug("Skipping %s question for word %r: %s", kind.value, word.word, exc.message)

        return self.definition_to_word(word)

    # === Helpers ===

    def _related_word_question(self, word: WordRecord, relation: Relation) -> GeneratedQuestion:
        related = word.related(relation)
        if not related:
            raise InsufficientDataError(f'Word "{word.word}" does not have any {relation.value}s.')

        answer = self.rng.choice(related)
        candidates = self.corpus.sample_related_words(relation, word.id, self.pool_size)
        distractors = self._pick_distractors(candidates, exclude=[word.word, *word.synonyms, *word.antonyms])

        if len(distractors) < self.distractor_count:
            raise InsufficientDataError(
                f'Not enough distractors to generate a {relation.value} question for word "{word.word}".',
                required=self.distractor_count,
                found=len(distractors),
            )

        return GeneratedQuestion(
            question_type=QuestionType(relation.value),
            question_text=f'Which word is {"a" if relation is Relation.SYNONYM else "an"} '
                          f'{relation.value} of "{word.word}"?',
            correct_answer=answer,
            options=self._shuffle_options(answer, distractors),
        )

    def _pick_definition(self, word: WordRecord):
        if not word.definitions:
            raise InsufficientDataError(f'Word "{word.word}" does not have any definitions.')
        return self.rng.choice(word.definitions)

    def _pick_distractors(self, candidates: Iterable[str], exclude: Iterable[str]) -> List[str]:
        """Deduplicate candidates, drop excluded texts (case-insensitively) and keep a random few."""
        seen = {normalize_text(text) for text in exclude}
        unique = []
        for candidate in candidates:
            if not candidate:
                continue
            key = normalize_text(candidate)
            if key in seen:
                continue
            seen.add(key)
            unique.append(candidate)

        self.rng.shuffle(unique)
        return unique[:self.distractor_count]

    def _shuffle_options(self, answer: str, distractors: List[str]) -> List[str]:
        options = [answer, *distractors]
        self.rng.shuffle(options)
        return options


GeneratorFunc = Callable[[QuestionGenerator, WordRecord], GeneratedQuestion]

QUIZ_TYPE_GENERATORS: Dict[QuizType, GeneratorFunc] = {
    QuizType.DEFINITION_TO_WORD: QuestionGenerator.definition_to_word,
    QuizType.WORD_TO_DEFINITION: QuestionGenerator.word_to_definition,
    QuizType.MIXED: QuestionGenerator.mixed,
}

QUESTION_TYPE_GENERATORS: Dict[QuestionType, GeneratorFunc] = {
    QuestionType.DEFINITION_TO_WORD: QuestionGenerator.definition_to_word,
    QuestionType.WORD_TO_DEFINITION: QuestionGenerator.word_to_definition,
    QuestionType.SYNONYM: QuestionGenerator.synonym,
    QuestionType.ANTONYM: QuestionGenerator.antonym,
}

for _enum, _table in ((QuizType, QUIZ_TYPE_GENERATORS), (QuestionType, QUESTION_TYPE_GENERATORS)):
    _missing = set(_enum) - set(_table)
    if _missing:
        raise RuntimeError(f"No generator registered for {sorted(m.value for m in _missing)}")
