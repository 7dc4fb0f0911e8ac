"""
Tests for the database-backed repositories (progress and vocabulary).
"""

from datetime import timedelta

import pytest
from sqlalchemy import delete

from vocabreview_app import db
from vocabreview_app.core.error_handlers import ConflictError, NotFoundError
from vocabreview_app.models import UserSavedWord, WordLearningProgress
from vocabreview_app.modules.progress import ProgressRepository
from vocabreview_app.modules.questions import Relation
from vocabreview_app.modules.srs import ProgressState
from vocabreview_app.modules.vocabulary import SavedWordRepository, WordRepository
from vocabreview_app.utils.time_utils import utcnow


class TestProgressRepository:

    def test_get_unsaved_word_raises(self, learner, dictionary):
        with pytest.raises(NotFoundError):
            ProgressRepository.get(learner.user_id, dictionary['happy'].word_id)

    def test_saved_word_starts_at_level_zero(self, learner, dictionary, save_word):
        save_word(learner, dictionary['happy'], due=False)
        state = ProgressRepository.get(learner.user_id, dictionary['happy'].word_id)
        assert (state.mastery_level, state.review_interval) == (0, 1)
        assert state.correct_count == 0 and state.wrong_count == 0

    def test_upsert_updates_existing_progress(self, learner, dictionary, save_word):
        word = dictionary['happy']
        save_word(learner, word)
        now = utcnow()

        ProgressRepository.upsert(
            learner.user_id, word.word_id,
            ProgressState(mastery_level=2, review_interval=14, correct_count=4, next_review_at=now),
        )
        db.session.commit()

        state = ProgressRepository.get(learner.user_id, word.word_id)
        assert (state.mastery_level, state.review_interval, state.correct_count) == (2, 14, 4)
        assert WordLearningProgress.query.count() == 1

    def test_upsert_creates_missing_progress(self, learner, dictionary):
        word = dictionary['brave']
        db.session.add(UserSavedWord(user_id=learner.user_id, word_id=word.word_id))
        db.session.commit()
        assert ProgressRepository.find(learner.user_id, word.word_id) is None

        ProgressRepository.upsert(learner.user_id, word.word_id, ProgressState(mastery_level=1, review_interval=5))
        db.session.commit()

        assert ProgressRepository.get(learner.user_id, word.word_id).mastery_level == 1

    def test_upsert_unsaved_word_raises(self, learner, dictionary):
        with pytest.raises(NotFoundError):
            ProgressRepository.upsert(learner.user_id, dictionary['calm'].word_id, ProgressState())


class TestProgressStats:

    @staticmethod
    def _set_level(user, word, level):
        ProgressRepository.upsert(user.user_id, word.word_id, ProgressState(mastery_level=level, review_interval=1))
        db.session.commit()

    def test_counts_by_mastery_level(self, learner, make_user, dictionary, save_word):
        for text, level in (('happy', 5), ('brave', 3), ('quick', 1), ('calm', 0)):
            save_word(learner, dictionary[text])
            self._set_level(learner, dictionary[text], level)
        # Saved without a progress row: counted as level 0
        db.session.add(UserSavedWord(user_id=learner.user_id, word_id=dictionary['eager'].word_id))
        db.session.commit()
        other = make_user('other')
        save_word(other, dictionary['gentle'])
        self._set_level(other, dictionary['gentle'], 4)

        stats = ProgressRepository.stats(learner.user_id)

        assert stats.total_saved_words == 5
        assert stats.started_words == 3
        assert stats.intermediate_words == 2
        assert stats.mastered_words == 1
        assert stats.average_mastery_level == 1.8
        assert stats.to_dict()['masteryStats'] == {'0': 2, '1': 1, '2': 0, '3': 1, '4': 0, '5': 1}
        assert stats.to_dict()['wordsReviewed'] == 3

    def test_learner_without_saved_words(self, learner):
        stats = ProgressRepository.stats(learner.user_id)

        assert stats.total_saved_words == 0
        assert stats.average_mastery_level == 0.0
        assert set(stats.to_dict()['masteryStats'].values()) == {0}


class TestSavedWordRepository:

    def test_cannot_save_twice(self, learner, dictionary, save_word):
        save_word(learner, dictionary['happy'])
        with pytest.raises(ConflictError):
            SavedWordRepository.save_word(learner.user_id, dictionary['happy'].word_id)

    def test_unknown_word(self, learner):
        with pytest.raises(NotFoundError):
            SavedWordRepository.save_word(learner.user_id, 9999)

    def test_unsaving_through_the_orm_deletes_progress(self, learner, dictionary, save_word):
        saved = save_word(learner, dictionary['happy'])
        assert WordLearningProgress.query.count() == 1

        db.session.delete(saved)
        db.session.commit()

        assert WordLearningProgress.query.count() == 0

    def test_unsaving_with_a_plain_delete_deletes_progress(self, learner, dictionary, save_word):
        saved = save_word(learner, dictionary['happy'])
        save_word(learner, dictionary['brave'])

        db.session.execute(delete(UserSavedWord).where(UserSavedWord.saved_word_id == saved.saved_word_id))
        db.session.commit()
        db.session.expire_all()

        remaining = WordLearningProgress.query.all()
        assert len(remaining) == 1
        assert remaining[0].saved_word.word_id == dictionary['brave'].word_id


class TestFindDueWords:

    def test_only_due_saved_words(self, learner, dictionary, save_word):
        save_word(learner, dictionary['happy'])
        save_word(learner, dictionary['brave'], due=False)

        due = WordRepository().find_due_words(learner.user_id, 10)
        assert [record.word for record in due] == ['happy']
        assert due[0].definitions[0].definition == 'feeling or showing pleasure'

    def test_word_without_progress_is_due(self, learner, dictionary):
        db.session.add(UserSavedWord(user_id=learner.user_id, word_id=dictionary['calm'].word_id))
        db.session.commit()
        assert [record.word for record in WordRepository().find_due_words(learner.user_id, 10)] == ['calm']

    def test_review_later_today_is_due(self, learner, dictionary, save_word):
        saved = save_word(learner, dictionary['quick'], due=False)
        now = utcnow().replace(hour=1, minute=0, second=0, microsecond=0)
        saved.learning_progress.next_review_at = now + timedelta(hours=20)
        db.session.commit()

        assert len(WordRepository().find_due_words(learner.user_id, 10, now=now)) == 1
        assert WordRepository().find_due_words(learner.user_id, 10, now=now - timedelta(days=1)) == []

    def test_words_without_definitions_are_skipped(self, learner, make_word, save_word):
        save_word(learner, make_word('empty'))
        assert WordRepository().find_due_words(learner.user_id, 10) == []

    def test_other_learners_words_are_ignored(self, learner, make_user, dictionary, save_word):
        save_word(make_user('someone'), dictionary['happy'])
        assert WordRepository().find_due_words(learner.user_id, 10) == []

    def test_limit(self, due_words, learner):
        due_words(5)
        assert len(WordRepository().find_due_words(learner.user_id, 3)) == 3


class TestCorpusSampling:

    def test_sample_words_excludes_target(self, dictionary):
        happy = dictionary['happy']
        words = WordRepository().sample_words(happy.word_id, 10)
        assert 'happy' not in words
        assert len(words) == len(dictionary) - 1

    def test_sample_definitions_excludes_target(self, dictionary):
        definitions = WordRepository().sample_definitions(dictionary['happy'].word_id, 3)
        assert len(definitions) == 3
        assert 'feeling or showing pleasure' not in definitions

    def test_related_words_skip_everything_linked_to_target(self, make_word):
        happy = make_word('joyful', definitions=['very happy'], synonyms=['glad'], antonyms=['sad'])
        make_word('big', synonyms=['large'])
        make_word('fast', antonyms=['slow'])
        make_word('cheerful', synonyms=['joyful'])

        words = WordRepository().sample_related_words(Relation.SYNONYM, happy.word_id, 10)
        assert sorted(words) == ['big', 'large']

        words = WordRepository().sample_related_words(Relation.ANTONYM, happy.word_id, 10)
        assert sorted(words) == ['fast', 'slow']

    def test_to_record_collects_relations(self, make_word):
        word = make_word('joyful', definitions=['very happy'], synonyms=['glad', 'cheerful'], antonyms=['sad'])
        record = WordRepository.to_record(word)
        assert record.synonyms == ['cheerful', 'glad']
        assert record.antonyms == ['sad']
        assert [d.definition for d in record.definitions] == ['very happy']
