"""Dictionary models: words and their definitions, synonyms and antonyms.

These tables are filled by the dictionary service; the quiz engine only
reads them.
"""

from __future__ import annotations

from datetime import datetime, timezone

from ..extensions import db


class Word(db.Model):
    __tablename__ = 'words'

    word_id = db.Column(db.Integer, primary_key=True)
    word = db.Column(db.String(255), unique=True, nullable=False, index=True)
    phonetic = db.Column(db.String(255))
    created_at = db.Column(db.DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))

    definitions = db.relationship(
        'WordDefinition',
        backref='word',
        lazy='selectin',
        cascade='all, delete-orphan',
        order_by='WordDefinition.definition_id',
    )
    synonym_links = db.relationship(
        'WordSynonym',
        foreign_keys='WordSynonym.word_id',
        lazy='selectin',
        cascade='all, delete-orphan',
    )
    antonym_links = db.relationship(
        'WordAntonym',
        foreign_keys='WordAntonym.word_id',
        lazy='selectin',
        cascade='all, delete-orphan',
    )

    @property
    def synonyms(self) -> list[str]:
        return sorted({link.synonym.word for link in self.synonym_links})

    @property
    def antonyms(self) -> list[str]:
        return sorted({link.antonym.word for link in self.antonym_links})

    def __repr__(self):
        return f"<Word {self.word_id}: {self.word}>"


class WordDefinition(db.Model):
    __tablename__ = 'word_definitions'

    definition_id = db.Column(db.Integer, primary_key=True)
    word_id = db.Column(db.Integer, db.ForeignKey('words.word_id', ondelete='CASCADE'), nullable=False, index=True)
    definition = db.Column(db.Text, nullable=False)
    part_of_speech = db.Column(db.String(50))


class WordSynonym(db.Model):
    __tablename__ = 'word_synonyms'

    id = db.Column(db.Integer, primary_key=True)
    word_id = db.Column(db.Integer, db.ForeignKey('words.word_id', ondelete='CASCADE'), nullable=False, index=True)
    synonym_id = db.Column(db.Integer, db.ForeignKey('words.word_id', ondelete='CASCADE'), nullable=False, index=True)

    synonym = db.relationship('Word', foreign_keys=[synonym_id], lazy='joined')

    __table_args__ = (
        db.UniqueConstraint('word_id', 'synonym_id', name='uq_word_synonym'),
    )


class WordAntonym(db.Model):
    __tablename__ = 'word_antonyms'

    id = db.Column(db.Integer, primary_key=True)
    word_id = db.Column(db.Integer, db.ForeignKey('words.word_id', ondelete='CASCADE'), nullable=False, index=True)
    antonym_id = db.Column(db.Integer, db.ForeignKey('words.word_id', ondelete='CASCADE'), nullable=False, index=True)

    antonym = db.relationship('Word', foreign_keys=[antonym_id], lazy='joined')

    __table_args__ = (
        db.UniqueConstraint('word_id', 'antonym_id', name='uq_word_antonym'),
    )
