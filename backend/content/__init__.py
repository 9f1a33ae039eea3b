"""Hebrew Reference Data - read-only tables keyed by stable string IDs.

Each YAML file under ``content/he`` is loaded once and cached. The engines
only consume ``id`` and the Hebrew text fields; nothing here is ever mutated.
"""
from pathlib import Path
from dataclasses import dataclass, field, fields
from functools import lru_cache
from typing import Callable, Generic, Iterator, Literal, TypeVar
import random

import yaml

from core.logging import content_logger

log = content_logger()

CONTENT_DIR = Path(__file__).parent / "he"

T = TypeVar("T")

GenderType = Literal["masculine", "feminine"]
TenseType = Literal["past", "present", "future"]
PhraseCategory = Literal["greeting", "question", "response", "common", "travel"]


@dataclass(frozen=True, slots=True)
class VocabItem:
    id: str
    hebrew: str
    transliteration: str
    english: str
    category: str


@dataclass(frozen=True, slots=True)
class Phrase:
    id: str
    hebrew: str
    transliteration: str
    english: str
    category: PhraseCategory


@dataclass(frozen=True, slots=True)
class NumberEntry:
    id: str
    value: int
    hebrew: str
    transliteration: str
    gender: GenderType


@dataclass(frozen=True, slots=True)
class PluralEntry:
    id: str
    singular: str
    singular_translit: str
    plural: str
    plural_translit: str
    english: str
    gender: GenderType
    pattern: str


@dataclass(frozen=True, slots=True)
class VerbEntry:
    id: str
    infinitive: str
    infinitive_translit: str
    root: str
    english: str
    tense: TenseType
    person: str
    conjugated: str
    conjugated_translit: str


@dataclass(frozen=True, slots=True)
class RootEntry:
    id: str
    root: str
    target_word: str
    target_translit: str
    english: str
    hint: str
    related_words: tuple[str, ...] = field(default_factory=tuple)


@dataclass(frozen=True, slots=True)
class MinimalPair:
    id: str
    target_word: str
    target_translit: str
    english: str
    confused_with: str
    confused_translit: str
    confused_english: str
    focus_letter: str
    confused_letter: str


@dataclass(frozen=True, slots=True)
class SentenceEntry:
    id: str
    hebrew_with_blank: str
    answer: str
    answer_transliteration: str
    english_translation: str
    hint: str


@dataclass(frozen=True, slots=True)
class TextExerciseData:
    label: str
    text: tuple[str, ...]


class ReferenceTable(Generic[T]):
    """Ordered, ID-keyed, read-only table."""

    __slots__ = ("name", "_rows", "_by_id")

    def __init__(self, name: str, rows: list[T]):
        self.name = name
        self._rows: tuple[T, ...] = tuple(rows)
        self._by_id: dict[str, T] = {getattr(r, "id"): r for r in self._rows}

    def __iter__(self) -> Iterator[T]:
        return iter(self._rows)

    def __len__(self) -> int:
        return len(self._rows)

    def get(self, item_id: str) -> T | None:
        return self._by_id.get(item_id)

    def ids(self) -> list[str]:
        return list(self._by_id)

    def where(self, predicate: Callable[[T], bool]) -> list[T]:
        return [r for r in self._rows if predicate(r)]

    def sample(self, count: int, rng: random.Random | None = None) -> list[T]:
        """Random subset without repetition, at most ``count`` rows."""
        rng = rng or random.Random()
        return rng.sample(list(self._rows), min(max(count, 0), len(self._rows)))


def load_yaml(filename: str):
    path = CONTENT_DIR / filename
    with open(path, encoding="utf-8") as f:
        return yaml.safe_load(f)


def _parse_rows(cls: type[T], raw: list[dict]) -> list[T]:
    known = {f.name for f in fields(cls)}
    rows = []
    for item in raw or []:
        values = {k: v for k, v in item.items() if k in known}
        for key, value in values.items():
            if isinstance(value, list):
                values[key] = tuple(value)
        rows.append(cls(**values))
    return rows


def _table(name: str, filename: str, cls: type[T]) -> ReferenceTable[T]:
    rows = _parse_rows(cls, load_yaml(filename))
    log.debug("reference_table_loaded", table=name, rows=len(rows))
    return ReferenceTable(name, rows)


# =============================================================================
# Letters
# =============================================================================

@lru_cache(maxsize=1)
def _letters_data() -> dict:
    return load_yaml("letters.yaml")


def hebrew_letters() -> tuple[str, ...]:
    return tuple(_letters_data()["hebrew_letters"])


def final_letters() -> dict[str, str]:
    """Base letter -> final (sofit) form."""
    return dict(_letters_data()["final_letters"])


def normalize_geresh(text: str) -> str:
    """Normalize the macOS Hebrew geresh to the ASCII apostrophe Windows types."""
    data = _letters_data()
    return text.replace(data["mac_geresh"], data["windows_geresh"])


@lru_cache(maxsize=1)
def letter_exercise_descriptors() -> list[dict]:
    return load_yaml("letter_exercises.yaml")


@lru_cache(maxsize=1)
def text_exercises() -> tuple[TextExerciseData, ...]:
    return tuple(
        TextExerciseData(label=item["label"], text=tuple(item["text"]))
        for item in load_yaml("text_exercises.yaml")
    )


# =============================================================================
# Tables
# =============================================================================

@lru_cache(maxsize=1)
def vocabulary() -> ReferenceTable[VocabItem]:
    return _table("vocabulary", "vocabulary.yaml", VocabItem)


@lru_cache(maxsize=1)
def phrases() -> ReferenceTable[Phrase]:
    return _table("phrases", "phrases.yaml", Phrase)


@lru_cache(maxsize=1)
def numbers() -> ReferenceTable[NumberEntry]:
    return _table("numbers", "numbers.yaml", NumberEntry)


@lru_cache(maxsize=1)
def plurals() -> ReferenceTable[PluralEntry]:
    return _table("plurals", "plurals.yaml", PluralEntry)


@lru_cache(maxsize=1)
def verbs() -> ReferenceTable[VerbEntry]:
    return _table("verbs", "verbs.yaml", VerbEntry)


@lru_cache(maxsize=1)
def roots() -> ReferenceTable[RootEntry]:
    return _table("roots", "roots.yaml", RootEntry)


@lru_cache(maxsize=1)
def minimal_pairs() -> ReferenceTable[MinimalPair]:
    return _table("minimal_pairs", "minimal_pairs.yaml", MinimalPair)


@lru_cache(maxsize=1)
def sentences() -> ReferenceTable[SentenceEntry]:
    return _table("sentences", "sentences.yaml", SentenceEntry)


TABLES: dict[str, Callable[[], ReferenceTable]] = {
    "vocabulary": vocabulary,
    "phrases": phrases,
    "numbers": numbers,
    "plurals": plurals,
    "verbs": verbs,
    "roots": roots,
    "minimal_pairs": minimal_pairs,
    "sentences": sentences,
}


# =============================================================================
# Queries
# =============================================================================

CATEGORY_LABELS: dict[str, str] = {
    "greetings": "ברכות",
    "pronouns": "כינויים",
    "verbs": "פעלים",
    "questions": "מילות שאלה",
    "numbers": "מספרים",
    "nouns": "שמות עצם",
}


def get_vocab_by_category(category: str) -> list[VocabItem]:
    return vocabulary().where(lambda v: v.category == category)


def get_categories() -> list[str]:
    """Unique vocabulary categories in first-seen order."""
    return list(dict.fromkeys(v.category for v in vocabulary()))


def get_phrases_by_category(category: PhraseCategory) -> list[Phrase]:
    return phrases().where(lambda p: p.category == category)


def get_numbers_by_gender(gender: GenderType) -> list[NumberEntry]:
    return numbers().where(lambda n: n.gender == gender)


def gender_label(gender: GenderType) -> str:
    return "זכר" if gender == "masculine" else "נקבה"


def gender_context(gender: GenderType) -> str:
    return "boys/things (m)" if gender == "masculine" else "girls/things (f)"


def get_plurals_by_gender(gender: GenderType) -> list[PluralEntry]:
    return plurals().where(lambda p: p.gender == gender)


def get_plurals_by_pattern(pattern: str) -> list[PluralEntry]:
    return plurals().where(lambda p: p.pattern == pattern)


def get_verbs_by_tense(tense: TenseType) -> list[VerbEntry]:
    return verbs().where(lambda v: v.tense == tense)


def get_verbs_by_infinitive(infinitive: str) -> list[VerbEntry]:
    return verbs().where(lambda v: v.infinitive == infinitive)


def tense_label(tense: TenseType) -> str:
    return {"past": "עבר", "present": "הווה", "future": "עתיד"}[tense]


def get_roots_by_root(root: str) -> list[RootEntry]:
    return roots().where(lambda r: r.root == root)


def get_minimal_pairs_by_letters(focus_letter: str, confused_letter: str) -> list[MinimalPair]:
    return minimal_pairs().where(
        lambda mp: mp.focus_letter == focus_letter and mp.confused_letter == confused_letter
    )


def speakable_item(item_id: str) -> VocabItem | Phrase | None:
    """Resolve a vocabulary or phrase ID to its entry (for speech playback)."""
    return phrases().get(item_id) or vocabulary().get(item_id)


def clear_all_caches() -> None:
    """Drop every cached table (tests, content reloads)."""
    _letters_data.cache_clear()
    letter_exercise_descriptors.cache_clear()
    text_exercises.cache_clear()
    for loader in TABLES.values():
        loader.cache_clear()


__all__ = [
    "CONTENT_DIR",
    "ReferenceTable",
    "VocabItem",
    "Phrase",
    "NumberEntry",
    "PluralEntry",
    "VerbEntry",
    "RootEntry",
    "MinimalPair",
    "SentenceEntry",
    "TextExerciseData",
    "TABLES",
    "CATEGORY_LABELS",
    "hebrew_letters",
    "final_letters",
    "normalize_geresh",
    "letter_exercise_descriptors",
    "text_exercises",
    "vocabulary",
    "phrases",
    "numbers",
    "plurals",
    "verbs",
    "roots",
    "minimal_pairs",
    "sentences",
    "get_vocab_by_category",
    "get_categories",
    "get_phrases_by_category",
    "get_numbers_by_gender",
    "gender_label",
    "gender_context",
    "get_plurals_by_gender",
    "get_plurals_by_pattern",
    "get_verbs_by_tense",
    "get_verbs_by_infinitive",
    "tense_label",
    "get_roots_by_root",
    "get_minimal_pairs_by_letters",
    "speakable_item",
    "clear_all_caches",
]
