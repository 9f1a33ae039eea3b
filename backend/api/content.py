"""Reference Content API (read-only)"""
from dataclasses import asdict
from typing import Literal

from fastapi import APIRouter, Query
from pydantic import BaseModel

import content
from core.errors import not_found, raise_error

router = APIRouter()


class TableInfo(BaseModel):
    name: str
    count: int


class LettersOut(BaseModel):
    letters: list[str]
    final_letters: dict[str, str]


class CategoryOut(BaseModel):
    id: str
    label: str
    count: int


class TextExerciseOut(BaseModel):
    label: str
    text: list[str]


def _table_or_404(name: str) -> content.ReferenceTable:
    loader = content.TABLES.get(name)
    if loader is None:
        raise_error(not_found("Reference table", name, origin="api.content").error)
    return loader()


@router.get("/tables", response_model=list[TableInfo])
async def list_tables():
    return [TableInfo(name=name, count=len(loader())) for name, loader in content.TABLES.items()]


@router.get("/letters", response_model=LettersOut)
async def letters():
    return LettersOut(letters=list(content.hebrew_letters()), final_letters=content.final_letters())


@router.get("/text-exercises", response_model=list[TextExerciseOut])
async def text_exercises():
    return [TextExerciseOut(label=t.label, text=list(t.text)) for t in content.text_exercises()]


@router.get("/vocabulary/categories", response_model=list[CategoryOut])
async def vocabulary_categories():
    return [
        CategoryOut(
            id=category,
            label=content.CATEGORY_LABELS.get(category, category),
            count=len(content.get_vocab_by_category(category)),
        )
        for category in content.get_categories()
    ]


@router.get("/vocabulary")
async def vocabulary(category: str | None = None):
    rows = content.get_vocab_by_category(category) if category else list(content.vocabulary())
    return [asdict(r) for r in rows]


@router.get("/phrases/random")
async def random_phrases(count: int = Query(3, ge=1, le=20)):
    return [asdict(p) for p in content.phrases().sample(count)]


@router.get("/numbers")
async def numbers(gender: Literal["masculine", "feminine"] | None = None):
    rows = content.get_numbers_by_gender(gender) if gender else list(content.numbers())
    return [
        {**asdict(n), "gender_label": content.gender_label(n.gender), "gender_context": content.gender_context(n.gender)}
        for n in rows
    ]


@router.get("/verbs")
async def verbs(tense: Literal["past", "present", "future"] | None = None):
    rows = content.get_verbs_by_tense(tense) if tense else list(content.verbs())
    return [{**asdict(v), "tense_label": content.tense_label(v.tense)} for v in rows]


@router.get("/minimal-pairs")
async def minimal_pairs(focus_letter: str | None = None, confused_letter: str | None = None):
    if focus_letter and confused_letter:
        rows = content.get_minimal_pairs_by_letters(focus_letter, confused_letter)
    else:
        rows = list(content.minimal_pairs())
    return [asdict(mp) for mp in rows]


@router.get("/{table}")
async def table_rows(table: str):
    return [asdict(row) for row in _table_or_404(table)]


@router.get("/{table}/{item_id}")
async def table_row(table: str, item_id: str):
    row = _table_or_404(table).get(item_id)
    if row is None:
        raise_error(not_found(table, item_id, origin="api.content").error)
    return asdict(row)
