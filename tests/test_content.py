import random

import pytest

import content


@pytest.mark.parametrize("path", sorted(content.CONTENT_DIR.glob("*.yaml")), ids=lambda p: p.name)
def test_every_data_file_parses(path):
    assert content.load_yaml(path.name)


@pytest.mark.parametrize("name", sorted(content.TABLES))
def test_tables_have_unique_ids(name):
    table = content.TABLES[name]()
    ids = table.ids()
    assert len(table) > 0
    assert len(ids) == len(table)


def test_vocabulary_lookup_and_categories():
    item = content.vocabulary().get("v001")
    assert item.hebrew == "שלום"
    assert content.vocabulary().get("v999") is None
    categories = content.get_categories()
    assert categories[0] == "greetings"
    assert set(categories) <= set(content.CATEGORY_LABELS)
    assert all(v.category == "verbs" for v in content.get_vocab_by_category("verbs"))


def test_phrases_by_category_and_sampling():
    assert content.phrases().get("phrase-1").english == "How are you?"
    questions = content.get_phrases_by_category("question")
    assert questions and all(p.category == "question" for p in questions)
    sample = content.phrases().sample(3, random.Random(5))
    assert len(sample) == 3
    assert len({p.id for p in sample}) == 3
    assert len(content.phrases().sample(100, random.Random(5))) == len(content.phrases())


def test_numbers_gender_helpers():
    masculine = content.get_numbers_by_gender("masculine")
    assert all(n.gender == "masculine" for n in masculine)
    assert content.gender_label("masculine") == "זכר"
    assert content.gender_label("feminine") == "נקבה"
    assert content.gender_context("feminine") == "girls/things (f)"


def test_plurals_verbs_roots_pairs_sentences():
    assert all(p.gender == "feminine" for p in content.get_plurals_by_gender("feminine"))
    assert content.get_plurals_by_pattern("-ים")
    assert {v.tense for v in content.get_verbs_by_tense("past")} == {"past"}
    assert len(content.get_verbs_by_infinitive("לכתוב")) == 3
    assert content.tense_label("future") == "עתיד"
    root = content.get_roots_by_root("כ-ת-ב")[0]
    assert isinstance(root.related_words, tuple)
    assert content.get_minimal_pairs_by_letters("כ", "ק")[0].target_word == "כל"
    assert "___" in content.sentences().get("s-1").hebrew_with_blank


def test_letters_and_geresh():
    assert len(content.hebrew_letters()) == 22
    assert content.final_letters()["מ"] == "ם"
    assert content.normalize_geresh("צ׳יפס") == "צ'יפס"


def test_text_exercises_loaded_in_order():
    texts = content.text_exercises()
    assert len(texts) == 7
    assert texts[0].label == "הקלדה עיוורת"
    assert all(t.text for t in texts)


def test_speakable_item_resolves_vocab_and_phrases():
    assert content.speakable_item("v002").hebrew == "תודה"
    assert content.speakable_item("phrase-1").hebrew == "מה שלומך?"
    assert content.speakable_item("nope") is None
