from engines.curriculum import ExerciseKind


def test_catalog_indices_are_contiguous_and_ids_unique(catalog):
    summaries = catalog.summaries()
    assert [s.index for s in summaries] == list(range(len(summaries)))
    assert len({s.id for s in summaries}) == len(summaries)
    assert len(catalog) == 19 + 7


def test_free_text_follows_letter_exercises(catalog):
    texts = catalog.text_exercises
    assert texts[0].index == catalog.letter_exercise_count == 19
    assert texts[0].id == "text-19"
    assert texts[0].kind is ExerciseKind.TEXT
    assert texts[0].label == "הקלדה עיוורת"
    assert texts[-1].id == "text-25"


def test_initially_nothing_selected(catalog):
    assert catalog.current is None
    assert catalog.current_letter is None


def test_select_by_id_activates_letter_exercise(catalog):
    exercise = catalog.select_by_id("practice-1")
    assert exercise is catalog.current
    assert exercise.index == 1
    assert exercise.new_letters == ("ג", "ל")
    assert exercise.label == "ג ל (Practice)"
    assert exercise.text
    assert catalog.current_letter == "ג"


def test_select_by_index_activates_free_text(catalog):
    exercise = catalog.select_by_index(20)
    assert exercise.id == "text-20"
    assert exercise.new_letters is None
    assert catalog.current_letter is None


def test_unknown_id_is_silent_noop(catalog):
    catalog.select_by_id("practice-1")
    before = catalog.current
    assert catalog.select_by_id("practice-999") is None
    assert catalog.current is before


def test_unknown_index_is_silent_noop(catalog):
    assert catalog.select_by_index(-1) is None
    assert catalog.select_by_index(len(catalog)) is None
    assert catalog.current is None


def test_regenerate_replaces_only_text(catalog):
    catalog.select_by_id("review-8")
    before = catalog.current
    texts = {before.text}
    for _ in range(5):
        after = catalog.regenerate()
        texts.add(after.text)
        assert (after.id, after.index, after.kind, after.label, after.new_letters) == (
            before.id, before.index, before.kind, before.label, before.new_letters,
        )
    assert len(texts) > 1


def test_regenerate_is_noop_for_free_text(catalog):
    exercise = catalog.select_by_index(19)
    assert catalog.regenerate() is exercise
    assert catalog.current is exercise


def test_regenerate_is_noop_without_selection(catalog):
    assert catalog.regenerate() is None
    assert catalog.current is None


def test_clear_returns_to_initial_state(catalog):
    catalog.select_by_id("practice-0")
    catalog.clear()
    assert catalog.current is None
    assert catalog.current_letter is None


def test_get_builds_without_selecting(catalog):
    exercise = catalog.get(5)
    assert exercise.id == "practice-5"
    assert catalog.current is None
    assert catalog.get(100) is None


def test_target_text_joins_lines(catalog):
    exercise = catalog.select_by_index(19)
    assert exercise.target_text == "\n".join(exercise.text)
