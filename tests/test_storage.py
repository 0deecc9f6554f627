from conftest import make_set


def test_save_then_get_returns_equal_set(storage):
    flashcard_set = make_set(user_id="u1")
    storage.save(flashcard_set)

    loaded = storage.get_by_id(flashcard_set.id)
    assert loaded == flashcard_set
    assert loaded.card_count == 2
    assert [c.set_id for c in loaded.flashcards] == [flashcard_set.id, flashcard_set.id]


def test_save_is_an_upsert(storage):
    flashcard_set = make_set(user_id="u1")
    storage.save(flashcard_set)
    storage.save(flashcard_set)

    renamed = flashcard_set.model_copy(update={"topic": "Spanish verbs"})
    storage.save(renamed)

    assert len(storage.get_all()) == 1
    assert storage.get_by_id(flashcard_set.id).topic == "Spanish verbs"


def test_get_missing_returns_none(storage):
    assert storage.get_by_id("missing") is None


def test_delete_is_idempotent(storage):
    flashcard_set = make_set()
    storage.save(flashcard_set)

    storage.delete(flashcard_set.id)
    storage.delete(flashcard_set.id)
    storage.delete("never-existed")

    assert storage.get_by_id(flashcard_set.id) is None
    assert storage.get_all() == []


def test_anonymous_sets_are_stored(storage):
    flashcard_set = make_set(user_id=None)
    storage.save(flashcard_set)

    assert storage.get_by_id(flashcard_set.id).user_id is None


def test_delete_all_by_user_id_only_removes_owned_sets(storage):
    mine = [make_set(user_id="u1", topic=f"t{i}") for i in range(3)]
    theirs = make_set(user_id="u2")
    anonymous = make_set(user_id=None)
    for flashcard_set in [*mine, theirs, anonymous]:
        storage.save(flashcard_set)

    storage.delete_all_by_user_id("u1")

    remaining = {s.id for s in storage.get_all()}
    assert remaining == {theirs.id, anonymous.id}


def test_returned_sets_are_copies(storage):
    flashcard_set = make_set(user_id="u1")
    storage.save(flashcard_set)

    loaded = storage.get_by_id(flashcard_set.id)
    loaded.topic = "changed"
    loaded.flashcards.clear()

    again = storage.get_by_id(flashcard_set.id)
    assert again.topic == "Spanish"
    assert again.card_count == 2
