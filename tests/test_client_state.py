# File: tests/test_client_state.py

import pytest

from app.api.schemas.note import NoteOut
from app.client.state import (
    FavoriteToggled,
    NoteCreated,
    NoteDeleted,
    NoteReplaced,
    NotesLoaded,
    NotesState,
    OperationFailed,
    SearchChanged,
    filter_notes,
    html_to_text,
    partition,
    reduce,
    visible,
)


def _note(nid, title="", content="", fav=False):
    return NoteOut(
        id=nid,
        title=title,
        content=content,
        color="yellow",
        is_favorite=fav,
        created_at="2026-01-01T00:00:00.000Z",
        owner_id="u1",
    )


@pytest.fixture()
def loaded():
    notes = [
        _note("3", "Groceries", "<p>milk, eggs</p>"),
        _note("2", "Ideas", "<b>Grocery</b> app", fav=True),
        _note("1", "Todo", "call mom"),
    ]
    return reduce(NotesState(), NotesLoaded(notes=notes))


def test_loaded_marks_state(loaded):
    assert loaded.loaded is True
    assert [n.id for n in loaded.notes] == ["3", "2", "1"]


def test_created_is_prepended(loaded):
    state = reduce(loaded, NoteCreated(note=_note("4", "New")))
    assert [n.id for n in state.notes] == ["4", "3", "2", "1"]
    # el estado anterior no se modifica
    assert [n.id for n in loaded.notes] == ["3", "2", "1"]


def test_deleted_removes_only_matching(loaded):
    state = reduce(loaded, NoteDeleted(note_id="2"))
    assert [n.id for n in state.notes] == ["3", "1"]


def test_favorite_toggle_flips_in_place(loaded):
    state = reduce(loaded, FavoriteToggled(note_id="3"))
    assert [n.id for n in state.notes] == ["3", "2", "1"]
    assert state.notes[0].is_favorite is True
    state = reduce(state, FavoriteToggled(note_id="2"))
    assert state.notes[1].is_favorite is False


def test_replaced_takes_server_copy(loaded):
    server = _note("1", "Todo (trimmed)", "call dad")
    state = reduce(loaded, NoteReplaced(note=server))
    assert state.notes[2] == server


def test_failure_keeps_notes(loaded):
    state = reduce(loaded, OperationFailed(message="Note not found"))
    assert state.error == "Note not found"
    assert state.notes == loaded.notes
    state = reduce(state, NoteDeleted(note_id="1"))
    assert state.error is None


def test_unknown_action_raises(loaded):
    with pytest.raises(TypeError):
        reduce(loaded, object())


@pytest.mark.parametrize("term", ["grocer", "GROCER", "GrOcEr"])
def test_search_is_case_insensitive(loaded, term):
    ids = [n.id for n in filter_notes(loaded.notes, term)]
    assert ids == ["3", "2"]


def test_search_matches_raw_markup(loaded):
    assert [n.id for n in filter_notes(loaded.notes, "<b>")] == ["2"]


def test_empty_search_returns_everything(loaded):
    assert len(filter_notes(loaded.notes, "")) == 3


def test_partition_pinned_and_regular(loaded):
    pinned, regular = partition(loaded.notes)
    assert [n.id for n in pinned] == ["2"]
    assert [n.id for n in regular] == ["3", "1"]


def test_visible_filters_before_partition(loaded):
    state = reduce(loaded, SearchChanged(term="todo"))
    pinned, regular = visible(state)
    assert pinned == []
    assert [n.id for n in regular] == ["1"]


def test_html_to_text():
    assert html_to_text("<p><br></p>") == ""
    assert html_to_text("<p> hello <b>world</b></p>") == "hello world"
