"""
Controlador de notas del cliente: une `ApiClient` con el estado en memoria.

El estado solo cambia después de que el servidor confirma (sin updates
optimistas). Los fallos quedan en `state.error` y no se reintentan.
"""
import logging
from typing import List, Optional, Tuple

from app.api.schemas.note import NoteOut
from app.client.api import ApiClient, ApiError
from app.client.state import (
    FavoriteToggled,
    NoteCreated,
    NoteDeleted,
    NoteReplaced,
    NotesLoaded,
    NotesState,
    OperationFailed,
    SearchChanged,
    html_to_text,
    reduce,
    visible,
)

_log = logging.getLogger("memo.client")


class DraftError(ValueError):
    """Borrador incompleto: se rechaza antes de llamar al servidor."""


def validate_draft(title: str, content: str) -> None:
    if not (title or "").strip() or not html_to_text(content):
        raise DraftError("Please enter both a title and content")


class NotesController:
    def __init__(self, api: ApiClient) -> None:
        self.api = api
        self.state = NotesState()

    def dispatch(self, action) -> NotesState:
        self.state = reduce(self.state, action)
        return self.state

    def _fail(self, op: str, e: ApiError) -> None:
        _log.warning("%s falló status=%s: %s", op, e.status_code, e.message)
        self.dispatch(OperationFailed(message=e.message))

    def load(self) -> NotesState:
        try:
            notes = self.api.list_notes()
        except ApiError as e:
            self._fail("load", e)
            return self.state
        return self.dispatch(NotesLoaded(notes=notes))

    def create(self, title: str, content: str, color: Optional[str] = None) -> Optional[NoteOut]:
        validate_draft(title, content)
        try:
            # Contenido HTML tal cual; solo el título se recorta
            note = self.api.create_note(title=title.strip(), content=content, color=color)
        except ApiError as e:
            self._fail("create", e)
            return None
        self.dispatch(NoteCreated(note=note))
        return note

    def delete(self, note_id: str) -> bool:
        try:
            self.api.delete_note(note_id)
        except ApiError as e:
            self._fail("delete", e)
            return False
        self.dispatch(NoteDeleted(note_id=note_id))
        return True

    def toggle_favorite(self, note_id: str) -> bool:
        current = self.find(note_id)
        if current is None:
            return False
        try:
            self.api.patch_note(note_id, is_favorite=not current.is_favorite)
        except ApiError as e:
            self._fail("toggle_favorite", e)
            return False
        self.dispatch(FavoriteToggled(note_id=note_id))
        return True

    def replace(self, note_id: str, title: str, content: str) -> Optional[NoteOut]:
        validate_draft(title, content)
        try:
            note = self.api.replace_note(note_id, title=title.strip(), content=content)
        except ApiError as e:
            self._fail("replace", e)
            return None
        self.dispatch(NoteReplaced(note=note))
        return note

    def search(self, term: str) -> Tuple[List[NoteOut], List[NoteOut]]:
        self.dispatch(SearchChanged(term=term))
        return visible(self.state)

    def find(self, note_id: str) -> Optional[NoteOut]:
        return next((n for n in self.state.notes if n.id == note_id), None)

    @property
    def pinned(self) -> List[NoteOut]:
        return visible(self.state)[0]

    @property
    def regular(self) -> List[NoteOut]:
        return visible(self.state)[1]
