"""
Estado en memoria de las notas del usuario (lado cliente).

`reduce(state, action)` es puro: cada transición corresponde a un resultado
confirmado por el servidor (creada, eliminada, favorita, reemplazada). La
búsqueda y la partición fijadas/normales son derivadas y nunca se persisten.
"""
import re
from typing import Iterable, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict

from app.api.schemas.note import NoteOut

_TAG_RE = re.compile(r"<[^>]*>")


class NotesState(BaseModel):
    model_config = ConfigDict(frozen=True)

    notes: Tuple[NoteOut, ...] = ()
    search_term: str = ""
    loaded: bool = False
    error: Optional[str] = None


class _Action(BaseModel):
    model_config = ConfigDict(frozen=True)


class NotesLoaded(_Action):
    notes: Tuple[NoteOut, ...]


class NoteCreated(_Action):
    note: NoteOut


class NoteDeleted(_Action):
    note_id: str


class FavoriteToggled(_Action):
    note_id: str


class NoteReplaced(_Action):
    note: NoteOut


class SearchChanged(_Action):
    term: str


class OperationFailed(_Action):
    message: str


def reduce(state: NotesState, action: _Action) -> NotesState:
    if isinstance(action, NotesLoaded):
        return state.model_copy(update={"notes": tuple(action.notes), "loaded": True, "error": None})
    if isinstance(action, NoteCreated):
        # El servidor asigna id y createdAt; el cliente solo antepone
        return state.model_copy(update={"notes": (action.note,) + state.notes, "error": None})
    if isinstance(action, NoteDeleted):
        notes = tuple(n for n in state.notes if n.id != action.note_id)
        return state.model_copy(update={"notes": notes, "error": None})
    if isinstance(action, FavoriteToggled):
        notes = tuple(
            n.model_copy(update={"is_favorite": not n.is_favorite}) if n.id == action.note_id else n
            for n in state.notes
        )
        return state.model_copy(update={"notes": notes, "error": None})
    if isinstance(action, NoteReplaced):
        notes = tuple(action.note if n.id == action.note.id else n for n in state.notes)
        return state.model_copy(update={"notes": notes, "error": None})
    if isinstance(action, SearchChanged):
        return state.model_copy(update={"search_term": action.term})
    if isinstance(action, OperationFailed):
        return state.model_copy(update={"error": action.message})
    raise TypeError(f"Acción desconocida: {type(action).__name__}")


def filter_notes(notes: Iterable[NoteOut], term: str) -> List[NoteOut]:
    """Subcadena sin distinguir mayúsculas en título O contenido (HTML incluido)."""
    needle = (term or "").lower()
    if not needle:
        return list(notes)
    return [n for n in notes if needle in (n.title or "").lower() or needle in (n.content or "").lower()]


def partition(notes: Iterable[NoteOut]) -> Tuple[List[NoteOut], List[NoteOut]]:
    """Separa en (fijadas, normales) conservando el orden."""
    pinned: List[NoteOut] = []
    regular: List[NoteOut] = []
    for n in notes:
        (pinned if n.is_favorite else regular).append(n)
    return pinned, regular


def visible(state: NotesState) -> Tuple[List[NoteOut], List[NoteOut]]:
    # Filtrar primero, particionar después
    return partition(filter_notes(state.notes, state.search_term))


def html_to_text(markup: str) -> str:
    """Texto plano de un fragmento HTML del editor (solo para validar borradores)."""
    return _TAG_RE.sub("", markup or "").strip()
