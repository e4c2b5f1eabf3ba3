"""
Endpoints para `notes`. Todas las rutas requieren sesión y operan solo
sobre notas del usuario actual.
"""
from typing import Any, Dict

from fastapi import APIRouter, Depends, status

from app.api.deps import get_current_user
from app.api.schemas.note import (
    NoteCreate,
    NoteDeleteOut,
    NoteListOut,
    NoteOut,
    NotePatch,
    NoteReplace,
)
from app.services import note_service as service


router = APIRouter(prefix="/notes", tags=["Notes"])


@router.get(
    "",
    response_model=NoteListOut,
    summary="Listar notas",
    description="Todas las notas del usuario, más recientes primero. Sin paginación.",
)
def list_notes(user: Dict[str, Any] = Depends(get_current_user)):
    return service.list_notes(user)


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=NoteOut,
    summary="Crear nota",
    description="Requiere título o contenido; aplica defaults de título, contenido y color.",
)
def create_note(payload: NoteCreate, user: Dict[str, Any] = Depends(get_current_user)):
    return service.create_note(user, title=payload.title, content=payload.content, color=payload.color)


@router.put(
    "/{note_id}",
    response_model=NoteOut,
    summary="Reemplazar título y contenido",
    description="Ambos campos obligatorios y no vacíos tras recortar espacios.",
)
def replace_note(note_id: str, payload: NoteReplace, user: Dict[str, Any] = Depends(get_current_user)):
    return service.replace_note(user, note_id, title=payload.title, content=payload.content)


@router.patch(
    "/{note_id}",
    response_model=NoteOut,
    summary="Actualización parcial",
    description="Aplica solo los campos presentes: isFavorite, title, content, color.",
)
def patch_note(note_id: str, payload: NotePatch, user: Dict[str, Any] = Depends(get_current_user)):
    return service.patch_note(user, note_id, payload.changes())


@router.delete(
    "/{note_id}",
    response_model=NoteDeleteOut,
    summary="Eliminar nota",
)
def delete_note(note_id: str, user: Dict[str, Any] = Depends(get_current_user)):
    return service.delete_note(user, note_id)
