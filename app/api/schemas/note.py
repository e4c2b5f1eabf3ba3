"""
Esquemas Pydantic para `note`.

- Campos en snake_case en Python, camelCase en el JSON (`isFavorite`, `createdAt`).
- `content` es HTML tal cual lo produce el editor; aquí no se sanitiza.
"""
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, model_validator
from pydantic.alias_generators import to_camel


class NoteColor(str, Enum):
    """Paleta fija (solo presentación). El primer valor es el default."""

    yellow = "yellow"
    pink = "pink"
    blue = "blue"
    green = "green"
    purple = "purple"
    orange = "orange"


DEFAULT_COLOR = list(NoteColor)[0]


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class NoteCreate(CamelModel):
    title: Optional[str] = None
    content: Optional[str] = None
    color: Optional[NoteColor] = None


class NoteReplace(CamelModel):
    """PUT: ambos campos son obligatorios; la regla se valida en el servicio."""

    title: Optional[str] = None
    content: Optional[str] = None


class NotePatch(CamelModel):
    """PATCH: solo se aplican los campos presentes en el body.

    `null` explícito no es un valor válido para ningún campo.
    """

    is_favorite: Optional[bool] = None
    title: Optional[str] = None
    content: Optional[str] = None
    color: Optional[NoteColor] = None

    @model_validator(mode="after")
    def _reject_nulls(self):
        nulls = sorted(f for f in self.model_fields_set if getattr(self, f) is None)
        if nulls:
            raise ValueError(f"null no permitido en: {', '.join(nulls)}")
        return self

    def changes(self) -> dict:
        return self.model_dump(mode="json", exclude_unset=True)


class NoteOut(CamelModel):
    id: str
    title: str
    content: str
    color: str
    is_favorite: bool
    created_at: str
    updated_at: Optional[str] = None
    owner_id: str


class NoteDeleteOut(BaseModel):
    message: str


NoteListOut = List[NoteOut]
