from __future__ import annotations

from datetime import datetime
from typing import Optional

from studyai.apis.schemas import CamelModel


class FlashcardRead(CamelModel):
    id: int
    owner_id: int
    document_id: int
    front: str
    back: str
    is_favorite: bool
    created_at: datetime
    updated_at: datetime


class FavoriteRequest(CamelModel):
    # Omitted -> toggle the current value
    is_favorite: Optional[bool] = None
