from __future__ import annotations

from datetime import datetime

from pydantic import computed_field

from studyai.apis.schemas import CamelModel


class DocumentRead(CamelModel):
    id: int
    title: str
    original_file_name: str
    created_at: datetime
    updated_at: datetime
    text_content: str | None = None

    @computed_field(alias="hasText")
    @property
    def has_text(self) -> bool:
        return bool(self.text_content and self.text_content.strip())


class DocumentSummary(CamelModel):
    id: int
    title: str
    original_file_name: str
    created_at: datetime
