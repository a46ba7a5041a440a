from typing import List, Optional

from pydantic import BaseModel, Field

from schemas.process import Orientation, ProcessModel


class DiagramRequest(BaseModel):
    model: ProcessModel
    orientation: Optional[Orientation] = None


class DiagramResponse(BaseModel):
    text: Optional[str] = None
    errors: List[str] = Field(default_factory=list)


class MarkdownExportResponse(BaseModel):
    markdown: str
