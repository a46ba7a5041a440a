from typing import Any, List, Literal, Optional

from pydantic import BaseModel, Field

from schemas.process import Orientation, ProcessModel


class QuestionView(BaseModel):
    id: str
    kind: Literal["input", "multi", "table", "select"]
    prompt: str
    help: Optional[str] = None
    required: bool = True
    options: List[str] = Field(default_factory=list)
    columns: List[str] = Field(default_factory=list)
    lanes: List[str] = Field(default_factory=list)


class WizardState(BaseModel):
    session_id: str
    question: Optional[QuestionView] = None
    error: Optional[str] = None
    history: List[str] = Field(default_factory=list)
    completed: bool = False
    model: Optional[ProcessModel] = None
    diagram: Optional[str] = None
    diagram_errors: List[str] = Field(default_factory=list)


class AnswerRequest(BaseModel):
    value: Any = None
    orientation: Optional[Orientation] = None
