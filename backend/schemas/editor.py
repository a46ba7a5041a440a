from typing import Optional

from pydantic import BaseModel

from schemas.process import ProcessModel


class EditorResponse(BaseModel):
    model: ProcessModel


class MetaRequest(BaseModel):
    model: ProcessModel
    name: Optional[str] = None
    goal: Optional[str] = None
    trigger: Optional[str] = None


class AddLaneRequest(BaseModel):
    model: ProcessModel
    name: str


class RemoveLaneRequest(BaseModel):
    model: ProcessModel
    lane_id: str


class AddStepRequest(BaseModel):
    model: ProcessModel
    label: str = ""
    lane_id: Optional[str] = None


class UpdateStepRequest(BaseModel):
    model: ProcessModel
    step_id: str
    label: Optional[str] = None
    lane_id: Optional[str] = None


class RemoveStepRequest(BaseModel):
    model: ProcessModel
    step_id: str


class MoveStepRequest(BaseModel):
    model: ProcessModel
    from_index: int
    to_index: int
