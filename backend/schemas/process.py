from __future__ import annotations

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class Orientation(str, Enum):
    TOP_DOWN = "TD"
    LEFT_RIGHT = "LR"


class Lane(BaseModel):
    id: str
    name: str


class Step(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    label: str = ""
    lane_id: str = Field(alias="laneId")


class ProcessModel(BaseModel):
    """Complete snapshot of a process as consumed by the diagram generator.

    Blank fields are allowed here on purpose; structural checks live in
    ``services.controller.validate`` so every problem can be reported at once.
    """

    name: str = ""
    goal: str = ""
    trigger: str = ""
    lanes: List[Lane] = Field(default_factory=list)
    steps: List[Step] = Field(default_factory=list)
    metrics: Optional[List[str]] = None

    def lane_by_id(self, lane_id: str) -> Optional[Lane]:
        return next((lane for lane in self.lanes if lane.id == lane_id), None)

    def lane_by_name(self, name: str) -> Optional[Lane]:
        return next((lane for lane in self.lanes if lane.name == name), None)
