# editor_svc.py
# Priama editácia procesu: každá operácia vracia novú kópiu modelu.

from __future__ import annotations

import logging
from typing import Optional

from schemas.process import Lane, ProcessModel, Step
from services.ids import uid

logger = logging.getLogger(__name__)


class EditorError(ValueError):
    pass


class LaneInUseError(EditorError):
    pass


def _copy(model: ProcessModel) -> ProcessModel:
    return model.model_copy(deep=True)


def _step_index(model: ProcessModel, step_id: str) -> int:
    for idx, step in enumerate(model.steps):
        if step.id == step_id:
            return idx
    raise EditorError(f"Step '{step_id}' does not exist.")


def _require_lane(model: ProcessModel, lane_id: str) -> Lane:
    lane = model.lane_by_id(lane_id)
    if lane is None:
        raise EditorError(f"Lane '{lane_id}' does not exist.")
    return lane


def set_meta(
    model: ProcessModel,
    name: Optional[str] = None,
    goal: Optional[str] = None,
    trigger: Optional[str] = None,
) -> ProcessModel:
    updated = _copy(model)
    if name is not None:
        updated.name = name
    if goal is not None:
        updated.goal = goal
    if trigger is not None:
        updated.trigger = trigger
    return updated


def add_lane(model: ProcessModel, name: str) -> ProcessModel:
    clean = (name or "").strip()
    if not clean:
        raise EditorError("Lane name is required.")
    if model.lane_by_name(clean) is not None:
        raise EditorError(f"Lane '{clean}' already exists.")
    updated = _copy(model)
    updated.lanes.append(Lane(id=uid("lane"), name=clean))
    return updated


def remove_lane(model: ProcessModel, lane_id: str) -> ProcessModel:
    """Remove an unused lane.

    Lanes that still have steps are rejected, so no step is ever left pointing
    at a missing lane.
    """
    lane = _require_lane(model, lane_id)
    dependent = [step for step in model.steps if step.lane_id == lane_id]
    if dependent:
        logger.warning(
            "Rejected removal of lane %s: %d step(s) assigned", lane_id, len(dependent)
        )
        raise LaneInUseError(
            f"Lane '{lane.name}' still has {len(dependent)} step(s). "
            "Move or remove them first."
        )
    updated = _copy(model)
    updated.lanes = [l for l in updated.lanes if l.id != lane_id]
    return updated


def add_step(
    model: ProcessModel, label: str = "", lane_id: Optional[str] = None
) -> ProcessModel:
    if not model.lanes:
        raise EditorError("Add a lane first.")
    target_lane = lane_id or model.lanes[0].id
    _require_lane(model, target_lane)
    updated = _copy(model)
    updated.steps.append(Step(id=uid("step"), label=label or "", lane_id=target_lane))
    return updated


def update_step(
    model: ProcessModel,
    step_id: str,
    label: Optional[str] = None,
    lane_id: Optional[str] = None,
) -> ProcessModel:
    idx = _step_index(model, step_id)
    if lane_id is not None:
        _require_lane(model, lane_id)
    updated = _copy(model)
    step = updated.steps[idx]
    if label is not None:
        step.label = label
    if lane_id is not None:
        step.lane_id = lane_id
    return updated


def remove_step(model: ProcessModel, step_id: str) -> ProcessModel:
    _step_index(model, step_id)
    updated = _copy(model)
    updated.steps = [s for s in updated.steps if s.id != step_id]
    return updated


def move_step(model: ProcessModel, from_index: int, to_index: int) -> ProcessModel:
    """Drag-to-reorder: take the step at ``from_index`` and insert it at ``to_index``."""
    count = len(model.steps)
    for idx in (from_index, to_index):
        if idx < 0 or idx >= count:
            raise EditorError(f"Step position {idx} is out of range.")
    updated = _copy(model)
    if from_index == to_index:
        return updated
    moved = updated.steps.pop(from_index)
    updated.steps.insert(to_index, moved)
    return updated
