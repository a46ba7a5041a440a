from __future__ import annotations

from typing import Callable

from fastapi import APIRouter, HTTPException

from schemas.editor import (
    AddLaneRequest,
    AddStepRequest,
    EditorResponse,
    MetaRequest,
    MoveStepRequest,
    RemoveLaneRequest,
    RemoveStepRequest,
    UpdateStepRequest,
)
from schemas.process import ProcessModel
from services import editor_svc
from services.editor_svc import EditorError

router = APIRouter(prefix="/editor", tags=["Editor"])


def _run(operation: Callable[[], ProcessModel]) -> EditorResponse:
    try:
        return EditorResponse(model=operation())
    except EditorError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.post("/meta", response_model=EditorResponse)
def set_meta(payload: MetaRequest) -> EditorResponse:
    return _run(
        lambda: editor_svc.set_meta(
            payload.model, name=payload.name, goal=payload.goal, trigger=payload.trigger
        )
    )


@router.post("/lanes/add", response_model=EditorResponse)
def add_lane(payload: AddLaneRequest) -> EditorResponse:
    return _run(lambda: editor_svc.add_lane(payload.model, payload.name))


@router.post("/lanes/remove", response_model=EditorResponse)
def remove_lane(payload: RemoveLaneRequest) -> EditorResponse:
    return _run(lambda: editor_svc.remove_lane(payload.model, payload.lane_id))


@router.post("/steps/add", response_model=EditorResponse)
def add_step(payload: AddStepRequest) -> EditorResponse:
    return _run(
        lambda: editor_svc.add_step(payload.model, payload.label, payload.lane_id)
    )


@router.post("/steps/update", response_model=EditorResponse)
def update_step(payload: UpdateStepRequest) -> EditorResponse:
    return _run(
        lambda: editor_svc.update_step(
            payload.model, payload.step_id, label=payload.label, lane_id=payload.lane_id
        )
    )


@router.post("/steps/remove", response_model=EditorResponse)
def remove_step(payload: RemoveStepRequest) -> EditorResponse:
    return _run(lambda: editor_svc.remove_step(payload.model, payload.step_id))


@router.post("/steps/move", response_model=EditorResponse)
def move_step(payload: MoveStepRequest) -> EditorResponse:
    return _run(
        lambda: editor_svc.move_step(payload.model, payload.from_index, payload.to_index)
    )
