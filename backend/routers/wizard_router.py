from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, HTTPException, Response

from schemas.process import Orientation
from schemas.wizard import AnswerRequest, QuestionView, WizardState
from services.diagram_svc import generate
from services.session_store import SessionNotFoundError, WizardSession, WizardSessionStore
from services.wizard import WizardFinishedError

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/wizard/sessions", tags=["Wizard"])

_store = WizardSessionStore()


def _get_session(session_id: str) -> WizardSession:
    try:
        return _store.get(session_id)
    except SessionNotFoundError:
        raise HTTPException(status_code=404, detail="Wizard session not found.")


def _state(
    session: WizardSession, orientation: Optional[Orientation] = None
) -> WizardState:
    engine = session.engine
    state = WizardState(
        session_id=session.id,
        error=engine.error,
        history=list(engine.history),
        completed=engine.completed,
    )
    if session.result is not None:
        state.model = session.result
        result = generate(session.result, orientation)
        state.diagram = result.text
        state.diagram_errors = result.errors
        return state

    q = engine.current_question
    state.question = QuestionView(
        id=q.id,
        kind=q.kind,
        prompt=q.prompt,
        help=q.help,
        required=q.required,
        options=list(q.options),
        columns=list(q.columns),
        lanes=[lane.name for lane in engine.context.model.lanes],
    )
    return state


@router.post("", response_model=WizardState)
def start_session() -> WizardState:
    session = _store.create()
    with session.lock:
        return _state(session)


@router.get("/{session_id}", response_model=WizardState)
def get_session(session_id: str) -> WizardState:
    session = _get_session(session_id)
    with session.lock:
        return _state(session)


@router.post("/{session_id}/answer", response_model=WizardState)
def submit_answer(session_id: str, payload: AnswerRequest) -> WizardState:
    session = _get_session(session_id)
    with session.lock:
        try:
            session.engine.submit_answer(payload.value)
        except WizardFinishedError as e:
            raise HTTPException(status_code=409, detail=str(e))
        return _state(session, payload.orientation)


@router.post("/{session_id}/back", response_model=WizardState)
def go_back(session_id: str) -> WizardState:
    session = _get_session(session_id)
    with session.lock:
        if session.engine.completed:
            raise HTTPException(
                status_code=409, detail="Wizard already handed off its model."
            )
        session.engine.go_back()
        return _state(session)


@router.post("/{session_id}/restart", response_model=WizardState)
def restart(session_id: str) -> WizardState:
    session = _get_session(session_id)
    with session.lock:
        session.restart()
        return _state(session)


@router.delete("/{session_id}", status_code=204)
def delete_session(session_id: str) -> Response:
    try:
        _store.delete(session_id)
    except SessionNotFoundError:
        raise HTTPException(status_code=404, detail="Wizard session not found.")
    return Response(status_code=204)
