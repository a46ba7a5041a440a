from __future__ import annotations

import copy
import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Sequence

from schemas.process import ProcessModel
from services.wizard.questions import (
    COMPLETE,
    ENTRY_ID,
    QUESTIONS,
    Question,
    WizardContext,
)

logger = logging.getLogger(__name__)


class WizardFinishedError(ValueError):
    pass


class UnknownQuestionError(ValueError):
    pass


@dataclass(frozen=True)
class SubmitResult:
    ok: bool
    error: Optional[str] = None
    completed: bool = False


class WizardEngine:
    """Drives the question sequence and hands the finished model to ``on_complete``.

    Invalid answers leave the engine on the same question with ``error`` set.
    Valid answers are applied to a copy of the context that then replaces the
    live one. ``go_back`` only moves the cursor; applied answers stay applied.
    """

    def __init__(
        self,
        on_complete: Callable[[ProcessModel], None],
        questions: Sequence[Question] = QUESTIONS,
        entry_id: str = ENTRY_ID,
        complete_id: str = COMPLETE,
    ):
        self._questions: Dict[str, Question] = {q.id: q for q in questions}
        if entry_id not in self._questions:
            raise UnknownQuestionError(f"Entry question '{entry_id}' is not defined.")
        self._entry_id = entry_id
        self._complete_id = complete_id
        self._on_complete = on_complete
        self.history: List[str] = [entry_id]
        self.error: Optional[str] = None
        self.context = WizardContext()
        self.completed = False

    @property
    def current_id(self) -> str:
        return self.history[-1]

    @property
    def current_question(self) -> Question:
        return self._questions[self.current_id]

    def start(self) -> Question:
        self.restart()
        return self.current_question

    def restart(self) -> None:
        self.history = [self._entry_id]
        self.error = None
        self.context = WizardContext()
        self.completed = False

    def submit_answer(self, value: Any) -> SubmitResult:
        if self.completed:
            raise WizardFinishedError("Wizard already handed off its model.")

        question = self.current_question
        error = question.check(value, self.context)
        if error:
            self.error = error
            logger.debug("Wizard answer rejected at %s: %s", question.id, error)
            return SubmitResult(ok=False, error=error)

        ctx = copy.deepcopy(self.context)
        if question.on_answer is not None:
            question.on_answer(value, ctx)
        ctx.answers[question.id] = value

        target = question.resolve_next(value, ctx)
        self.error = None

        if target == self._complete_id:
            self.context = ctx
            self.completed = True
            logger.info(
                "Wizard complete: %s (%d lanes, %d steps)",
                ctx.model.name,
                len(ctx.model.lanes),
                len(ctx.model.steps),
            )
            self._on_complete(ctx.model)
            return SubmitResult(ok=True, completed=True)

        if target not in self._questions:
            raise UnknownQuestionError(
                f"Question '{question.id}' routes to unknown question '{target}'."
            )

        if target == self._entry_id:
            logger.info("Wizard restarted from %s", question.id)
            self.restart()
            return SubmitResult(ok=True)

        self.context = ctx
        self.history.append(target)
        logger.debug("Wizard moved %s -> %s", question.id, target)
        return SubmitResult(ok=True)

    def go_back(self) -> None:
        if len(self.history) > 1:
            self.history.pop()
        self.error = None
