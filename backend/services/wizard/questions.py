"""Ordered question list for the guided process wizard.

Each question carries its own validator, answer-applier and next-question
resolver, so the sequence can be exercised with synthetic contexts.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Literal, Optional, Union

from core.settings import get_settings
from schemas.process import Lane, ProcessModel, Step
from services.ids import uid

QuestionKind = Literal["input", "multi", "table", "select"]

ENTRY_ID = "name"
# Destination meaning "hand the model over"; never a real question id.
COMPLETE = "generate"

ACTION_COLUMN = "Action"
LANE_COLUMN = "Lane"


@dataclass
class WizardContext:
    model: ProcessModel = field(default_factory=ProcessModel)
    answers: Dict[str, Any] = field(default_factory=dict)


Validator = Callable[[Any, WizardContext], Optional[str]]
Applier = Callable[[Any, WizardContext], None]
Resolver = Callable[[Any, WizardContext], str]


@dataclass(frozen=True)
class Question:
    id: str
    kind: QuestionKind
    prompt: str
    next: Union[str, Resolver]
    help: Optional[str] = None
    validate: Optional[Validator] = None
    on_answer: Optional[Applier] = None
    required: bool = True
    options: tuple[str, ...] = ()
    columns: tuple[str, ...] = ()

    def resolve_next(self, value: Any, ctx: WizardContext) -> str:
        if callable(self.next):
            return self.next(value, ctx)
        return self.next

    def check(self, value: Any, ctx: WizardContext) -> Optional[str]:
        """Return an error message for ``value`` or None when it is acceptable."""
        if self.validate is not None:
            return self.validate(value, ctx)
        return _default_validator(self)(value, ctx)


# -------------------------------
# Value helpers
# -------------------------------
def as_text(value: Any) -> str:
    if value is None:
        return ""
    return str(value).strip()


def as_items(value: Any) -> List[str]:
    """Normalize a multi answer: a list, or one item per line of a string."""
    if value is None:
        return []
    if isinstance(value, str):
        raw = value.splitlines()
    elif isinstance(value, (list, tuple)):
        raw = list(value)
    else:
        return []
    return [as_text(item) for item in raw if as_text(item)]


def as_rows(value: Any) -> List[Dict[str, str]]:
    if not isinstance(value, (list, tuple)):
        return []
    rows: List[Dict[str, str]] = []
    for row in value:
        if isinstance(row, dict):
            rows.append({str(k): "" if v is None else str(v) for k, v in row.items()})
        else:
            rows.append({})
    return rows


# -------------------------------
# Default validators per kind
# -------------------------------
def _required_text(value: Any, ctx: WizardContext) -> Optional[str]:
    return None if as_text(value) else "Required"


def _no_check(value: Any, ctx: WizardContext) -> Optional[str]:
    return None


def _at_least_one_item(value: Any, ctx: WizardContext) -> Optional[str]:
    return None if as_items(value) else "Add at least one item"


def _default_validator(question: Question) -> Validator:
    if not question.required:
        return _no_check
    if question.kind == "input":
        return _required_text
    if question.kind == "multi":
        return _at_least_one_item
    if question.kind == "select":
        options = question.options

        def _one_of_options(value: Any, ctx: WizardContext) -> Optional[str]:
            if as_text(value) in options:
                return None
            return "Choose one of the listed options"

        return _one_of_options
    return _no_check


# -------------------------------
# Concrete validators and appliers
# -------------------------------
def _set_field(field_name: str) -> Applier:
    def _apply(value: Any, ctx: WizardContext) -> None:
        setattr(ctx.model, field_name, as_text(value))

    return _apply


def _validate_lanes(value: Any, ctx: WizardContext) -> Optional[str]:
    names = as_items(value)
    if not names:
        return "Add at least one lane"
    if len(set(names)) != len(names):
        return "Lane names must be unique"
    return None


def _apply_lanes(value: Any, ctx: WizardContext) -> None:
    ctx.model.lanes = [Lane(id=uid("lane"), name=name) for name in as_items(value)]


def _validate_steps(value: Any, ctx: WizardContext) -> Optional[str]:
    rows = as_rows(value)
    if not rows:
        return "Add at least one step"
    lane_names = {lane.name for lane in ctx.model.lanes}
    for row in rows:
        if not as_text(row.get(ACTION_COLUMN)):
            return "Each step needs an Action label"
        # With no lanes collected there is nothing to reference; the applier
        # falls back to a generic lane instead.
        if lane_names and row.get(LANE_COLUMN, "") not in lane_names:
            return "Each step must be mapped to an existing lane"
    return None


def _apply_steps(value: Any, ctx: WizardContext) -> None:
    model = ctx.model
    if not model.lanes:
        model.lanes = [Lane(id=uid("lane"), name=get_settings().wizard.fallback_lane)]
    by_name = {lane.name: lane.id for lane in model.lanes}
    fallback_lane_id = model.lanes[0].id
    model.steps = [
        Step(
            id=uid("step"),
            label=as_text(row.get(ACTION_COLUMN)),
            lane_id=by_name.get(row.get(LANE_COLUMN, ""), fallback_lane_id),
        )
        for row in as_rows(value)
    ]


def _apply_metrics(value: Any, ctx: WizardContext) -> None:
    ctx.model.metrics = as_items(value)


REVIEW_CONTINUE = "Yes, continue"
REVIEW_RESTART = "No, restart"


def _after_review(value: Any, ctx: WizardContext) -> str:
    return COMPLETE if as_text(value).startswith("Yes") else ENTRY_ID


QUESTIONS: List[Question] = [
    Question(
        id="name",
        kind="input",
        prompt="Process name",
        help="e.g., Customer Onboarding",
        on_answer=_set_field("name"),
        next="goal",
    ),
    Question(
        id="goal",
        kind="input",
        prompt="What outcome should be guaranteed?",
        help="e.g., Account activated",
        on_answer=_set_field("goal"),
        next="trigger",
    ),
    Question(
        id="trigger",
        kind="input",
        prompt="What starts the process?",
        help="e.g., Signed contract received",
        on_answer=_set_field("trigger"),
        next="lanes",
    ),
    Question(
        id="lanes",
        kind="multi",
        prompt="Who is involved? (teams/roles become lanes)",
        help="Add 1-6 lanes",
        validate=_validate_lanes,
        on_answer=_apply_lanes,
        next="happy",
    ),
    Question(
        id="happy",
        kind="table",
        prompt="Happy path: actions to reach the goal (verb-first)",
        help="Add actions and map each to a lane.",
        columns=(ACTION_COLUMN, LANE_COLUMN),
        validate=_validate_steps,
        on_answer=_apply_steps,
        next="metrics",
    ),
    Question(
        id="metrics",
        kind="multi",
        prompt="What will you measure? (optional)",
        help="e.g., Lead time, First-pass yield",
        required=False,
        on_answer=_apply_metrics,
        next="review",
    ),
    Question(
        id="review",
        kind="select",
        prompt="Ready to generate and fine-tune?",
        help="You can still edit after",
        options=(REVIEW_CONTINUE, REVIEW_RESTART),
        next=_after_review,
    ),
]

QUESTIONS_BY_ID: Dict[str, Question] = {q.id: q for q in QUESTIONS}
