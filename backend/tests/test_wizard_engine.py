import pytest

from schemas.process import Lane
from services.wizard import (
    COMPLETE,
    ENTRY_ID,
    QUESTIONS,
    WizardContext,
    WizardEngine,
    WizardFinishedError,
)
from services.wizard.questions import QUESTIONS_BY_ID, REVIEW_CONTINUE, REVIEW_RESTART

HAPPY_ROWS = [
    {"Action": "Sign contract", "Lane": "Sales"},
    {"Action": "Provision account", "Lane": "IT"},
]


def _engine():
    finished = []
    engine = WizardEngine(on_complete=finished.append)
    engine.start()
    return engine, finished


def _answer_until(engine, stop_at):
    answers = {
        "name": "Customer Onboarding",
        "goal": "Account activated",
        "trigger": "Signed contract received",
        "lanes": ["Sales", "IT"],
        "happy": HAPPY_ROWS,
        "metrics": ["Lead time"],
    }
    while engine.current_id != stop_at:
        result = engine.submit_answer(answers[engine.current_id])
        assert result.ok, result.error


def test_question_sequence_order():
    assert [q.id for q in QUESTIONS] == [
        "name",
        "goal",
        "trigger",
        "lanes",
        "happy",
        "metrics",
        "review",
    ]
    assert QUESTIONS[0].id == ENTRY_ID


def test_full_run_hands_off_model_once():
    engine, finished = _engine()
    _answer_until(engine, "review")

    result = engine.submit_answer(REVIEW_CONTINUE)

    assert result.ok and result.completed
    assert len(finished) == 1
    model = finished[0]
    assert model.name == "Customer Onboarding"
    assert [lane.name for lane in model.lanes] == ["Sales", "IT"]
    lane_ids = {lane.name: lane.id for lane in model.lanes}
    assert [(s.label, s.lane_id) for s in model.steps] == [
        ("Sign contract", lane_ids["Sales"]),
        ("Provision account", lane_ids["IT"]),
    ]
    assert model.metrics == ["Lead time"]

    with pytest.raises(WizardFinishedError) as exc:
        engine.submit_answer(REVIEW_CONTINUE)
    assert isinstance(exc.value, ValueError)
    assert len(finished) == 1


def test_invalid_answer_stays_and_does_not_mutate():
    engine, _ = _engine()
    before = engine.context.model.model_copy(deep=True)

    result = engine.submit_answer("   ")

    assert not result.ok
    assert result.error == "Required"
    assert engine.error == "Required"
    assert engine.current_id == "name"
    assert engine.context.model == before
    assert engine.history == ["name"]


def test_table_rejects_lane_not_collected_earlier():
    engine, _ = _engine()
    engine.submit_answer("Onboarding")
    engine.submit_answer("Done")
    engine.submit_answer("Contract")
    engine.submit_answer(["Sales"])
    assert engine.current_id == "happy"
    before = engine.context.model.model_copy(deep=True)

    result = engine.submit_answer([{"Action": "Call customer", "Lane": "Support"}])

    assert not result.ok
    assert result.error == "Each step must be mapped to an existing lane"
    assert engine.current_id == "happy"
    assert engine.context.model == before


def test_table_rejects_blank_action_and_empty_table():
    engine, _ = _engine()
    _answer_until(engine, "happy")

    assert engine.submit_answer([]).error == "Add at least one step"
    assert (
        engine.submit_answer([{"Action": " ", "Lane": "Sales"}]).error
        == "Each step needs an Action label"
    )


def test_go_back_moves_cursor_but_keeps_applied_answers():
    engine, _ = _engine()
    _answer_until(engine, "trigger")
    engine.submit_answer("")
    assert engine.error

    engine.go_back()

    assert engine.current_id == "goal"
    assert engine.error is None
    assert engine.context.model.goal == "Account activated"


def test_go_back_at_entry_is_noop():
    engine, _ = _engine()
    engine.go_back()
    assert engine.history == [ENTRY_ID]


def test_review_restart_discards_context():
    engine, finished = _engine()
    _answer_until(engine, "review")

    result = engine.submit_answer(REVIEW_RESTART)

    assert result.ok and not result.completed
    assert engine.history == [ENTRY_ID]
    assert engine.context.model.name == ""
    assert engine.context.answers == {}
    assert finished == []


def test_review_rejects_unknown_option():
    engine, _ = _engine()
    _answer_until(engine, "review")

    result = engine.submit_answer("Maybe")

    assert not result.ok
    assert engine.current_id == "review"


def test_metrics_are_optional():
    engine, _ = _engine()
    _answer_until(engine, "metrics")

    assert engine.submit_answer([]).ok
    assert engine.current_id == "review"
    assert engine.context.model.metrics == []


def test_answers_are_recorded_by_question_id():
    engine, _ = _engine()
    _answer_until(engine, "lanes")
    assert engine.context.answers["name"] == "Customer Onboarding"
    assert "lanes" not in engine.context.answers


def test_lane_names_must_be_unique():
    q = QUESTIONS_BY_ID["lanes"]
    assert q.check(["Sales", "Sales"], WizardContext()) == "Lane names must be unique"
    assert q.check("Sales\n\nIT", WizardContext()) is None
    assert q.check([], WizardContext()) == "Add at least one lane"


def test_table_applier_synthesizes_fallback_lane():
    q = QUESTIONS_BY_ID["happy"]
    ctx = WizardContext()
    rows = [{"Action": "Do the thing", "Lane": ""}]

    assert q.check(rows, ctx) is None
    q.on_answer(rows, ctx)

    assert [lane.name for lane in ctx.model.lanes] == ["General"]
    assert ctx.model.steps[0].lane_id == ctx.model.lanes[0].id


def test_table_applier_keeps_existing_lanes():
    q = QUESTIONS_BY_ID["happy"]
    ctx = WizardContext()
    ctx.model.lanes = [Lane(id="lane_a", name="A"), Lane(id="lane_b", name="B")]

    q.on_answer([{"Action": "x", "Lane": "B"}, {"Action": "y", "Lane": "A"}], ctx)

    assert [s.lane_id for s in ctx.model.steps] == ["lane_b", "lane_a"]
    assert len(ctx.model.lanes) == 2


def test_review_resolver_routes_by_choice():
    q = QUESTIONS_BY_ID["review"]
    ctx = WizardContext()
    assert q.resolve_next(REVIEW_CONTINUE, ctx) == COMPLETE
    assert q.resolve_next(REVIEW_RESTART, ctx) == ENTRY_ID
