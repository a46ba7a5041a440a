from schemas.process import Lane, ProcessModel, Step
from services.controller.validate import errors_only, validate


def _codes(issues, severity=None):
    return {i.code for i in issues if severity is None or i.severity == severity}


def test_validate_collects_every_error():
    model = ProcessModel(
        name="",
        goal="  ",
        trigger="",
        lanes=[],
        steps=[Step(id="s1", label="", lane_id="gone")],
    )

    issues = validate(model)
    codes = _codes(issues, "error")
    assert {
        "missing_name",
        "missing_goal",
        "missing_trigger",
        "no_lanes",
        "step_missing_label",
        "step_unknown_lane",
    } <= codes
    assert "no_steps" not in codes


def test_validate_flags_ids_unusable_in_markup():
    model = ProcessModel(
        name="P",
        goal="G",
        trigger="T",
        lanes=[Lane(id="end", name="Ops"), Lane(id="lane-2", name="IT")],
        steps=[
            Step(id="s1", label="A", lane_id="end"),
            Step(id="s1", label="B", lane_id="end"),
            Step(id="process_goal", label="C", lane_id="end"),
        ],
    )

    issues = errors_only(validate(model))
    invalid = {i.node_id for i in issues if i.code == "invalid_id"}
    assert invalid == {"end", "lane-2", "process_goal"}
    assert "duplicate_id" in _codes(issues)


def test_validate_emits_soft_warnings():
    model = ProcessModel(
        name="P",
        goal="G",
        trigger="T",
        lanes=[
            Lane(id="L1", name="Team"),
            Lane(id="L2", name="Unused"),
            Lane(id="L3", name="Team"),
        ],
        steps=[
            Step(id="t1", label="A" * 61, lane_id="L1"),
            Step(id="t2", label="Duplicate", lane_id="L1"),
            Step(id="t3", label="duplicate ", lane_id="L1"),
            Step(id="t4", label="Other", lane_id="L3"),
        ],
    )

    issues = validate(model)
    assert not errors_only(issues)
    codes = _codes(issues, "warning")
    assert "empty_lane" in codes
    assert "too_long_name" in codes
    assert "duplicate_step_labels" in codes
    assert "duplicate_lane_names" in codes


def test_valid_model_has_no_issues():
    model = ProcessModel(
        name="P",
        goal="G",
        trigger="T",
        lanes=[Lane(id="L1", name="Team")],
        steps=[Step(id="s1", label="Do it", lane_id="L1")],
    )
    assert validate(model) == []


def test_validate_rejects_flowchart_keywords_as_ids():
    model = ProcessModel(
        name="P",
        goal="G",
        trigger="T",
        lanes=[Lane(id="subgraph", name="Ops"), Lane(id="style", name="IT")],
        steps=[
            Step(id="classDef", label="A", lane_id="subgraph"),
            Step(id="linkStyle", label="B", lane_id="style"),
            Step(id="click", label="C", lane_id="style"),
            Step(id="review", label="D", lane_id="style"),
        ],
    )

    issues = errors_only(validate(model))
    invalid = {i.node_id for i in issues if i.code == "invalid_id"}
    assert invalid == {"subgraph", "style", "classDef", "linkStyle", "click"}
