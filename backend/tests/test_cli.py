import json

import pytest

from cli import load_model, main, run_wizard
from schemas.process_schema import DocumentError


MODEL_YAML = """\
name: Customer Onboarding
goal: Account activated
trigger: Signed contract received
lanes:
  - id: lane_sales
    name: Sales
  - id: lane_it
    name: IT
steps:
  - id: step_1
    label: Sign contract
    laneId: lane_sales
  - id: step_2
    label: Provision account
    laneId: lane_it
"""


def test_load_model_from_yaml(tmp_path):
    path = tmp_path / "model.yaml"
    path.write_text(MODEL_YAML, encoding="utf-8")

    model = load_model(path)

    assert model.name == "Customer Onboarding"
    assert model.steps[1].lane_id == "lane_it"


def test_load_model_rejects_unknown_fields(tmp_path):
    path = tmp_path / "model.json"
    path.write_text(json.dumps({"name": "x", "color": "red"}), encoding="utf-8")

    with pytest.raises(DocumentError):
        load_model(path)


def test_generate_command_writes_markdown(tmp_path):
    src = tmp_path / "model.yaml"
    src.write_text(MODEL_YAML, encoding="utf-8")
    out = tmp_path / "out" / "diagram.md"

    code = main(["generate", str(src), "--orientation", "LR", "--markdown", "--out", str(out)])

    assert code == 0
    text = out.read_text(encoding="utf-8")
    assert text.startswith("```mermaid\nflowchart LR")
    assert "step_1 --> step_2" in text


def test_generate_command_reports_errors(tmp_path, capsys):
    src = tmp_path / "model.yaml"
    src.write_text(
        MODEL_YAML.replace("laneId: lane_it", "laneId: lane_gone"), encoding="utf-8"
    )

    code = main(["generate", str(src)])

    assert code == 2
    err = capsys.readouterr().err
    assert "error: Step 'Provision account' references a lane that does not exist." in err


def test_run_wizard_with_scripted_input():
    replies = iter(
        [
            "Customer Onboarding",
            "Account activated",
            ":back",
            "Account activated",
            "Signed contract received",
            "Sales",
            "IT",
            "",
            "Sign contract",
            "",
            "Provision account",
            "IT",
            "",
            "",
            "1",
        ]
    )
    output = []

    model = run_wizard(read=lambda prompt: next(replies), write=output.append)

    assert model is not None
    assert model.trigger == "Signed contract received"
    assert [s.label for s in model.steps] == ["Sign contract", "Provision account"]
    by_id = {lane.id: lane.name for lane in model.lanes}
    assert [by_id[s.lane_id] for s in model.steps] == ["Sales", "IT"]


def test_run_wizard_returns_none_on_eof():
    def _eof(prompt):
        raise EOFError

    output = []
    assert run_wizard(read=_eof, write=output.append) is None
    assert "Canceled." in output
