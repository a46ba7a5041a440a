# diagram_svc.py
# Deterministické generovanie Mermaid flowchartu z ProcessModel.

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from core.settings import get_settings, normalize_orientation
from schemas.process import Orientation, ProcessModel, Step
from services.controller.validate import (
    GOAL_NODE_ID,
    TITLE_NODE_ID,
    TRIGGER_NODE_ID,
    errors_only,
    validate,
)
from services.sanitize import comment, esc

INDENT = "  "

TERMINAL_CLASS = "terminal"
HEADING_CLASS = "heading"

CLASS_STYLES = {
    TERMINAL_CLASS: "fill:#e0f2fe,stroke:#0369a1,stroke-width:2px,color:#0c4a6e",
    HEADING_CLASS: "fill:none,stroke:none,font-weight:bold,font-size:16px",
}


@dataclass
class DiagramResult:
    text: Optional[str] = None
    errors: List[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.text is not None


def _resolve_orientation(orientation: Orientation | str | None) -> Orientation:
    if orientation is None:
        orientation = normalize_orientation(get_settings().diagram.orientation)
    return Orientation(orientation)


def _steps_by_lane(model: ProcessModel) -> Dict[str, List[Step]]:
    grouped: Dict[str, List[Step]] = {lane.id: [] for lane in model.lanes}
    for step in model.steps:
        if step.lane_id in grouped:
            grouped[step.lane_id].append(step)
    return grouped


def render_flowchart(
    model: ProcessModel,
    orientation: Orientation | str | None = None,
    include_comment: bool | None = None,
) -> str:
    """Emit Mermaid source for a model that already passed validation.

    Safe to call with zero steps; the edge chain is then omitted.
    """
    direction = _resolve_orientation(orientation)
    if include_comment is None:
        include_comment = get_settings().diagram.include_comment

    lines: List[str] = [f"flowchart {direction.value}"]
    if include_comment:
        lines.append(
            INDENT
            + comment(f"{model.name} | Goal: {model.goal} | Trigger: {model.trigger}")
        )

    lines.append(f'{INDENT}{TRIGGER_NODE_ID}(["{esc(model.trigger)}"])')
    lines.append(f'{INDENT}{GOAL_NODE_ID}(["{esc(model.goal)}"])')

    grouped = _steps_by_lane(model)
    for lane in model.lanes:
        lines.append(f'{INDENT}subgraph {lane.id}["{esc(lane.name)}"]')
        for step in grouped.get(lane.id, []):
            lines.append(f'{INDENT * 2}{step.id}["{esc(step.label)}"]')
        lines.append(f"{INDENT}end")

    # Edge chain follows the global step order, not the per-lane order.
    if model.steps:
        chain = [TRIGGER_NODE_ID] + [step.id for step in model.steps] + [GOAL_NODE_ID]
        for src, dst in zip(chain, chain[1:]):
            lines.append(f"{INDENT}{src} --> {dst}")

    lines.append(f'{INDENT}{TITLE_NODE_ID}["{esc(model.name)}"]')

    for class_name, style in CLASS_STYLES.items():
        lines.append(f"{INDENT}classDef {class_name} {style}")
    lines.append(f"{INDENT}class {TRIGGER_NODE_ID},{GOAL_NODE_ID} {TERMINAL_CLASS}")
    lines.append(f"{INDENT}class {TITLE_NODE_ID} {HEADING_CLASS}")

    return "\n".join(lines)


def generate(
    model: ProcessModel, orientation: Orientation | str | None = None
) -> DiagramResult:
    """Validate ``model`` and turn it into flowchart markup.

    Returns either the text or the full list of error messages, never both.
    """
    errors = [issue.message for issue in errors_only(validate(model))]
    if errors:
        return DiagramResult(errors=errors)
    return DiagramResult(text=render_flowchart(model, orientation))


def as_markdown(text: str) -> str:
    """Wrap Mermaid source in a Markdown Mermaid code fence."""
    return "```mermaid\n" + text.rstrip() + "\n```\n"
