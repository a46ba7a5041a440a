from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Literal

from schemas.process import ProcessModel
from services.sanitize import is_safe_id

Severity = Literal["error", "warning"]

# Node ids the diagram generator emits on its own.
TRIGGER_NODE_ID = "process_trigger"
GOAL_NODE_ID = "process_goal"
TITLE_NODE_ID = "process_title"

# Flowchart statement keywords; an id spelled like one is parsed as a statement.
MERMAID_KEYWORDS = {
    "end",
    "graph",
    "flowchart",
    "subgraph",
    "direction",
    "style",
    "class",
    "classDef",
    "click",
    "call",
    "href",
    "linkStyle",
}

RESERVED_IDS = MERMAID_KEYWORDS | {TRIGGER_NODE_ID, GOAL_NODE_ID, TITLE_NODE_ID}

MAX_LABEL_LENGTH = 60


@dataclass(frozen=True)
class Issue:
    code: str
    message: str
    severity: Severity
    node_id: str | None = None


def _blank(value: str | None) -> bool:
    return not (value or "").strip()


def validate(model: ProcessModel) -> List[Issue]:
    """Run structural checks over a process model and return every issue found."""
    issues: List[Issue] = []

    # Hard rules: top-level fields
    for field, code, label in (
        ("name", "missing_name", "Process name"),
        ("goal", "missing_goal", "Goal"),
        ("trigger", "missing_trigger", "Trigger"),
    ):
        if _blank(getattr(model, field)):
            issues.append(
                Issue(code=code, message=f"{label} is required.", severity="error")
            )

    if not model.lanes:
        issues.append(
            Issue(code="no_lanes", message="Add at least one lane.", severity="error")
        )
    if not model.steps:
        issues.append(
            Issue(code="no_steps", message="Add at least one step.", severity="error")
        )

    # Hard rules: ids must be usable as markup identifiers
    seen_ids: Dict[str, int] = {}
    for kind, items in (("Lane", model.lanes), ("Step", model.steps)):
        for item in items:
            if not is_safe_id(item.id) or item.id in RESERVED_IDS:
                issues.append(
                    Issue(
                        code="invalid_id",
                        message=f"{kind} id '{item.id}' is not a valid diagram identifier.",
                        severity="error",
                        node_id=item.id,
                    )
                )
            seen_ids[item.id] = seen_ids.get(item.id, 0) + 1
    for item_id, count in seen_ids.items():
        if count > 1:
            issues.append(
                Issue(
                    code="duplicate_id",
                    message=f"Id '{item_id}' is used {count} times.",
                    severity="error",
                    node_id=item_id,
                )
            )

    # Hard rules: steps
    lane_ids = {lane.id for lane in model.lanes}
    for position, step in enumerate(model.steps, start=1):
        if _blank(step.label):
            issues.append(
                Issue(
                    code="step_missing_label",
                    message=f"Step {position} needs a non-empty label.",
                    severity="error",
                    node_id=step.id,
                )
            )
        if step.lane_id not in lane_ids:
            name = step.label.strip() or f"Step {position}"
            issues.append(
                Issue(
                    code="step_unknown_lane",
                    message=f"Step '{name}' references a lane that does not exist.",
                    severity="error",
                    node_id=step.id,
                )
            )

    # Soft rule: empty lanes
    lane_usage: Dict[str, int] = {}
    for step in model.steps:
        lane_usage[step.lane_id] = lane_usage.get(step.lane_id, 0) + 1
    for lane in model.lanes:
        if lane_usage.get(lane.id, 0) == 0:
            name = lane.name or lane.id
            issues.append(
                Issue(
                    code="empty_lane",
                    message=f"Lane '{name}' has no assigned steps.",
                    severity="warning",
                    node_id=lane.id,
                )
            )

    # Soft rule: labels that are too long
    for step in model.steps:
        if len(step.label) > MAX_LABEL_LENGTH:
            issues.append(
                Issue(
                    code="too_long_name",
                    message=f"Step '{step.label}' exceeds {MAX_LABEL_LENGTH} characters.",
                    severity="warning",
                    node_id=step.id,
                )
            )

    # Soft rule: duplicate step labels within the same lane
    labels_per_lane: Dict[str, Dict[str, List[str]]] = {}
    for step in model.steps:
        key = step.label.strip().lower()
        if not key:
            continue
        lane_map = labels_per_lane.setdefault(step.lane_id, {})
        lane_map.setdefault(key, []).append(step.id)

    for lane_id, label_map in labels_per_lane.items():
        lane = model.lane_by_id(lane_id)
        lane_name = lane.name if lane else lane_id
        for step_ids in label_map.values():
            if len(step_ids) > 1:
                first = next(s for s in model.steps if s.id == step_ids[0])
                issues.append(
                    Issue(
                        code="duplicate_step_labels",
                        message=f"Lane '{lane_name}' has duplicate step label '{first.label.strip()}'.",
                        severity="warning",
                    )
                )

    # Soft rule: lane names should be unique
    names_seen: Dict[str, int] = {}
    for lane in model.lanes:
        key = lane.name.strip()
        names_seen[key] = names_seen.get(key, 0) + 1
    for name, count in names_seen.items():
        if count > 1:
            issues.append(
                Issue(
                    code="duplicate_lane_names",
                    message=f"Lane name '{name}' is used by {count} lanes.",
                    severity="warning",
                )
            )

    return issues


def errors_only(issues: List[Issue]) -> List[Issue]:
    return [issue for issue in issues if issue.severity == "error"]
