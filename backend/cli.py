from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Any, Callable, List, Optional

import yaml
from pydantic import ValidationError

from schemas.process import Orientation, ProcessModel
from schemas.process_schema import DocumentError, validate_document
from services.diagram_svc import as_markdown, generate
from services.wizard import Question, WizardEngine

BACK = ":back"

Reader = Callable[[str], str]
Writer = Callable[[str], None]


def load_model(path: Path) -> ProcessModel:
    """Load a process model from a YAML or JSON document."""
    with path.open("r", encoding="utf-8") as handle:
        document = yaml.safe_load(handle)
    if not isinstance(document, dict):
        raise DocumentError(f"{path} does not contain a process document.")
    validate_document(document)
    return ProcessModel.model_validate(document)


def _write_output(text: str, out: Optional[Path], markdown: bool) -> None:
    if markdown:
        text = as_markdown(text)
    elif not text.endswith("\n"):
        text += "\n"
    if out is None:
        sys.stdout.write(text)
        return
    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_text(text, encoding="utf-8")
    print(f"Wrote {out}", file=sys.stderr)


def _emit(model: ProcessModel, args: argparse.Namespace) -> int:
    result = generate(model, args.orientation)
    if not result.ok:
        for error in result.errors:
            print(f"error: {error}", file=sys.stderr)
        return 2
    _write_output(result.text, args.out, args.markdown)
    return 0


# -------------------------------
# Interactive wizard
# -------------------------------
def _title(q: Question) -> str:
    return f"{q.prompt} ({q.help})" if q.help else q.prompt


def _ask_input(q: Question, read: Reader, write: Writer) -> Any:
    return read(f"{_title(q)}: ")


def _ask_multi(q: Question, read: Reader, write: Writer) -> Any:
    write(f"{_title(q)} - one per line, empty line to finish")
    items: List[str] = []
    while True:
        raw = read("  + ").strip()
        if raw == BACK and not items:
            return BACK
        if not raw:
            return items
        items.append(raw)


def _ask_table(q: Question, lanes: List[str], read: Reader, write: Writer) -> Any:
    write(f"{_title(q)} - empty action to finish")
    if lanes:
        write(f"  Lanes: {', '.join(lanes)}")
    default_lane = lanes[0] if lanes else ""
    rows: List[dict] = []
    while True:
        action = read("  Action: ").strip()
        if action == BACK and not rows:
            return BACK
        if not action:
            return rows
        lane = read(f"  Lane [{default_lane}]: ").strip() or default_lane
        rows.append({"Action": action, "Lane": lane})


def _ask_select(q: Question, read: Reader, write: Writer) -> Any:
    write(_title(q))
    for idx, option in enumerate(q.options, start=1):
        write(f"  {idx}. {option}")
    raw = read("Choice: ").strip()
    if raw.isdigit() and 1 <= int(raw) <= len(q.options):
        return q.options[int(raw) - 1]
    return raw


def run_wizard(read: Reader = input, write: Writer = print) -> Optional[ProcessModel]:
    """Drive the wizard from a terminal. Returns None when input ends early."""
    finished: List[ProcessModel] = []
    engine = WizardEngine(on_complete=finished.append)
    engine.start()
    write(f"Type {BACK} to return to the previous question.")

    try:
        while not engine.completed:
            q = engine.current_question
            if q.kind == "multi":
                value = _ask_multi(q, read, write)
            elif q.kind == "table":
                lanes = [lane.name for lane in engine.context.model.lanes]
                value = _ask_table(q, lanes, read, write)
            elif q.kind == "select":
                value = _ask_select(q, read, write)
            else:
                value = _ask_input(q, read, write)

            if isinstance(value, str) and value.strip() == BACK:
                engine.go_back()
                continue

            result = engine.submit_answer(value)
            if not result.ok:
                write(f"error: {result.error}")
    except EOFError:
        write("Canceled.")
        return None

    return finished[0] if finished else None


def _cmd_generate(args: argparse.Namespace) -> int:
    try:
        model = load_model(args.file)
    except (OSError, yaml.YAMLError, DocumentError, ValidationError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 2
    return _emit(model, args)


def _cmd_wizard(args: argparse.Namespace) -> int:
    model = run_wizard()
    if model is None:
        return 1
    if args.save_model:
        args.save_model.write_text(
            yaml.safe_dump(model.model_dump(by_alias=True), sort_keys=False),
            encoding="utf-8",
        )
    return _emit(model, args)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="process-designer",
        description="Generate Mermaid swimlane flowcharts from process models.",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")

    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "--orientation",
        type=str,
        choices=[o.value for o in Orientation],
        default=None,
        help="Flow direction (default: DIAGRAM_ORIENTATION or TD)",
    )
    common.add_argument(
        "--markdown", action="store_true", help="Wrap output in a ```mermaid fence"
    )
    common.add_argument("--out", type=Path, default=None, help="Output file (default: stdout)")

    sub = parser.add_subparsers(dest="command", required=True)

    gen = sub.add_parser("generate", parents=[common], help="Generate from a YAML/JSON model")
    gen.add_argument("file", type=Path)
    gen.set_defaults(func=_cmd_generate)

    wiz = sub.add_parser("wizard", parents=[common], help="Build a model interactively")
    wiz.add_argument(
        "--save-model", type=Path, default=None, help="Also store the finished model as YAML"
    )
    wiz.set_defaults(func=_cmd_wizard)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s - %(message)s",
    )
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
