from __future__ import annotations

import re

# Mermaid node/subgraph ids must be alphanumeric/underscore and must not start
# with a digit.
SAFE_ID_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")

_NEWLINE_RE = re.compile(r"\r\n|\r|\n")


def esc(text: str | None) -> str:
    """Make free text safe inside a quoted, bracketed Mermaid label.

    Backslashes go first so later substitutions are not escaped twice.
    """
    out = (text or "").replace("\\", "\\\\")
    out = _NEWLINE_RE.sub(" ", out)
    out = (
        out.replace("[", "(")
        .replace("]", ")")
        .replace("<", "&lt;")
        .replace(">", "&gt;")
        .replace('"', "#quot;")
    )
    return out.strip()


def comment(text: str) -> str:
    return f"%% {esc(text)}"


def is_safe_id(value: str | None) -> bool:
    return bool(value) and SAFE_ID_RE.match(value) is not None
