from uuid import uuid4


def uid(prefix: str = "id", length: int = 8) -> str:
    """Short opaque id, unique enough within one editing session."""
    return f"{prefix}_{uuid4().hex[:length]}"
