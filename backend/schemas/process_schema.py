# process_schema.py  (schéma serializovaného ProcessModel dokumentu)
from jsonschema import validate, ValidationError

SCHEMA = {
    "type": "object",
    "required": ["name", "goal", "trigger", "lanes", "steps"],
    "properties": {
        "name": {"type": "string"},
        "goal": {"type": "string"},
        "trigger": {"type": "string"},
        "lanes": {
            "type": "array",
            "items": {
                "type": "object",
                "required": ["id", "name"],
                "properties": {
                    "id": {"type": "string", "minLength": 1},
                    "name": {"type": "string"},
                },
                "additionalProperties": False,
            },
        },
        "steps": {
            "type": "array",
            "items": {
                "type": "object",
                "required": ["id", "laneId"],
                "properties": {
                    "id": {"type": "string", "minLength": 1},
                    "label": {"type": "string"},
                    "laneId": {"type": "string"},
                },
                "additionalProperties": False,
            },
        },
        "metrics": {
            "anyOf": [
                {"type": "null"},
                {"type": "array", "items": {"type": "string"}},
            ]
        },
    },
    "additionalProperties": False,
}


class DocumentError(ValueError):
    pass


def validate_document(document: dict):
    try:
        validate(instance=document, schema=SCHEMA)
    except ValidationError as e:
        where = "/".join([str(p) for p in e.path]) or "<root>"
        raise DocumentError(f"Document validation error at {where}: {e.message}")
