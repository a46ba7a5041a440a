from dataclasses import asdict

from fastapi import APIRouter, Body, HTTPException
from pydantic import ValidationError

from schemas.process import ProcessModel
from schemas.process_schema import DocumentError, validate_document
from services.controller.validate import validate as controller_validate

router = APIRouter(prefix="/controller", tags=["Controller"])


@router.post("/validate")
def validate_endpoint(payload: dict = Body(...)):
    document = payload.get("model") or {}
    try:
        validate_document(document)
        model = ProcessModel.model_validate(document)
    except (DocumentError, ValidationError) as e:
        raise HTTPException(status_code=400, detail=str(e))
    issues = controller_validate(model)
    return {"issues": [asdict(issue) for issue in issues]}
