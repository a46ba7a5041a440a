import logging

from fastapi import APIRouter, HTTPException

from schemas.diagram import DiagramRequest, DiagramResponse, MarkdownExportResponse
from services.diagram_svc import as_markdown, generate

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/diagram", tags=["Diagram"])


@router.post("/generate", response_model=DiagramResponse)
def generate_diagram(payload: DiagramRequest) -> DiagramResponse:
    """
    Turn a process model into Mermaid flowchart source, or list every problem.
    """
    result = generate(payload.model, payload.orientation)
    if not result.ok:
        logger.info("Diagram generation refused: %d error(s)", len(result.errors))
    return DiagramResponse(text=result.text, errors=result.errors)


@router.post("/export-markdown", response_model=MarkdownExportResponse)
def export_markdown(payload: DiagramRequest) -> MarkdownExportResponse:
    result = generate(payload.model, payload.orientation)
    if not result.ok:
        raise HTTPException(status_code=400, detail={"errors": result.errors})
    return MarkdownExportResponse(markdown=as_markdown(result.text))
