"""Diagram layout and render endpoints."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException

from erdiagram.api.models import (
    LayoutRequest,
    LayoutResponse,
    RenderRequest,
    RenderResponse,
    SnapshotModel,
)
from erdiagram.core.diagram import DiagramSession
from erdiagram.utils.config import get_config
from erdiagram.utils.logging import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/api/v1/diagram", tags=["diagram"])


def _open_session(snapshot: SnapshotModel) -> DiagramSession:
    try:
        schema = snapshot.to_snapshot()
    except ValueError as e:
        raise HTTPException(status_code=400, detail=f"Invalid snapshot: {e}")

    session = DiagramSession(get_config())
    session.load(schema)
    return session


@router.post("/layout", response_model=LayoutResponse)
def layout_diagram(request: LayoutRequest) -> LayoutResponse:
    """Lay out every table of a snapshot.

    Returns:
        LayoutResponse with positioned nodes and the relationship list
    """
    session = _open_session(request.snapshot)
    return LayoutResponse(
        nodes=[node.to_dict() for node in session.nodes],
        edges=[edge.to_dict() for edge in session.edges],
        status=session.status,
    )


@router.post("/render", response_model=RenderResponse)
def render_diagram(request: RenderRequest) -> RenderResponse:
    """Lay out, route and frame a snapshot, with an optional hover applied.

    Raises:
        HTTPException: 400 if the snapshot is invalid or both a field and an
            edge are hovered
    """
    if request.hover_field and request.hover_edge:
        raise HTTPException(
            status_code=400, detail="Hover either a field or an edge, not both"
        )

    session = _open_session(request.snapshot)
    if request.canvas_width is not None or request.canvas_height is not None:
        session.fit_viewport(request.canvas_width, request.canvas_height)

    if request.hover_field:
        session.hover_field(request.hover_field.table, request.hover_field.column)
    elif request.hover_edge:
        session.hover_edge(request.hover_edge)

    frame = session.render().to_dict()
    logger.debug(f"Rendered {len(frame['nodes'])} nodes, {len(frame['edges'])} edges")
    return RenderResponse(**frame)
