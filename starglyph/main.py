"""starglyph service -- FastAPI application.

Endpoints:
    POST /layout       -- Grid layout and glyph centers for a dataset
    POST /scene/svg    -- Static layer (cells + outlines) as SVG
    POST /scene/png    -- Static layer as PNG
    POST /frame        -- Animated star states at a given time
    POST /frame/svg    -- Static layer plus stars at a given time, as SVG
    POST /dataset/svg  -- Same as /frame/svg for an uploaded CSV file
    GET  /health       -- Health check
"""

from __future__ import annotations

import structlog
from fastapi import FastAPI, File, HTTPException, Query, Request, UploadFile
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, Response
from pydantic import BaseModel, ConfigDict, Field

from .animation import animate_vertices
from .dataset import parse_rows
from .generation import Generation, build_generation
from .scene import compose_frame_svg, render_png

structlog.configure(
    processors=[
        structlog.dev.ConsoleRenderer(),
    ],
)

logger = structlog.get_logger(__name__)

VERSION = "0.1.0"

app = FastAPI(
    title="starglyph",
    description="Grid of animated radial star glyphs for numeric datasets",
    version=VERSION,
)


# --------------------------------------------------------------------------
# Request / Response models
# --------------------------------------------------------------------------


class SceneRequest(BaseModel):
    """Request body for /layout and /scene endpoints."""

    model_config = ConfigDict(allow_inf_nan=False)

    rows: list[list[float]] = Field(
        ...,
        description="Dataset rows, one glyph per row",
        examples=[[[-10, 0, 10, 5], [1, 2, 3]]],
    )
    viewport_width: float = Field(
        default=1024,
        gt=0,
        le=16384,
        description="Viewport width in pixels",
    )


class FrameRequest(SceneRequest):
    """Request body for /frame endpoints."""

    elapsed_ms: float = Field(
        default=0.0,
        ge=0,
        description="Milliseconds since the animation started",
    )


class CenterModel(BaseModel):
    x: float
    y: float


class LayoutResponse(BaseModel):
    """Response body for /layout."""

    canvas_width: float
    canvas_height: float
    columns: int
    rows: int
    outer_padding_x: float
    outer_padding_y: float
    padding: float
    diameter: float
    centers: list[CenterModel]


class StarModel(BaseModel):
    x: float
    y: float
    size: float
    color: str = Field(description="Star color as #rrggbb")
    alpha: float = Field(description="Pulse alpha in [0, 255]")


class FrameResponse(BaseModel):
    """Response body for /frame."""

    elapsed_ms: float
    stars: list[StarModel]


class HealthResponse(BaseModel):
    """Response body for /health."""

    status: str
    service: str
    version: str


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Report validation errors without echoing the rejected input.

    Rejected NaN or infinite inputs cannot be written back as JSON.
    """
    errors = [{k: v for k, v in err.items() if k != "input"} for err in exc.errors()]
    return JSONResponse(status_code=422, content={"detail": jsonable_encoder(errors)})


def _generation(rows: list[list[float]], viewport_width: float) -> Generation:
    try:
        return build_generation(rows, viewport_width)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))


# --------------------------------------------------------------------------
# Endpoints
# --------------------------------------------------------------------------


@app.post("/layout", response_model=LayoutResponse)
async def layout_endpoint(request: SceneRequest) -> LayoutResponse:
    """Compute the grid layout for a dataset and viewport."""
    layout = _generation(request.rows, request.viewport_width).layout
    return LayoutResponse(
        canvas_width=layout.canvas_width,
        canvas_height=layout.canvas_height,
        columns=layout.columns,
        rows=layout.rows,
        outer_padding_x=layout.outer_padding_x,
        outer_padding_y=layout.outer_padding_y,
        padding=layout.padding,
        diameter=layout.diameter,
        centers=[CenterModel(x=c.x, y=c.y) for c in layout.centers],
    )


@app.post(
    "/scene/svg",
    response_class=Response,
    responses={
        200: {"content": {"image/svg+xml": {}}, "description": "Static layer SVG"},
        422: {"description": "Invalid input"},
    },
)
async def scene_svg(request: SceneRequest) -> Response:
    """Render the static layer (background, cells, outlines) as SVG."""
    generation = _generation(request.rows, request.viewport_width)
    return Response(content=generation.scene.to_svg(), media_type="image/svg+xml")


@app.post(
    "/scene/png",
    response_class=Response,
    responses={
        200: {"content": {"image/png": {}}, "description": "Static layer PNG"},
        422: {"description": "Invalid input"},
    },
)
async def scene_png(request: SceneRequest) -> Response:
    """Render the static layer as PNG."""
    scene = _generation(request.rows, request.viewport_width).scene
    try:
        png_bytes = render_png(scene.to_svg(), scene.width, scene.height)
    except Exception as e:
        logger.error("scene_png_failed", error=str(e))
        raise HTTPException(status_code=500, detail="Rendering failed")

    return Response(content=png_bytes, media_type="image/png")


@app.post("/frame", response_model=FrameResponse)
async def frame_endpoint(request: FrameRequest) -> FrameResponse:
    """Compute every star's size, color and alpha at the given time."""
    generation = _generation(request.rows, request.viewport_width)
    points = animate_vertices(generation.vertices, request.elapsed_ms)
    return FrameResponse(
        elapsed_ms=request.elapsed_ms,
        stars=[
            StarModel(x=p.x, y=p.y, size=p.size, color=p.color.hex, alpha=p.color.a)
            for p in points
        ],
    )


@app.post(
    "/frame/svg",
    response_class=Response,
    responses={
        200: {"content": {"image/svg+xml": {}}, "description": "Composed frame SVG"},
        422: {"description": "Invalid input"},
    },
)
async def frame_svg(request: FrameRequest) -> Response:
    """Render the static layer with the stars at the given time on top."""
    generation = _generation(request.rows, request.viewport_width)
    points = animate_vertices(generation.vertices, request.elapsed_ms)
    return Response(
        content=compose_frame_svg(generation.scene, points),
        media_type="image/svg+xml",
    )


@app.post(
    "/dataset/svg",
    response_class=Response,
    responses={
        200: {"content": {"image/svg+xml": {}}, "description": "Composed frame SVG"},
        413: {"description": "File too large"},
        422: {"description": "Invalid input"},
    },
)
async def dataset_svg(
    file: UploadFile = File(...),
    viewport_width: float = Query(default=1024, gt=0, le=16384, allow_inf_nan=False),
    elapsed_ms: float = Query(default=0.0, ge=0, allow_inf_nan=False),
) -> Response:
    """Render an uploaded CSV dataset (header line first) as a frame."""
    raw = await file.read()
    if len(raw) > 10 * 1024 * 1024:  # 10MB limit
        raise HTTPException(status_code=413, detail="Dataset too large (max 10MB)")

    try:
        rows = parse_rows(raw.decode("utf-8"))
    except (UnicodeDecodeError, ValueError) as e:
        raise HTTPException(status_code=422, detail=str(e))

    generation = _generation([list(r) for r in rows], viewport_width)
    points = animate_vertices(generation.vertices, elapsed_ms)
    return Response(
        content=compose_frame_svg(generation.scene, points),
        media_type="image/svg+xml",
    )


@app.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Report service name and version."""
    return HealthResponse(
        status="healthy",
        service="starglyph",
        version=VERSION,
    )
