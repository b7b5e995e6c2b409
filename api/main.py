"""
api/main.py — FastAPI application for the chord progression engine.

Routes:
    /progressions/*  — generate, swap, schedule, revoice (api/routes/progressions.py)
    GET /health      — liveness
    GET /metrics     — Prometheus exposition
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import Response

from api.routes.progressions import router as progressions_router
from infrastructure.metrics import get_metrics_response

app = FastAPI(
    title="Chord Progression Engine",
    description="Voice-led progressions, smart chord swaps and tie scheduling.",
    version="0.1.0",
)

# The progression UI is served by the Vite dev server on port 5173.
app.add_middleware(
    CORSMiddleware,
    allow_origins=["http://localhost:5173", "http://127.0.0.1:5173"],
    allow_credentials=True,
    allow_methods=["GET", "POST"],
    allow_headers=["*"],
)

app.include_router(progressions_router)


@app.get("/health")
def health() -> dict[str, str]:
    """Liveness check. The engine holds no external connections."""
    return {"status": "ok"}


@app.get("/metrics")
def metrics() -> Response:
    """Expose the engine's Prometheus registry in text format."""
    body, content_type = get_metrics_response()
    return Response(content=body, media_type=content_type)
