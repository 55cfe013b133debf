"""FastAPI application for PhysAI Lab."""

from __future__ import annotations

from typing import Any

from fastapi import FastAPI, HTTPException, Response
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

from physai import __version__
from physai.errors import EmptyProblemError, InvalidParameterError, NoScenarioError
from physai.lab import PhysicsLab
from physai.samples import SAMPLE_PROBLEMS

app = FastAPI(
    title="PhysAI Lab",
    description="API for turning physics word problems into live simulations",
    version=__version__,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Single-user lab instance; the lab keeps no networked multi-user state
_lab: PhysicsLab | None = None


def get_lab() -> PhysicsLab:
    """Get or create the lab instance."""
    global _lab
    if _lab is None:
        _lab = PhysicsLab()
    return _lab


def reset_lab() -> None:
    """Drop the lab instance (tests, server reloads)."""
    global _lab
    _lab = None


# ----- Request/Response Models -----

class ProblemRequest(BaseModel):
    """Request to submit a new problem."""
    text: str = Field(..., description="Physics word problem")


class ParameterRequest(BaseModel):
    """Request to set a parameter, as a slider does."""
    value: float


class WhatIfRequest(BaseModel):
    """Request to run a what-if command."""
    command: str = Field(..., description="What-if command, e.g. 'moon gravity'")


class ChangeResponse(BaseModel):
    """Outcome of a parameter change."""
    applied: bool
    parameter_name: str | None = None
    original_value: float | None = None
    new_value: float | None = None
    rule: str | None = None
    parameters: dict[str, float]


class SessionResponse(BaseModel):
    """Simulation clock state."""
    elapsed_time: float
    playing: bool


# ----- Helpers -----

def _require_record(lab: PhysicsLab):
    try:
        return lab.require_record()
    except NoScenarioError as e:
        raise HTTPException(status_code=404, detail=str(e))


def _change_response(lab: PhysicsLab, change) -> ChangeResponse:
    parameters = lab.record.parameters.model_dump()
    if change is None:
        return ChangeResponse(applied=False, parameters=parameters)
    return ChangeResponse(
        applied=True,
        parameter_name=change.parameter_name,
        original_value=change.original_value,
        new_value=change.new_value,
        rule=change.rule,
        parameters=parameters,
    )


def _session(lab: PhysicsLab) -> SessionResponse:
    return SessionResponse(elapsed_time=lab.clock.elapsed_time, playing=lab.clock.playing)


# ----- Endpoints -----

@app.get("/")
async def root():
    """API root."""
    return {"name": "PhysAI Lab", "version": __version__}


@app.get("/samples")
async def list_samples() -> list[str]:
    """Sample problems for the picker."""
    return list(SAMPLE_PROBLEMS)


@app.post("/problems")
async def submit_problem(request: ProblemRequest) -> dict[str, Any]:
    """Parse a problem and make it the current scenario."""
    lab = get_lab()
    try:
        record = lab.submit_problem(request.text)
    except EmptyProblemError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return record.summary()


@app.get("/problems/current")
async def current_problem() -> dict[str, Any]:
    """The current scenario, with live calculations."""
    lab = get_lab()
    record = _require_record(lab)
    summary = record.summary()
    summary["live_calculations"] = [
        {"label": label, "value": value} for label, value in lab.live_calculations()
    ]
    summary["sliders"] = [
        {"name": s.name, "min": s.minimum, "max": s.maximum, "step": s.step}
        for s in lab.sliders()
    ]
    return summary


@app.put("/parameters/{name}", response_model=ChangeResponse)
async def set_parameter(name: str, request: ParameterRequest):
    """Set one parameter directly."""
    lab = get_lab()
    _require_record(lab)
    try:
        change = lab.set_parameter(name, request.value)
    except InvalidParameterError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return _change_response(lab, change)


@app.post("/what-if", response_model=ChangeResponse)
async def what_if(request: WhatIfRequest):
    """Run a what-if command; unmatched commands report applied=false."""
    lab = get_lab()
    _require_record(lab)
    return _change_response(lab, lab.apply_what_if(request.command))


@app.get("/simulation", response_model=SessionResponse)
async def simulation_state():
    return _session(get_lab())


@app.post("/simulation/toggle", response_model=SessionResponse)
async def toggle_play():
    """Play/pause."""
    lab = get_lab()
    lab.toggle_play()
    return _session(lab)


@app.post("/simulation/reset", response_model=SessionResponse)
async def reset_simulation():
    """Restart the animation at t = 0."""
    lab = get_lab()
    lab.reset()
    return _session(lab)


@app.post("/simulation/tick", response_model=SessionResponse)
async def tick(count: int = 1):
    """Advance the clock by ``count`` frame steps."""
    if count < 1:
        raise HTTPException(status_code=400, detail="count must be at least 1")
    lab = get_lab()
    for _ in range(count):
        lab.tick()
    return _session(lab)


@app.get("/frame.png")
async def frame_png():
    """The simulation frame at the current time, as PNG."""
    lab = get_lab()
    _require_record(lab)
    canvas = lab.new_canvas()
    lab.render_frame(canvas)
    return Response(content=canvas.to_png(), media_type="image/png")


@app.get("/graph.png")
async def graph_png():
    """The position-vs-time graph, as PNG."""
    lab = get_lab()
    _require_record(lab)
    canvas = lab.new_graph_canvas()
    lab.render_graph(canvas)
    return Response(content=canvas.to_png(), media_type="image/png")
