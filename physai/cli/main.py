"""Main CLI entry point for PhysAI Lab."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional

import structlog
import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.table import Table

from physai.config import LabConfig
from physai.errors import PhysAIError
from physai.lab import PhysicsLab
from physai.models.scenario import ScenarioRecord

app = typer.Typer(
    name="physai",
    help="PhysAI Lab - Turn physics word problems into live simulations",
    add_completion=False,
)
console = Console()


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging"),
):
    """Load .env settings and set the log level."""
    load_dotenv()
    level = logging.DEBUG if verbose else logging.WARNING
    structlog.configure(wrapper_class=structlog.make_filtering_bound_logger(level))


def _make_lab(problem: str) -> tuple[PhysicsLab, ScenarioRecord]:
    lab = PhysicsLab(config=LabConfig.from_env())
    try:
        record = lab.submit_problem(problem)
    except PhysAIError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)
    return lab, record


def _apply_changes(lab: PhysicsLab, assignments: List[str], commands: List[str]) -> None:
    """Apply --set name=value pairs, then --what-if commands, in order."""
    for assignment in assignments:
        name, _, value = assignment.partition("=")
        try:
            lab.set_parameter(name.strip(), float(value))
        except (PhysAIError, ValueError) as e:
            console.print(f"[red]Error: {e}[/red]")
            raise typer.Exit(1)

    for command in commands:
        change = lab.apply_what_if(command)
        if change is None:
            console.print(f"[dim]No what-if rule matched: {command}[/dim]")
        else:
            console.print(f"[yellow]What-if:[/yellow] {change.describe()}")


def _display_record(lab: PhysicsLab, record: ScenarioRecord) -> None:
    """Show the parsed problem, its explanation and the live readout."""
    console.print(Panel.fit(
        f"[bold blue]{record.scenario_type.value.title()}[/bold blue]\n"
        f"{record.problem_text}",
        title="Problem",
        border_style="blue",
    ))

    table = Table(show_header=False, box=None)
    table.add_column("Parameter", style="cyan")
    table.add_column("Value")

    params = record.parameters
    table.add_row("Velocity", f"{params.velocity:g} m/s")
    table.add_row("Angle", f"{params.angle:g}°")
    table.add_row("Height", f"{params.height:g} m")
    table.add_row("Gravity", f"{params.gravity:g} m/s²")
    console.print(table)

    explanation = record.explanation
    console.print(f"\n[bold]{explanation.title}[/bold]\n")
    for i, step in enumerate(explanation.steps, 1):
        console.print(f"  {i}. {step}")
    console.print(Panel(explanation.equation, border_style="cyan"))

    console.print("\n[bold]Live Calculations[/bold]")
    for label, value in lab.live_calculations():
        console.print(f"  {label} = {value}")


@app.command()
def solve(
    problem: str = typer.Argument(..., help="Physics word problem"),
    set_: List[str] = typer.Option([], "--set", "-s", help="Parameter override, e.g. gravity=3.7"),
    what_if: List[str] = typer.Option([], "--what-if", "-w", help="What-if command"),
):
    """
    Parse a problem and show its scenario, parameters and explanation.

    Example:
        physai solve "A projectile is launched at 45 degrees with 30 m/s"
    """
    lab, record = _make_lab(problem)
    _apply_changes(lab, set_, what_if)
    _display_record(lab, record)


@app.command()
def samples():
    """List the sample problems."""
    from physai.samples import SAMPLE_PROBLEMS

    table = Table(title="Sample Problems")
    table.add_column("#", style="cyan")
    table.add_column("Problem")
    table.add_column("Scenario", style="green")

    lab = PhysicsLab()
    for i, problem in enumerate(SAMPLE_PROBLEMS, 1):
        table.add_row(str(i), problem, lab.parser.classify(problem).value)

    console.print(table)


@app.command()
def render(
    problem: str = typer.Argument(..., help="Physics word problem"),
    output: Path = typer.Option(Path("frame.png"), "--output", "-o", help="Frame image file"),
    time: float = typer.Option(1.0, "--time", "-t", min=0.0, help="Elapsed time to render (s)"),
    graph: Optional[Path] = typer.Option(None, "--graph", "-g", help="Also write the graph image"),
    set_: List[str] = typer.Option([], "--set", "-s", help="Parameter override, e.g. angle=60"),
    what_if: List[str] = typer.Option([], "--what-if", "-w", help="What-if command"),
):
    """Render a single simulation frame (and optionally the graph) to images."""
    from physai.rendering.frames import render_frame

    lab, record = _make_lab(problem)
    _apply_changes(lab, set_, what_if)

    canvas = lab.new_canvas()
    render_frame(canvas, record.scenario_type, record.parameters, time)
    canvas.save(output)
    console.print(f"[green]Frame saved to {output}[/green]")

    if graph:
        graph_canvas = lab.new_graph_canvas()
        lab.render_graph(graph_canvas)
        graph_canvas.save(graph)
        console.print(f"[green]Graph saved to {graph}[/green]")


@app.command()
def animate(
    problem: str = typer.Argument(..., help="Physics word problem"),
    output: Path = typer.Option(Path("simulation.mp4"), "--output", "-o", help="Video file"),
    seconds: float = typer.Option(5.0, "--seconds", min=0.1, help="Simulated duration (s)"),
    set_: List[str] = typer.Option([], "--set", "-s", help="Parameter override"),
    what_if: List[str] = typer.Option([], "--what-if", "-w", help="What-if command"),
):
    """Render a simulation clip to a video file."""
    import cv2

    lab, _ = _make_lab(problem)
    _apply_changes(lab, set_, what_if)

    fps = lab.config.video_fps
    frame_count = int(round(seconds / lab.config.frame_step))
    canvas = lab.new_canvas()

    output.parent.mkdir(parents=True, exist_ok=True)
    writer = cv2.VideoWriter(
        str(output),
        cv2.VideoWriter_fourcc(*"mp4v"),
        fps,
        (canvas.width, canvas.height),
    )
    if not writer.isOpened():
        console.print(f"[red]Error: could not open video writer for {output}[/red]")
        raise typer.Exit(1)

    def write_frame(scenario_type, parameters, state, t):
        lab.render_frame(canvas)
        writer.write(canvas.image)

    loop = lab.create_loop(write_frame)
    try:
        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            console=console,
        ) as progress:
            task = progress.add_task(f"Rendering {frame_count} frames...", total=None)
            loop.run_ticks(frame_count)
            progress.update(task, description="Rendering complete!")
    finally:
        loop.close()
        writer.release()

    console.print(f"[green]Video saved to {output}[/green]")


@app.command("what-if")
def what_if_command(
    problem: str = typer.Argument(..., help="Physics word problem"),
    command: str = typer.Argument(..., help="What-if command, e.g. 'moon gravity'"),
):
    """
    Show how a what-if command changes a problem's parameters.

    Example:
        physai what-if "A ball thrown at 20 m/s" "double the velocity"
    """
    lab, record = _make_lab(problem)
    before = record.parameters.model_dump()

    change = lab.apply_what_if(command)
    if change is None:
        console.print("[dim]No rule matched; parameters unchanged.[/dim]")
        return

    table = Table(title=f"What if: {command}")
    table.add_column("Parameter", style="cyan")
    table.add_column("Before")
    table.add_column("After", style="green")

    after = record.parameters.model_dump()
    for name in ("velocity", "angle", "height", "gravity"):
        table.add_row(name, f"{before[name]:g}", f"{after[name]:g}")

    console.print(table)


@app.command()
def serve(
    host: str = typer.Option("127.0.0.1", "--host", "-h"),
    port: int = typer.Option(8000, "--port", "-p"),
    reload: bool = typer.Option(False, "--reload", "-r"),
):
    """
    Start the API server.
    """
    import uvicorn

    console.print(f"[green]Starting server at http://{host}:{port}[/green]")

    uvicorn.run(
        "physai.api.app:app",
        host=host,
        port=port,
        reload=reload,
    )


@app.command()
def version():
    """Show version information."""
    from physai import __version__

    console.print(f"PhysAI Lab v{__version__}")


if __name__ == "__main__":
    app()
