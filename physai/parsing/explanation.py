"""
Explanations for parsed problems.

An explanation is generated once, from the parameters as originally
parsed, and is never refreshed afterwards. ``live_calculations`` is the
separate readout that follows the current parameters.
"""

from __future__ import annotations

import math

from physai.models.scenario import Explanation, Parameters, ScenarioType

_QUALITATIVE = {
    ScenarioType.PENDULUM: Explanation(
        title="Simple Harmonic Motion",
        steps=(
            "Period depends on length and gravity",
            "Angular displacement varies sinusoidally",
            "Energy converts between kinetic and potential",
        ),
        equation="T = 2π√(L/g)",
    ),
    ScenarioType.OPTICS: Explanation(
        title="Ray Optics Analysis",
        steps=(
            "Light travels in straight lines",
            "Reflection: angle of incidence = angle of reflection",
            "Refraction follows Snell's law",
        ),
        equation="n₁sin(θ₁) = n₂sin(θ₂)",
    ),
    ScenarioType.MAGNETIC: Explanation(
        title="Magnetic Field Visualization",
        steps=(
            "Field lines emerge from North pole",
            "Field lines enter South pole",
            "Field strength decreases with distance",
        ),
        equation="F = qvB·sin(θ)",
    ),
}


def projectile_quantities(parameters: Parameters) -> dict[str, float]:
    """Velocity components, peak height, flight time and range."""
    theta = math.radians(parameters.angle)
    v = parameters.velocity
    g = parameters.gravity

    vx = v * math.cos(theta)
    vy = v * math.sin(theta)

    return {
        "vx": vx,
        "vy": vy,
        "max_height": vy**2 / (2 * g),
        "flight_time": 2 * vy / g,
        "range": v**2 * math.sin(2 * theta) / g,
    }


def vertical_quantities(parameters: Parameters) -> dict[str, float]:
    """Peak height and time to reach it for a straight-up launch."""
    v = parameters.velocity
    g = parameters.gravity
    return {
        "max_height": v**2 / (2 * g),
        "time_to_peak": v / g,
    }


def generate_explanation(scenario_type: ScenarioType, parameters: Parameters) -> Explanation:
    """
    Build the narrative for a freshly parsed problem.

    Args:
        scenario_type: Classified scenario
        parameters: Parameters at parse time

    Returns:
        Frozen Explanation with steps, equation and derived quantities
    """
    if scenario_type == ScenarioType.PROJECTILE:
        q = projectile_quantities(parameters)
        return Explanation(
            title="Projectile Motion Analysis",
            steps=(
                f"Initial velocity: {parameters.velocity:g} m/s at {parameters.angle:g}° angle",
                f"Horizontal component: {q['vx']:.2f} m/s",
                f"Vertical component: {q['vy']:.2f} m/s",
                f"Maximum height: {q['max_height']:.2f} m",
                f"Time of flight: {q['flight_time']:.2f} s",
                f"Range: {q['range']:.2f} m",
            ),
            equation="y = x·tan(θ) - (g·x²)/(2·v²·cos²(θ))",
            quantities=q,
        )

    if scenario_type == ScenarioType.VERTICAL:
        q = vertical_quantities(parameters)
        return Explanation(
            title="Vertical Motion Analysis",
            steps=(
                f"Initial velocity: {parameters.velocity:g} m/s",
                f"Acceleration: -{parameters.gravity:g} m/s²",
                f"Maximum height: {q['max_height']:.2f} m",
                f"Time to peak: {q['time_to_peak']:.2f} s",
            ),
            equation="v² = u² + 2as",
            quantities=q,
        )

    # Each record gets its own copy of the shared template
    return _QUALITATIVE[scenario_type].model_copy(deep=True)


def live_calculations(scenario_type: ScenarioType, parameters: Parameters) -> list[tuple[str, str]]:
    """Readout recomputed from the current parameters."""
    rows = [("v₀", f"{parameters.velocity:.2f} m/s")]

    if scenario_type == ScenarioType.PROJECTILE:
        q = projectile_quantities(parameters)
        rows.extend([
            ("vₓ", f"{q['vx']:.2f} m/s"),
            ("vᵧ", f"{q['vy']:.2f} m/s"),
            ("Range", f"{q['range']:.2f} m"),
        ])

    rows.append(("g", f"{parameters.gravity:.2f} m/s²"))
    return rows
