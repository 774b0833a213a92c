from __future__ import annotations

"""
Exponential growth calculator.

Evaluates pure unbounded doubling from a fixed initial population at eight
fixed checkpoints and packages the values as chart points plus two display
milestones. Everything here is pure and framework-agnostic; the Streamlit
layer and the CLI both consume `calculate_growth` unchanged.

Usage:
    from src.growth_calculator import CalculationParams, calculate_growth
    result = calculate_growth(CalculationParams(doubling_time=20))
"""

from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP, localcontext
from enum import Enum
import math
from typing import Tuple


INITIAL_POPULATION = 2

# (minutes, literal label) in display order
CHECKPOINTS: Tuple[Tuple[int, str], ...] = (
    (30, "30 min"),
    (60, "1 tunti"),
    (180, "3 tuntia"),
    (360, "6 tuntia"),
    (720, "12 tuntia"),
    (1440, "1 vrk"),
    (2160, "1.5 vrk"),
    (2880, "2 vrk"),
)

DAY_UNIT = "vrk"
POPULATION_UNIT = "kpl"

INITIAL_POPULATION_LABEL = "Bakteereita alussa"
DOUBLING_TIME_LABEL = "Kaksinkertaistumisaika"


class IconKind(Enum):
    """Symbolic milestone icon, resolved to a glyph by the presentation layer."""
    BACTERIA = "bacteria"
    CLOCK = "clock"


@dataclass(frozen=True)
class CalculationParams:
    """Calculator input; `doubling_time` is in minutes and must be positive."""
    doubling_time: float


@dataclass(frozen=True)
class ChartPoint:
    time_minutes: int
    time_label: str
    population: float


@dataclass(frozen=True)
class Milestone:
    label: str
    value: str
    icon: IconKind


@dataclass(frozen=True)
class CalculationResult:
    """Complete output of one calculation.

    - chart_points: one entry per checkpoint, ascending time
    - milestones: initial population first, doubling time second
    """
    chart_points: Tuple[ChartPoint, ...]
    milestones: Tuple[Milestone, ...]


def _to_fixed(value: float, decimals: int) -> str:
    # Round half away from zero on the exact binary value of the float
    if not math.isfinite(value):
        return str(value)
    quantum = Decimal(1).scaleb(-decimals)
    with localcontext() as ctx:
        ctx.prec = 400
        return str(Decimal(value).quantize(quantum, rounding=ROUND_HALF_UP))


def format_time(minutes: float) -> str:
    """Render a duration in minutes as minutes, hours or days.

    Under an hour: whole minutes (`"45 min"`). Under a day: hours with one
    decimal (`"1.5 h"`). Otherwise days with one decimal (`"2.0 vrk"`).
    Checkpoint labels do not use this; they are the literals in CHECKPOINTS.
    """
    if minutes < 60:
        return f"{_to_fixed(minutes, 0)} min"
    hours = minutes / 60
    if hours < 24:
        return f"{_to_fixed(hours, 1)} h"
    days = hours / 24
    return f"{_to_fixed(days, 1)} {DAY_UNIT}"


def format_population(value: float) -> str:
    """Two-decimal exponent notation with the count unit, e.g. `9.44e+21 kpl`."""
    if math.isinf(value):
        return f"∞ {POPULATION_UNIT}"
    return f"{value:.2e} {POPULATION_UNIT}"


def format_milestone_count(value: int) -> str:
    """Integer with Finnish digit grouping (non-breaking space separator)."""
    return f"{value:,}".replace(",", "\u00a0")


def _format_doubling_time(doubling_time: float, as_float: float) -> str:
    if math.isinf(as_float):
        return "∞ min"
    if isinstance(doubling_time, int):
        return f"{doubling_time} min"
    if float(doubling_time).is_integer():
        return f"{int(doubling_time)} min"
    return f"{doubling_time:g} min"


def population_at(minutes: float, doubling_time: float) -> float:
    """Population after `minutes` of unbounded doubling from INITIAL_POPULATION.

    Very small doubling times overflow to `inf` at the later checkpoints;
    that is returned as-is rather than raised.
    """
    doublings = minutes / doubling_time
    try:
        return INITIAL_POPULATION * math.pow(2.0, doublings)
    except OverflowError:
        return math.inf


def calculate_growth(params: CalculationParams) -> CalculationResult:
    """Compute chart points and milestones for one doubling time.

    An infinite doubling time means no doublings: every checkpoint stays at
    INITIAL_POPULATION.
    """
    try:
        doubling_time = float(params.doubling_time)
    except OverflowError:
        doubling_time = math.inf
    if math.isnan(doubling_time) or doubling_time <= 0:
        raise ValueError(f"doubling_time must be a positive number, got {params.doubling_time!r}")

    chart_points = tuple(
        ChartPoint(
            time_minutes=minutes,
            time_label=label,
            population=population_at(minutes, doubling_time),
        )
        for minutes, label in CHECKPOINTS
    )

    milestones = (
        Milestone(
            label=INITIAL_POPULATION_LABEL,
            value=format_milestone_count(INITIAL_POPULATION),
            icon=IconKind.BACTERIA,
        ),
        Milestone(
            label=DOUBLING_TIME_LABEL,
            value=_format_doubling_time(params.doubling_time, doubling_time),
            icon=IconKind.CLOCK,
        ),
    )
    return CalculationResult(chart_points=chart_points, milestones=milestones)


__all__ = [
    "INITIAL_POPULATION",
    "CHECKPOINTS",
    "IconKind",
    "CalculationParams",
    "ChartPoint",
    "Milestone",
    "CalculationResult",
    "format_time",
    "format_population",
    "format_milestone_count",
    "population_at",
    "calculate_growth",
]
