from __future__ import annotations

from decimal import Decimal, InvalidOperation

import numpy as np


def generate_axis_ticks(
    vmin: float,
    vmax: float,
    label_count: int,
    *,
    granularity: float | None = None,
    force_label_count: bool = False,
) -> np.ndarray:
    """Nice tick values covering `[vmin, vmax]`, trimmed to the range."""
    if label_count <= 0:
        raise ValueError("label_count must be > 0")
    if not (np.isfinite(vmin) and np.isfinite(vmax)):
        return np.asarray([], dtype=np.float64)
    if vmin > vmax:
        vmin, vmax = vmax, vmin
    if vmin == vmax:
        return np.asarray([vmin], dtype=np.float64)

    if force_label_count:
        if label_count == 1:
            return np.asarray([vmin], dtype=np.float64)
        return np.linspace(vmin, vmax, label_count, dtype=np.float64)

    step = interval_for_range(vmin, vmax, label_count, granularity=granularity)
    tick_min = np.ceil(vmin / step) * step
    tick_max = np.floor(vmax / step) * step
    if tick_max < tick_min:
        return np.asarray([], dtype=np.float64)

    ticks = np.arange(tick_min, tick_max + 0.5 * step, step, dtype=np.float64)
    # Normalize floating-point drift so values like -4.44e-16 become 0.
    ticks = np.rint(ticks / step) * step
    ticks[np.isclose(ticks, 0.0, rtol=0.0, atol=step * 1e-9)] = 0.0
    return ticks


def interval_for_range(vmin: float, vmax: float, label_count: int, *, granularity: float | None = None) -> float:
    span = abs(vmax - vmin)
    if span == 0 or not np.isfinite(span):
        return 1.0
    raw = span / max(label_count, 1)
    step = _nice_number(raw)
    if granularity is not None and np.isfinite(granularity) and granularity > 0 and step < granularity:
        step = float(granularity)
    return step


def centered_entries(ticks: np.ndarray) -> np.ndarray:
    """Tick midpoints: each entry shifted by half the tick interval."""
    if ticks.size < 2:
        return ticks.astype(np.float64, copy=True)
    offset = float(abs(ticks[1] - ticks[0])) / 2.0
    return ticks.astype(np.float64, copy=False) + offset


def format_tick(value: float, *, step: float | None = None) -> str:
    """Fixed-point label for a tick value, with as many decimals as `step` needs."""
    if not np.isfinite(value):
        return str(value)
    if step is not None and np.isfinite(step) and step > 0 and abs(value) <= step * 1e-9:
        value = 0.0
    magnitude = abs(value)
    if magnitude != 0 and (magnitude >= 1e6 or magnitude < 1e-6 or (step is not None and abs(step) < 1e-4)):
        return f"{value:.4e}"

    decimals = 6 if step is None else _decimals_from_step(step)
    exact = Decimal(str(value))
    try:
        text = format(exact.quantize(Decimal(1).scaleb(-decimals)), "f")
    except InvalidOperation:
        text = format(exact, "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return "0" if text == "-0" else text


def _nice_number(value: float) -> float:
    exp = np.floor(np.log10(value))
    frac = value / (10**exp)

    if frac < 1.5:
        nice_frac = 1.0
    elif frac < 3.0:
        nice_frac = 2.0
    elif frac < 7.0:
        nice_frac = 5.0
    else:
        nice_frac = 10.0

    return float(nice_frac * (10**exp))


def _decimals_from_step(step: float) -> int:
    if step <= 0 or not np.isfinite(step):
        return 6
    exponent = int(Decimal(str(step)).normalize().as_tuple().exponent)
    return min(12, max(0, -exponent))
