from __future__ import annotations

from collections.abc import Sequence
from typing import Any

import numpy as np

from chartaxis.errors import AxisConfigError


try:
    import torch
except Exception:  # pragma: no cover - optional dependency
    torch = None  # type: ignore[assignment]


def coerce_entries(value: Any, *, label: str = "entries") -> np.ndarray:
    """Coerce axis entries to a 1-D float64 array, keeping insertion order.

    Accepts python sequences, numpy arrays and (when installed) torch tensors.
    `None` yields an empty array.
    """
    if value is None:
        return np.asarray([], dtype=np.float64)

    if torch is not None and isinstance(value, torch.Tensor):
        tensor = value.detach()
        if tensor.ndim != 1:
            raise AxisConfigError(f"{label} must be 1-D")
        if tensor.is_cuda:
            tensor = tensor.cpu()
        return tensor.to(torch.float64).numpy()

    if isinstance(value, np.ndarray):
        if value.ndim != 1:
            raise AxisConfigError(f"{label} must be 1-D")
        return _coerce_ndarray(value, label=label)

    if isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray)):
        return _coerce_ndarray(np.asarray(list(value), dtype=object), label=label)

    raise AxisConfigError(f"unsupported {label} input type: {type(value)!r}")


def _coerce_ndarray(arr: np.ndarray, *, label: str) -> np.ndarray:
    if arr.ndim != 1:
        raise AxisConfigError(f"{label} must be 1-D")
    if arr.dtype.kind in {"i", "u", "f", "b"}:
        return arr.astype(np.float64, copy=False)

    out = np.empty(arr.shape[0], dtype=np.float64)
    for i, raw in enumerate(arr.tolist()):
        try:
            out[i] = np.nan if raw is None else float(raw)
        except (TypeError, ValueError) as exc:
            raise AxisConfigError(f"{label} contains non-numeric value at index {i}: {raw!r}") from exc
    return out
