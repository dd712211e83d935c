from __future__ import annotations

from collections.abc import Sequence
from typing import Any

import numpy as np

from graphview.errors import InvalidArgumentError


try:
    import pandas as pd
except Exception:  # pragma: no cover - optional dependency
    pd = None  # type: ignore[assignment]

try:
    import torch
except Exception:  # pragma: no cover - optional dependency
    torch = None  # type: ignore[assignment]


def normalize_samples(samples: Any) -> tuple[np.ndarray, np.ndarray]:
    """Coerce a batch of (x, y) samples into two float64 arrays.

    Accepts a sequence of `Sample`/pairs, an (N, 2) numpy array or torch tensor,
    or a pandas DataFrame with `x`/`y` columns (or exactly two numeric columns).
    """
    if samples is None:
        raise InvalidArgumentError("samples are required (use an empty sequence for an empty series)")

    if pd is not None and isinstance(samples, pd.DataFrame):
        x_col, y_col = _resolve_frame_columns(samples)
        return _finish(
            _coerce_1d_numeric(samples[x_col], label="x"),
            _coerce_1d_numeric(samples[y_col], label="y"),
        )

    if torch is not None and isinstance(samples, torch.Tensor):
        tensor = samples.detach()
        if tensor.is_cuda:
            tensor = tensor.cpu()
        samples = tensor.to(torch.float64).numpy()

    if isinstance(samples, np.ndarray):
        if samples.size == 0:
            return _empty()
        if samples.ndim != 2 or samples.shape[1] != 2:
            raise InvalidArgumentError(f"sample array must have shape (N, 2), got {samples.shape}")
        return _finish(
            _coerce_ndarray(samples[:, 0], label="x"),
            _coerce_ndarray(samples[:, 1], label="y"),
        )

    if isinstance(samples, Sequence) and not isinstance(samples, (str, bytes, bytearray)):
        if len(samples) == 0:
            return _empty()
        xs = np.empty(len(samples), dtype=np.float64)
        ys = np.empty(len(samples), dtype=np.float64)
        for i, raw in enumerate(samples):
            xs[i], ys[i] = _coerce_pair(raw, index=i)
        return _finish(xs, ys)

    raise InvalidArgumentError(f"unsupported samples input type: {type(samples)!r}")


def normalize_xy(y: Any = None, *, x: Any = None, data: Any = None) -> tuple[np.ndarray, np.ndarray]:
    """Coerce separate x/y inputs; `x` defaults to the sample index."""
    y_values = _resolve_input(y, key="y", data=data)
    if y_values is None:
        raise InvalidArgumentError("y input is required")
    y_arr = _coerce_1d_numeric(y_values, label="y")

    if x is None:
        x_arr = np.arange(y_arr.size, dtype=np.float64)
    else:
        x_arr = _coerce_1d_numeric(_resolve_input(x, key="x", data=data), label="x")

    if x_arr.shape != y_arr.shape:
        raise InvalidArgumentError(f"x and y length mismatch: {x_arr.size} != {y_arr.size}")
    return _finish(x_arr, y_arr)


def _coerce_pair(raw: Any, *, index: int) -> tuple[float, float]:
    if hasattr(raw, "x") and hasattr(raw, "y"):
        pair = (raw.x, raw.y)
    elif isinstance(raw, Sequence) and not isinstance(raw, (str, bytes, bytearray)) and len(raw) == 2:
        pair = (raw[0], raw[1])
    else:
        raise InvalidArgumentError(f"sample at index {index} is not an (x, y) pair: {raw!r}")
    try:
        return float(pair[0]), float(pair[1])
    except (TypeError, ValueError) as exc:
        raise InvalidArgumentError(f"sample at index {index} is not numeric: {raw!r}") from exc


def _resolve_frame_columns(frame: Any) -> tuple[Any, Any]:
    if "x" in frame.columns and "y" in frame.columns:
        return "x", "y"
    numeric_cols = [c for c in frame.columns if _is_numeric_dtype(frame[c])]
    if len(numeric_cols) != 2:
        raise InvalidArgumentError("DataFrame input needs `x`/`y` columns or exactly two numeric columns")
    return numeric_cols[0], numeric_cols[1]


def _resolve_input(value: Any, key: str, data: Any) -> Any:
    if data is None:
        return value
    if pd is None:
        raise InvalidArgumentError("pandas is required when using `data=`")
    if not isinstance(data, pd.DataFrame):
        raise InvalidArgumentError("`data` must be a pandas DataFrame")
    if isinstance(value, str):
        if value not in data.columns:
            raise InvalidArgumentError(f"column not found: {value}")
        return data[value]
    if value is None and key in data.columns:
        return data[key]
    return value


def _is_numeric_dtype(series: Any) -> bool:
    if pd is None:
        return False
    try:
        return bool(pd.api.types.is_numeric_dtype(series))
    except Exception:
        return False


def _coerce_1d_numeric(value: Any, *, label: str) -> np.ndarray:
    if torch is not None and isinstance(value, torch.Tensor):
        tensor = value.detach()
        if tensor.ndim != 1:
            raise InvalidArgumentError(f"{label} must be 1-D")
        if tensor.is_cuda:
            tensor = tensor.cpu()
        return tensor.to(torch.float64).numpy()

    if pd is not None and isinstance(value, pd.Series):
        return _coerce_ndarray(value.to_numpy(), label=label)

    if isinstance(value, np.ndarray):
        if value.ndim != 1:
            raise InvalidArgumentError(f"{label} must be 1-D")
        return _coerce_ndarray(value, label=label)

    if isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray)):
        return _coerce_ndarray(np.asarray(value, dtype=object), label=label)

    raise InvalidArgumentError(f"unsupported {label} input type: {type(value)!r}")


def _coerce_ndarray(arr: np.ndarray, *, label: str) -> np.ndarray:
    if arr.dtype.kind in {"i", "u", "f", "b"}:
        return arr.astype(np.float64)

    out = np.empty(arr.shape[0], dtype=np.float64)
    for i, raw in enumerate(arr.tolist()):
        try:
            out[i] = float(raw)
        except (TypeError, ValueError) as exc:
            raise InvalidArgumentError(f"{label} contains non-numeric value at index {i}: {raw!r}") from exc
    return out


def _finish(x_arr: np.ndarray, y_arr: np.ndarray) -> tuple[np.ndarray, np.ndarray]:
    # NaN has no place in an x-ordered series and would poison the y extrema.
    if not (np.all(np.isfinite(x_arr)) and np.all(np.isfinite(y_arr))):
        raise InvalidArgumentError("samples must contain only finite values")
    return x_arr, y_arr


def _empty() -> tuple[np.ndarray, np.ndarray]:
    return np.empty(0, dtype=np.float64), np.empty(0, dtype=np.float64)
