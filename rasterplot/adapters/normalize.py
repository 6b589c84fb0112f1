from __future__ import annotations

from collections.abc import Sequence
from typing import Any

import numpy as np

from rasterplot.errors import MismatchedSeriesLengthError, PlotDataError
from rasterplot.series import SeriesData


try:
    import pandas as pd
except Exception:  # pragma: no cover - optional dependency
    pd = None  # type: ignore[assignment]

try:
    import torch
except Exception:  # pragma: no cover - optional dependency
    torch = None  # type: ignore[assignment]


def normalize_xy(
    y: Any = None,
    *,
    x: Any = None,
    data: Any = None,
    source_name: str | None = None,
) -> SeriesData:
    """Coerce user input into float64 ``x``/``y`` arrays plus a finite mask.

    ``y`` and ``x`` may be sequences, numpy arrays, torch tensors or pandas
    Series. With ``data=`` (a DataFrame) they may also be column names.
    When ``x`` is omitted it is synthesized as ``0..len(y)-1``.
    """
    y_raw = _lookup_column(y, data=data, label="y")
    if y_raw is None:
        raise PlotDataError("y input is required")
    y_arr = _as_float_vector(y_raw, label="y")
    if y_arr.size == 0:
        raise PlotDataError("empty series")

    if x is None:
        x_arr = np.arange(y_arr.size, dtype=np.float64)
    else:
        x_arr = _as_float_vector(_lookup_column(x, data=data, label="x"), label="x")
        if x_arr.size != y_arr.size:
            raise MismatchedSeriesLengthError(f"x and y length mismatch: {x_arr.size} != {y_arr.size}")

    mask = np.isfinite(x_arr) & np.isfinite(y_arr)
    if not np.any(mask):
        raise PlotDataError("series contains no finite points")
    return SeriesData(x=x_arr, y=y_arr, mask=mask, source_name=source_name)


def _lookup_column(value: Any, *, data: Any, label: str) -> Any:
    if data is None:
        return value
    if pd is None:
        raise PlotDataError("pandas is required when using `data=`")
    if not isinstance(data, pd.DataFrame):
        raise PlotDataError("`data` must be a pandas DataFrame")
    if isinstance(value, str):
        if value not in data.columns:
            raise PlotDataError(f"column not found: {value}")
        return data[value]
    if value is None and label == "y":
        numeric = [c for c in data.columns if pd.api.types.is_numeric_dtype(data[c])]
        if len(numeric) != 1:
            raise PlotDataError("when y is omitted, data must have exactly one numeric column")
        return data[numeric[0]]
    return value


def _as_float_vector(value: Any, *, label: str) -> np.ndarray:
    if torch is not None and isinstance(value, torch.Tensor):
        tensor = value.detach().cpu()
        if tensor.ndim != 1:
            raise PlotDataError(f"{label} must be 1-D")
        return tensor.to(torch.float64).numpy().copy()

    if pd is not None and isinstance(value, pd.Series):
        value = value.to_numpy()

    if isinstance(value, np.ndarray):
        arr = value
    elif isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray)):
        arr = np.asarray(value, dtype=object)
    else:
        raise PlotDataError(f"unsupported {label} input type: {type(value)!r}")

    if arr.ndim != 1:
        raise PlotDataError(f"{label} must be 1-D")
    if arr.dtype.kind in {"i", "u", "f", "b"}:
        return np.array(arr, dtype=np.float64, copy=True)
    return _convert_objects(arr, label=label)


def _convert_objects(arr: np.ndarray, *, label: str) -> np.ndarray:
    out = np.empty(arr.shape[0], dtype=np.float64)
    for i, raw in enumerate(arr.tolist()):
        if raw is None:
            out[i] = np.nan
        else:
            try:
                out[i] = float(raw)
            except (TypeError, ValueError) as exc:
                raise PlotDataError(f"{label} contains non-numeric value at index {i}: {raw!r}") from exc
    return out
