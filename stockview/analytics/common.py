"""
JSON helpers shared by the API, CLI, and exports.
"""
from __future__ import annotations

import math

import numpy as np
import pandas as pd


def is_nan(value) -> bool:
    return isinstance(value, float) and math.isnan(value)


def sanitize_for_json(obj):
    """Recursively convert numpy/pandas types to native Python for JSON.

    NaN and infinities become ``None`` so a poisoned total shows up as null
    rather than as a misleading zero.
    """
    if isinstance(obj, dict):
        clean = {}
        for k, v in obj.items():
            if k is None or is_nan(k):
                continue
            clean[k if isinstance(k, str) else str(k)] = sanitize_for_json(v)
        return clean
    if isinstance(obj, (list, tuple)):
        return [sanitize_for_json(v) for v in obj]
    if isinstance(obj, np.integer):
        return int(obj)
    if isinstance(obj, np.floating):
        obj = float(obj)
    if isinstance(obj, np.bool_):
        return bool(obj)
    if isinstance(obj, np.ndarray):
        return sanitize_for_json(obj.tolist())
    if isinstance(obj, float):
        return None if (math.isnan(obj) or math.isinf(obj)) else obj
    if pd.api.types.is_scalar(obj) and pd.isna(obj):
        return None
    return obj


def fmt_value(value: float, decimals: int = 2) -> str:
    """Fixed-point display string; NaN shows as 'NaN'."""
    if is_nan(value):
        return "NaN"
    return f"{value:,.{decimals}f}"
