"""
Health analytics

Turns the raw metric rows of one user into the chart series shown on the
analytics page: one series per tracked metric, each with a display value for
the latest reading and the change across the selected window.
"""

import json
import logging
from datetime import datetime, timedelta
from enum import Enum
from typing import Any, Dict, List, Optional

from medikey.models.health_metric import HealthMetric
from medikey.utils.timezone import utcnow

logger = logging.getLogger(__name__)

LBS_TO_KG = 0.45359237
INCH_TO_M = 0.0254


class TimeRange(str, Enum):
    ONE_MONTH = "1m"
    THREE_MONTHS = "3m"
    SIX_MONTHS = "6m"
    ONE_YEAR = "1y"
    ALL = "all"


WINDOW_DAYS = {
    TimeRange.ONE_MONTH: 30,
    TimeRange.THREE_MONTHS: 90,
    TimeRange.SIX_MONTHS: 180,
    TimeRange.ONE_YEAR: 365,
}

# Response key -> stored metric_type
TRACKED_METRICS = {
    "blood_pressure": "blood_pressure",
    "blood_sugar": "blood_sugar",
    "weight": "weight",
    "heart_rate": "heart_rate",
}


def window_start(time_range: TimeRange, now: Optional[datetime] = None) -> Optional[datetime]:
    days = WINDOW_DAYS.get(time_range)
    if days is None:
        return None
    return (now or utcnow()) - timedelta(days=days)


def parse_scalar(value: str) -> Optional[float]:
    try:
        parsed = json.loads(value)
    except (TypeError, ValueError):
        parsed = value
    if isinstance(parsed, dict):
        parsed = parsed.get("value")
    try:
        return float(parsed)
    except (TypeError, ValueError):
        return None


def parse_blood_pressure(value: str) -> Optional[Dict[str, float]]:
    """Accepts {"systolic": .., "diastolic": ..} JSON text or "120/80"."""
    try:
        parsed = json.loads(value)
    except (TypeError, ValueError):
        parsed = None
    if isinstance(parsed, dict):
        try:
            return {"systolic": float(parsed["systolic"]), "diastolic": float(parsed["diastolic"])}
        except (KeyError, TypeError, ValueError):
            return None
    if isinstance(value, str) and "/" in value:
        systolic, _, diastolic = value.partition("/")
        try:
            return {"systolic": float(systolic), "diastolic": float(diastolic.split()[0])}
        except (ValueError, IndexError):
            return None
    return None


def _number(value: float) -> Any:
    return int(value) if float(value).is_integer() else round(value, 1)


def _format_reading(value: float, unit: Optional[str]) -> str:
    text = str(_number(value))
    return f"{text} {unit}" if unit else text


def weight_in_kg(value: float, unit: Optional[str]) -> float:
    if unit and unit.strip().lower() in ("lb", "lbs", "pound", "pounds"):
        return value * LBS_TO_KG
    return value


def height_in_m(value: float, unit: Optional[str]) -> Optional[float]:
    unit = (unit or "").strip().lower()
    if unit in ("cm", "centimeter", "centimeters"):
        meters = value / 100
    elif unit in ("in", "inch", "inches"):
        meters = value * INCH_TO_M
    elif unit in ("m", "meter", "meters"):
        meters = value
    else:
        # Unitless heights above 3 can only be centimeters
        meters = value / 100 if value > 3 else value
    return meters if meters > 0 else None


def calculate_bmi(weight: float, weight_unit: Optional[str], height_m: Optional[float]) -> Optional[float]:
    if not height_m:
        return None
    return round(weight_in_kg(weight, weight_unit) / (height_m * height_m), 1)


def _empty_series() -> Dict[str, Any]:
    return {"latest": None, "change": None, "data": []}


def _blood_pressure_series(rows: List[HealthMetric]) -> Dict[str, Any]:
    points = []
    for row in rows:
        reading = parse_blood_pressure(row.value)
        if reading is None:
            logger.debug(f"Skipping unparseable blood pressure value on metric {row.id}")
            continue
        points.append({
            "date": row.recorded_at.date().isoformat(),
            "systolic": _number(reading["systolic"]),
            "diastolic": _number(reading["diastolic"]),
        })
    if not points:
        return _empty_series()
    latest = points[-1]
    change = None
    if len(points) > 1:
        change = _number(latest["systolic"] - points[0]["systolic"])
    return {"latest": f"{latest['systolic']}/{latest['diastolic']}", "change": change, "data": points}


def _scalar_series(rows: List[HealthMetric], height_m: Optional[float] = None) -> Dict[str, Any]:
    points = []
    last_unit = None
    for row in rows:
        value = parse_scalar(row.value)
        if value is None:
            logger.debug(f"Skipping non-numeric value on metric {row.id}")
            continue
        point = {"date": row.recorded_at.date().isoformat(), "value": _number(value)}
        if height_m is not None:
            bmi = calculate_bmi(value, row.unit, height_m)
            if bmi is not None:
                point["bmi"] = bmi
        points.append(point)
        last_unit = row.unit
    if not points:
        return _empty_series()
    latest = points[-1]
    change = None
    if len(points) > 1:
        change = _number(latest["value"] - points[0]["value"])
    display = _format_reading(latest["value"], last_unit)
    if "bmi" in latest:
        display = f"{display} / {latest['bmi']}"
    return {"latest": display, "change": change, "data": points}


def build_analytics(
    rows: List[HealthMetric],
    time_range: TimeRange,
    height_metric: Optional[HealthMetric] = None,
) -> Dict[str, Any]:
    """
    `rows` must be the user's metrics inside the window, oldest first.
    `height_metric` is the latest height reading regardless of window.
    """
    by_type: Dict[str, List[HealthMetric]] = {}
    for row in rows:
        by_type.setdefault(row.metric_type, []).append(row)

    height_m = None
    if height_metric is not None:
        height_value = parse_scalar(height_metric.value)
        if height_value is not None:
            height_m = height_in_m(height_value, height_metric.unit)

    analytics: Dict[str, Any] = {"time_range": time_range.value}
    for key, metric_type in TRACKED_METRICS.items():
        series_rows = by_type.get(metric_type, [])
        if metric_type == "blood_pressure":
            analytics[key] = _blood_pressure_series(series_rows)
        elif metric_type == "weight":
            analytics[key] = _scalar_series(series_rows, height_m=height_m)
        else:
            analytics[key] = _scalar_series(series_rows)
    return analytics
