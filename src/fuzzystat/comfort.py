from __future__ import annotations
from dataclasses import dataclass

IDEAL_LOW_PCT = 40.0
IDEAL_HIGH_PCT = 60.0
ADJUST_PER_PCT_C = 0.05
IDEAL_REASONING = "Humidity is in the ideal range (40-60%). No perceived temperature adjustment."

@dataclass(frozen=True)
class Perceived:
    perceived_c: float
    reasoning: str

def fmt_num(v: float) -> str:
    # 45.0 -> "45", 47.5 -> "47.5", 12.3456789 unchanged
    return str(int(v)) if float(v).is_integer() else repr(float(v))

def perceived_temperature(temp_c: float, humidity: float) -> Perceived:
    """
    Humidity-adjusted "feels like" temperature. Humid air feels warmer, so the
    effective reading drops; dry air feels cooler, so it rises.
    """
    if humidity > IDEAL_HIGH_PCT:
        adj = (humidity - IDEAL_HIGH_PCT) * ADJUST_PER_PCT_C
        return Perceived(temp_c - adj, f"Feels {adj:.1f}°C warmer due to high humidity ({fmt_num(humidity)}%)")
    if humidity < IDEAL_LOW_PCT:
        adj = (IDEAL_LOW_PCT - humidity) * ADJUST_PER_PCT_C
        return Perceived(temp_c + adj, f"Feels {adj:.1f}°C cooler due to low humidity ({fmt_num(humidity)}%)")
    return Perceived(temp_c, IDEAL_REASONING)
