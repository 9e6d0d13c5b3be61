from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import Literal
from fuzzystat.comfort import fmt_num, perceived_temperature

DEADBAND_C = 0.5
OUTPUT_GAIN = 25.0  # %/°C past the deadband; 4 °C beyond it saturates at 100

Mode = Literal["idle", "heating", "cooling"]

log = logging.getLogger(__name__)

@dataclass(frozen=True)
class ControlOutput:
    mode: Mode
    heating_output: float
    cooling_output: float
    reasoning: str

@dataclass(frozen=True)
class Decision:
    temp_c: float
    humidity: float
    target_c: float
    perceived_c: float
    diff_c: float
    humidity_reasoning: str
    output: ControlOutput

    @property
    def heating_output(self) -> float: return self.output.heating_output
    @property
    def cooling_output(self) -> float: return self.output.cooling_output
    @property
    def reasoning(self) -> str: return self.output.reasoning

def _clamp(v: float, lo: float = 0.0, hi: float = 100.0) -> float:
    return min(hi, max(lo, v))

def control_output(perceived_c: float, target_c: float, deadband: float = DEADBAND_C) -> ControlOutput:
    diff = target_c - perceived_c
    if diff > deadband:
        return ControlOutput("heating", _clamp((diff - deadband) * OUTPUT_GAIN), 0.0,
            f"Heating: Effective temperature {perceived_c:.1f}°C is below the target of {target_c:.1f}°C "
            f"by more than the {fmt_num(deadband)}°C deadband.")
    if diff < -deadband:
        return ControlOutput("cooling", 0.0, _clamp((abs(diff) - deadband) * OUTPUT_GAIN),
            f"Cooling: Effective temperature {perceived_c:.1f}°C is above the target of {target_c:.1f}°C "
            f"by more than the {fmt_num(deadband)}°C deadband.")
    return ControlOutput("idle", 0.0, 0.0,
        f"Idle: Effective temperature {perceived_c:.1f}°C is within ±{fmt_num(deadband)}°C of the target {target_c:.1f}°C.")

def decide(temp_c: float, humidity: float, target_c: float, deadband: float = DEADBAND_C) -> Decision:
    """Run sensed readings through the comfort model and the deadband policy as one result."""
    p = perceived_temperature(temp_c, humidity)
    out = control_output(p.perceived_c, target_c, deadband)
    log.debug("temp=%.2f hum=%s target=%.2f perceived=%.2f -> %s heat=%.1f cool=%.1f",
              temp_c, humidity, target_c, p.perceived_c, out.mode, out.heating_output, out.cooling_output)
    return Decision(temp_c=temp_c, humidity=humidity, target_c=target_c, perceived_c=p.perceived_c,
                    diff_c=target_c - p.perceived_c, humidity_reasoning=p.reasoning, output=out)
