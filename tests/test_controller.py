import itertools
import pytest
from fuzzystat.controller import DEADBAND_C, control_output, decide

def test_heating_scales_past_deadband():
    out = control_output(perceived_c=17.5, target_c=20.0)
    assert out.mode == "heating"
    assert out.heating_output == pytest.approx(50.0)
    assert out.cooling_output == 0
    assert out.reasoning == ("Heating: Effective temperature 17.5°C is below the target of 20.0°C "
                             "by more than the 0.5°C deadband.")

def test_heating_saturates_at_100():
    out = control_output(perceived_c=15.0, target_c=20.0)
    assert out.heating_output == 100.0

def test_cooling_is_symmetric():
    out = control_output(perceived_c=23.0, target_c=20.0)
    assert out.mode == "cooling"
    assert out.cooling_output == pytest.approx(62.5)
    assert out.heating_output == 0
    assert out.reasoning.startswith("Cooling: Effective temperature 23.0°C is above the target of 20.0°C")

def test_inside_deadband_is_idle():
    out = control_output(perceived_c=19.7, target_c=20.0)
    assert (out.mode, out.heating_output, out.cooling_output) == ("idle", 0, 0)
    assert out.reasoning == "Idle: Effective temperature 19.7°C is within ±0.5°C of the target 20.0°C."

def test_deadband_edges_are_idle():
    assert control_output(19.5, 20.0).mode == "idle"
    assert control_output(20.5, 20.0).mode == "idle"

def test_outputs_never_both_on():
    temps = [x / 2 for x in range(20, 70)]
    for p, t in itertools.product(temps, [15.0, 20.0, 25.5]):
        out = control_output(p, t, DEADBAND_C)
        assert not (out.heating_output and out.cooling_output)
        assert 0 <= out.heating_output <= 100 and 0 <= out.cooling_output <= 100

def test_decide_returns_consistent_record():
    d = decide(temp_c=22.0, humidity=70, target_c=20.0)
    assert d.perceived_c == pytest.approx(21.5)
    assert d.diff_c == pytest.approx(-1.5)
    assert d.humidity_reasoning.startswith("Feels 0.5°C warmer")
    assert d.output.mode == "cooling"
    assert d.cooling_output == pytest.approx(25.0)
    assert d.reasoning == d.output.reasoning
