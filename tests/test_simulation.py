import pytest
from fuzzystat.simulation import SimulationStepper, step_toward

class Box:
    def __init__(self, current, target):
        self.current = current; self.target = target; self.writes = 0
    def write(self, v):
        self.current = v; self.writes += 1

def make(loop, current, target, **kw):
    box = Box(current, target)
    st = SimulationStepper(loop, read=lambda: box.current, write=box.write, target=lambda: box.target, **kw)
    return box, st

def test_step_toward():
    assert step_toward(20.0, 22.0) == (20.1, False)
    assert step_toward(20.0, 18.0) == (19.9, False)
    assert step_toward(21.95, 22.0) == (22.0, True)
    assert step_toward(21.9, 22.0) == (22.0, True)

def test_converges_in_twenty_ticks(loop):
    box, st = make(loop, 20.0, 22.0)
    assert st.start()
    loop.advance(500 * 19)
    assert st.running and box.current == pytest.approx(21.9)
    loop.advance(500)
    assert box.current == 22.0
    assert st.state == "idle" and st.ticks == 20
    assert loop.pending == 0
    loop.advance(5000)
    assert box.writes == 20

def test_no_tick_before_interval(loop):
    box, st = make(loop, 20.0, 22.0)
    st.start()
    loop.advance(499)
    assert box.current == 20.0

def test_stop_leaves_last_value(loop):
    box, st = make(loop, 20.0, 22.0)
    st.start()
    loop.advance(500 * 5)
    assert st.stop()
    loop.advance(10_000)
    assert box.current == pytest.approx(20.5)
    assert box.writes == 5
    assert loop.pending == 0

def test_target_is_read_live(loop):
    box, st = make(loop, 20.0, 22.0)
    st.start()
    loop.advance(1500)
    assert box.current == pytest.approx(20.3)
    box.target = 20.0
    loop.advance(1500)
    assert box.current == 20.0
    assert not st.running

def test_start_twice_is_noop(loop):
    box, st = make(loop, 20.0, 22.0)
    assert st.start()
    assert not st.start()
    assert loop.pending == 1

def test_converged_callback(loop):
    done = []
    box, st = make(loop, 20.0, 20.3, on_converged=lambda: done.append(box.current))
    st.start()
    loop.advance(5000)
    assert done == [20.3]
