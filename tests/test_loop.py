from fuzzystat.loop import HeadlessLoop
from fuzzystat.monitor import ScheduleMonitor

def test_after_and_cancel():
    loop = HeadlessLoop(idle_s=0.01)
    ran = []
    keep = loop.after(0, lambda: ran.append("keep"))
    drop = loop.after(0, lambda: ran.append("drop"))
    loop.after_cancel(drop)
    loop.after_cancel(drop)
    loop.after(5, loop.stop)
    loop.run()
    assert ran == ["keep"]
    loop.after_cancel(keep)
    assert loop.pending() == 0

def test_failing_callback_keeps_loop_alive():
    loop = HeadlessLoop(idle_s=0.01)
    ran = []
    loop.after(0, lambda: 1 / 0)
    loop.after(1, lambda: ran.append(1))
    loop.after(2, loop.stop)
    loop.run()
    assert ran == [1]

def test_schedule_monitor_single_handle(loop):
    calls = []
    mon = ScheduleMonitor(loop, lambda: calls.append(loop.now), period_ms=60_000)
    mon.start(); mon.start()
    loop.advance(120_000)
    assert calls == [0, 60_000, 120_000]
    mon.stop()
    assert not mon.active and loop.pending == 0
