import pytest

from mandelview.interaction import Button, InteractionController, PointerMove, PointerUp, Terminate
from mandelview.scheduler import FrameScheduler

class FakePlatform:
    """Scripted event batches, one list per tick."""

    def __init__(self, batches):
        self.batches = list(batches)
        self.presented = []
        self.status = []
        self.closed = False

    def poll_events(self):
        if self.batches:
            return self.batches.pop(0)
        return []

    def present(self, buffer):
        self.presented.append(buffer.copy())

    def set_status(self, text):
        self.status.append(text)

    def close(self):
        self.closed = True

class FakeClock:
    def __init__(self, step=0.0):
        self.now = 0.0
        self.step = step
        self.sleeps = []

    def __call__(self):
        t = self.now
        self.now += self.step
        return t

    def sleep(self, seconds):
        self.sleeps.append(seconds)

def make_scheduler(state, batches, *, step=0.0, fps=30):
    platform = FakePlatform(batches)
    clock = FakeClock(step)
    controller = InteractionController(state, status_sink=platform.set_status)
    sched = FrameScheduler(state, controller, platform, fps=fps, clock=clock, sleep=clock.sleep)
    return sched, platform, clock

def test_renders_only_while_dirty(make_state):
    state = make_state(width=32, height=24)
    sched, platform, _ = make_scheduler(state, [])
    assert sched.run(max_frames=10) == 10
    assert len(platform.presented) == 5
    assert not state.dirty

def test_terminate_stops_loop_without_rendering(make_state):
    state = make_state(width=32, height=24)
    sched, platform, _ = make_scheduler(state, [[PointerMove(1, 1), Terminate()]])
    assert sched.run() == 1
    assert not sched.running
    assert platform.presented == []
    assert len(platform.status) == 1

def test_click_restarts_refinement(make_state):
    state = make_state(width=32, height=24)
    batches = [[]] * 6 + [[PointerUp(16, 12, Button.PRIMARY)]]
    sched, platform, _ = make_scheduler(state, batches)
    sched.run(max_frames=6)
    assert len(platform.presented) == 5
    sched.tick()
    assert state.viewport.scale == 1.0
    assert state.refinement.resolution == 8
    assert len(platform.presented) == 6

def test_sleeps_remaining_budget(make_state):
    state = make_state(width=16, height=16)
    sched, _, clock = make_scheduler(state, [], step=0.01, fps=20)
    sched.tick()
    assert clock.sleeps == [pytest.approx(0.04)]

def test_overrun_sleeps_zero(make_state):
    state = make_state(width=16, height=16)
    sched, _, clock = make_scheduler(state, [], step=0.5, fps=30)
    sched.tick()
    assert clock.sleeps == [0.0]

def test_rejects_bad_fps(state):
    with pytest.raises(ValueError):
        FrameScheduler(state, InteractionController(state), FakePlatform([]), fps=0)
