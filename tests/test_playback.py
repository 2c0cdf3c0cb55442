import random
import time

import pytest

from cryptolearn.dispatcher import dispatch
from cryptolearn.exceptions import EmptyTrace, SequencerIdle
from cryptolearn.playback import Cancellable, PlaybackSequencer, Scheduler, SequencerState
from cryptolearn.trace.model import TraceRequest, TraceResult


class _Handle(Cancellable):
    def __init__(self, callback):
        self.callback = callback
        self.cancelled = False
        self.fired = False

    def cancel(self):
        self.cancelled = True


class ManualScheduler(Scheduler):
    """Records ticks instead of running them; tests fire them by hand."""

    def __init__(self):
        self.handles = []

    def schedule(self, delay, callback):
        handle = _Handle(callback)
        self.handles.append(handle)
        return handle

    def live(self):
        return [h for h in self.handles if not (h.cancelled or h.fired)]

    def fire(self):
        handle = self.live()[-1]
        handle.fired = True
        handle.callback()
        return handle


def _trace(algorithm="feistel-cipher", text="Secret123"):
    return dispatch(TraceRequest(algorithm=algorithm, input_text=text))


@pytest.fixture
def sched():
    return ManualScheduler()


@pytest.fixture
def seq(sched):
    return PlaybackSequencer(interval=1.5, scheduler=sched)


def test_idle_until_loaded(seq):
    assert seq.state == SequencerState.IDLE
    assert seq.total == 0
    assert seq.current is None
    assert seq.progress == 0.0
    for op in (seq.next, seq.previous, seq.toggle_play, seq.reset):
        with pytest.raises(SequencerIdle):
            op()
    with pytest.raises(SequencerIdle):
        seq.jump_to(3)


def test_load_enters_ready(seq):
    trace = _trace()
    seq.load(trace)
    assert seq.state == SequencerState.READY
    assert seq.cursor == 0
    assert seq.total == 18
    assert seq.current is trace.steps[0]
    assert not seq.can_go_previous
    assert seq.can_go_next


def test_load_rejects_empty_trace(seq):
    with pytest.raises(EmptyTrace):
        seq.load(TraceResult(algorithm="checksum", mode="forward", steps=(), result=""))
    assert seq.state == SequencerState.IDLE


def test_navigation_is_clamped(seq):
    seq.load(_trace())
    assert seq.previous() == 0
    assert seq.jump_to(100) == 17
    assert seq.state == SequencerState.COMPLETE
    assert seq.next() == 17
    assert seq.jump_to(-5) == 0
    assert seq.next() == 1
    assert seq.state == SequencerState.PAUSED


def test_random_walk_never_leaves_bounds(seq):
    seq.load(_trace("spn-cipher"))
    rng = random.Random(1337)
    for _ in range(500):
        op = rng.choice(["next", "previous", "jump"])
        if op == "next":
            seq.next()
        elif op == "previous":
            seq.previous()
        else:
            seq.jump_to(rng.randint(-20, 40))
        assert 0 <= seq.cursor <= seq.total - 1


def test_autoplay_runs_to_completion(seq, sched):
    seq.load(_trace("checksum", "TEST"))
    assert seq.toggle_play() is True
    assert seq.state == SequencerState.ADVANCING
    for _ in range(10):
        if not sched.live():
            break
        sched.fire()
    assert seq.cursor == seq.total - 1
    assert seq.playing is False
    assert seq.state == SequencerState.COMPLETE
    assert sched.live() == []
    assert seq.progress == 1.0


def test_toggle_off_cancels_pending_tick(seq, sched):
    seq.load(_trace())
    seq.toggle_play()
    handle = sched.handles[-1]
    assert seq.toggle_play() is False
    assert handle.cancelled
    handle.callback()
    assert seq.cursor == 0
    assert seq.state == SequencerState.PAUSED


def test_load_invalidates_stale_timer(seq, sched):
    seq.load(_trace())
    seq.toggle_play()
    sched.fire()
    assert seq.cursor == 1
    stale = sched.handles[-1]

    seq.load(_trace("spn-cipher"))
    assert stale.cancelled
    assert seq.playing is False
    stale.callback()
    assert seq.cursor == 0
    assert seq.state == SequencerState.READY


def test_manual_next_to_end_stops_autoplay(seq, sched):
    seq.load(_trace("checksum", "TEST"))
    seq.toggle_play()
    seq.jump_to(3)
    assert seq.playing is False
    assert sched.live() == []


def test_toggle_at_last_step_does_nothing(seq, sched):
    seq.load(_trace("checksum", "TEST"))
    seq.jump_to(3)
    assert seq.toggle_play() is False
    assert sched.handles == []


def test_reset(seq, sched):
    seq.load(_trace())
    seq.jump_to(5)
    seq.toggle_play()
    seq.reset()
    assert seq.cursor == 0
    assert seq.playing is False
    assert seq.state == SequencerState.READY
    assert sched.live() == []


def test_progress(seq):
    seq.load(_trace("checksum", "TEST"))
    seq.next()
    assert seq.progress == pytest.approx(1 / 3)


def test_close_cancels(seq, sched):
    seq.load(_trace())
    with seq:
        seq.toggle_play()
    assert sched.live() == []
    assert seq.playing is False


def test_real_timer_scheduler():
    seq = PlaybackSequencer(interval=0.01)
    seq.load(_trace("checksum", "TEST"))
    seq.toggle_play()
    deadline = time.monotonic() + 5.0
    while seq.playing and time.monotonic() < deadline:
        time.sleep(0.01)
    assert seq.playing is False
    assert seq.cursor == 3
    seq.close()


def test_rejects_non_positive_interval(sched):
    with pytest.raises(ValueError):
        PlaybackSequencer(interval=0, scheduler=sched)
