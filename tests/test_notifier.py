import asyncio
from todo.adapters.system.scheduler_loop import LoopScheduler
from todo.adapters.system.scheduler_asyncio import AsyncioScheduler
from todo.services.notifier import Notifier


class FakeTime:
    def __init__(self):
        self.now = 0.0
    def __call__(self) -> float:
        return self.now


def make_notifier(delay: float = 3.0):
    clock = FakeTime()
    scheduler = LoopScheduler(clock)
    return Notifier(scheduler, delay=delay), scheduler, clock


def advance(scheduler: LoopScheduler, clock: FakeTime, seconds: float) -> None:
    clock.now += seconds
    scheduler.run_pending()


def test_message_expires_after_delay():
    notifier, scheduler, clock = make_notifier()

    notifier.show("A")
    advance(scheduler, clock, 2.5)
    assert notifier.message == "A"

    advance(scheduler, clock, 0.5)
    assert notifier.message == ""


def test_show_debounces_previous_window():
    notifier, scheduler, clock = make_notifier()

    notifier.show("A")
    advance(scheduler, clock, 1.0)
    notifier.show("B")
    advance(scheduler, clock, 2.5)   # 3.5 s od „A”, 2.5 s od „B”
    assert notifier.message == "B"

    advance(scheduler, clock, 0.6)
    assert notifier.message == ""


def test_only_one_dismissal_is_pending():
    notifier, scheduler, clock = make_notifier()

    for text in "ABCDE":
        notifier.show(text)

    assert scheduler.pending() == 1
    assert notifier.message == "E"


def test_reshowing_does_not_grow_timer_queue():
    notifier, scheduler, clock = make_notifier()

    for i in range(500):
        notifier.show(f"msg {i}")
        clock.now += 0.1
        scheduler.run_pending()

    assert len(scheduler._queue) == 1
    advance(scheduler, clock, 3.0)
    assert notifier.message == ""
    assert scheduler._queue == []


def test_cancel_after_fire_is_noop():
    clock = FakeTime()
    scheduler = LoopScheduler(clock)
    fired = []
    timer = scheduler.call_later(1, lambda: fired.append("x"))
    other = scheduler.call_later(5, lambda: fired.append("y"))

    clock.now = 2
    scheduler.run_pending()
    timer.cancel()

    assert fired == ["x"]
    assert scheduler.pending() == 1
    other.cancel()
    assert scheduler.pending() == 0


def test_close_cancels_pending_dismissal():
    notifier, scheduler, clock = make_notifier()

    with notifier:
        notifier.show("A")
    assert scheduler.pending() == 0

    advance(scheduler, clock, 10)
    assert notifier.message == "A"
    notifier.close()  # idempotentne


def test_close_runs_when_block_raises():
    notifier, scheduler, _ = make_notifier()
    try:
        with notifier:
            notifier.show("A")
            raise KeyError("boom")
    except KeyError:
        pass
    assert scheduler.pending() == 0


def test_loop_scheduler_fires_in_deadline_order():
    clock = FakeTime()
    scheduler = LoopScheduler(clock)
    fired = []
    scheduler.call_later(2, lambda: fired.append("late"))
    scheduler.call_later(1, lambda: fired.append("early"))
    cancelled = scheduler.call_later(1.5, lambda: fired.append("never"))
    cancelled.cancel()

    clock.now = 5
    assert scheduler.run_pending() == 2
    assert fired == ["early", "late"]


def test_asyncio_scheduler_dismisses_message():
    async def scenario():
        notifier = Notifier(AsyncioScheduler(), delay=0.05)
        notifier.show("A")
        await asyncio.sleep(0.01)
        notifier.show("B")
        await asyncio.sleep(0.02)
        assert notifier.message == "B"
        await asyncio.sleep(0.1)
        return notifier.message

    assert asyncio.run(scenario()) == ""
