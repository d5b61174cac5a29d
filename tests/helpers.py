"""Shared test helpers for Exercise Timer."""

from exercisetimer.timer.engine import TimerEngine


class SignalCollector:
    """Utility to capture pyqtSignal emissions into a list."""

    def __init__(self):
        self.items: list = []

    def slot(self, *args):
        self.items.append(args if len(args) > 1 else args[0] if args else None)

    def __call__(self, *args):
        self.slot(*args)

    def __len__(self):
        return len(self.items)

    def __getitem__(self, idx):
        return self.items[idx]

    @property
    def last(self):
        return self.items[-1] if self.items else None

    def clear(self):
        self.items.clear()


class FakeClock:
    """Callable monotonic clock whose time only moves when told to."""

    def __init__(self, start: float = 0.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> float:
        self.now += seconds
        return self.now


def advance_and_tick(engine: TimerEngine, clock: FakeClock, seconds: float):
    """Move the clock forward and let the engine sample once."""
    clock.advance(seconds)
    return engine.tick()


def run_to_completion(engine: TimerEngine, clock: FakeClock, step: float = 0.25,
                      limit: int = 100_000) -> int:
    """Tick in fixed clock steps until the session ends.  Returns ticks used."""
    for n in range(limit):
        if not engine.is_running:
            return n
        clock.advance(step)
        engine.tick()
    raise AssertionError("session did not complete")
