from typing import Callable, List
from dataclasses import dataclass, field

# Called once per tick with the tick's time sample (ms)
UpdateFn = Callable[[float], None]


@dataclass
class Scene:
    updaters: List[UpdateFn] = field(default_factory=list)

    def update(self, now: float) -> None:
        for fn in self.updaters:
            fn(now)

    # Optional per-event handler (scenes can override)
    def handle_event(self, event) -> None:
        pass

    # Scenes own their full per-frame step; the engine's scheduler calls this
    def tick(self, now: float) -> None:
        self.update(now)

    def dispose(self) -> None:
        self.updaters.clear()
