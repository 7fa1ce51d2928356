import logging
from dataclasses import asdict, dataclass
from typing import Any, Callable, Optional

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class SoundCue:
    wave: str = "triangle"
    start_hz: float = 350.0
    end_hz: float = 80.0
    start_gain: float = 0.3
    end_gain: float = 0.001
    duration_s: float = 0.25

    def as_dict(self) -> dict:
        return asdict(self)


FLAME = SoundCue()

# a handle is anything that can play a cue
Handle = Callable[[SoundCue], Any]


class CompletionFeedback:
    """
    Fires a cue after a successful mark-complete. The handle (audio device,
    websocket, logger...) is created on the first fire and reused afterwards.
    """

    def __init__(self, handle_factory: Callable[[], Handle], cue: SoundCue = FLAME):
        self._factory = handle_factory
        self._handle: Optional[Handle] = None
        self.cue = cue

    @property
    def started(self) -> bool:
        return self._handle is not None

    def fire(self) -> SoundCue:
        if self._handle is None:
            self._handle = self._factory()
        self._handle(self.cue)
        return self.cue


def log_handle() -> Handle:
    def _play(cue: SoundCue) -> None:
        log.debug("[feedback] %s %.0f->%.0fHz %.2fs", cue.wave, cue.start_hz, cue.end_hz, cue.duration_s)
    return _play
