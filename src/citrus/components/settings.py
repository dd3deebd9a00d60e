from dataclasses import dataclass


@dataclass(slots=True)
class Settings:
    """Session-only player preferences (never persisted).

    Only ``reduced_motion`` is read, by the turn pacing. ``muted`` and
    ``volume`` are kept for an audio layer this game does not ship; nothing
    plays sound, and they change only through ``EVENT_SETTINGS_CHANGED``.
    """
    muted: bool = False
    volume: float = 0.8
    reduced_motion: bool = False

    def __post_init__(self) -> None:
        self.volume = min(1.0, max(0.0, float(self.volume)))
