from esper import World

from citrus.components.settings import Settings
from citrus.events.bus import EventBus, EVENT_SETTINGS_CHANGED
from citrus.utils.world_resources import get_or_create_settings


class SettingsSystem:
    """Applies settings changes to the session Settings component."""
    def __init__(self, world: World, event_bus: EventBus):
        self.world = world
        self.event_bus = event_bus
        self.event_bus.subscribe(EVENT_SETTINGS_CHANGED, self.on_settings_changed)

    @property
    def settings(self) -> Settings:
        return get_or_create_settings(self.world)

    def on_settings_changed(self, sender, **kwargs):
        settings = self.settings
        if 'muted' in kwargs:
            settings.muted = bool(kwargs['muted'])
        if 'volume' in kwargs:
            try:
                volume = float(kwargs['volume'])
            except (TypeError, ValueError):
                volume = settings.volume
            settings.volume = min(1.0, max(0.0, volume))
        if 'reduced_motion' in kwargs:
            settings.reduced_motion = bool(kwargs['reduced_motion'])
