import logging

import pusher

from enrollment.config import settings

logger = logging.getLogger(__name__)

FORM_CONFIGURATION_CHANNEL = "form-configuration"


class Broadcaster:
    """Broadcast configuration events to Soketi (Pusher-compatible) from Python."""

    _instance = None

    def __init__(self, enabled: bool = None):
        self.enabled = settings.broadcast_enabled if enabled is None else enabled
        self.client = None
        if self.enabled:
            self.client = pusher.Pusher(
                app_id=settings.pusher_app_id,
                key=settings.pusher_app_key,
                secret=settings.pusher_app_secret,
                host=settings.pusher_host,
                port=settings.pusher_port,
                ssl=False,
            )

    @classmethod
    def get_instance(cls) -> "Broadcaster":
        if cls._instance is None:
            cls._instance = cls()
        return cls._instance

    def trigger(self, channel: str, event: str, data: dict):
        """Send an event to a Soketi channel."""
        if not self.enabled:
            logger.debug(f"Broadcasting disabled, dropping {event} on {channel}")
            return
        try:
            self.client.trigger(channel, event, data)
        except Exception as e:
            logger.warning(f"Failed to trigger {event} on {channel}: {e}")

    def trigger_configuration(self, event: str, action: str, ids: list[int]):
        """Tell admin and student clients to re-fetch a definition collection."""
        self.trigger(FORM_CONFIGURATION_CHANNEL, event, {"action": action, "ids": list(ids)})
