"""WhatsApp bot relaying VuSmartMaps CPU metrics to chat users."""

__version__ = "1.0.0"
