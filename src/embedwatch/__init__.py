"""EmbedWatch: relays Discord embed announcements to an HTTP polling client."""

__version__ = "0.1.0"
