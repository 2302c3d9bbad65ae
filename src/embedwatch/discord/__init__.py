"""Discord integration: channel discovery and the message listener."""
