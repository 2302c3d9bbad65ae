"""Centralized constants for EmbedWatch."""

# HTTP
DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 10000
LIVENESS_MESSAGE = "Relay active and bot online."

# Retention
DEFAULT_RETENTION_WINDOW_MS = 180_000
DEFAULT_MAX_BUFFER_ENTRIES = 1000

# Embed field name tokens (case-sensitive substring match)
NAME_FIELD_TOKEN = "Name"
GENERATION_FIELD_TOKEN = "Generation"
JOB_ID_FIELD_TOKEN = "Job ID"
