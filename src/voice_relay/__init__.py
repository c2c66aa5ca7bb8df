"""Speech-to-text relay with optional transcript analysis."""
