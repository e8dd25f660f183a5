"""Flask report API."""
