"""Domain layer - library and playback logic."""
