"""Natural-language command interpreter for a voice-driven task list."""
