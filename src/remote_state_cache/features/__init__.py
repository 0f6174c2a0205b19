"""Feature modules for remote-state-cache."""
