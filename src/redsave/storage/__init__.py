"""Save file I/O and backup naming."""
