"""Time and latitude values, persistent settings, build configuration, level sensing and an LCD menu for a telescope tracking mount."""

__version__ = "0.1.0"