"""Core infrastructure for partsweep: paths, configuration, theme and state."""
