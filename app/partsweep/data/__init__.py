"""Bundled data files for partsweep."""
