"""Allow running partsweep as ``python -m partsweep``."""

from partsweep.cli.main import app

app(prog_name="partsweep")
