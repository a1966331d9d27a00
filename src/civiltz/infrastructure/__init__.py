"""Infrastructure layer: zone data files and the process-wide registry."""
