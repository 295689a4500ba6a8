"""Personal work-hours tracking service."""
