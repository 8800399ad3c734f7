"""Check-in gate and the base readiness decision table."""
