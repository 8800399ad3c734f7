"""Cycle-phase overrides applied after the base decision."""
