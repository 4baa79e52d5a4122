"""Workout file parsers."""
