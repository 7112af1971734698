"""Helpers shared by the tracker and the CLI."""
