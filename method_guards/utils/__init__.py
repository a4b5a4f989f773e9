"""Helpers shared across method guards."""
