"""Utility helpers for the Taiko configurator."""
