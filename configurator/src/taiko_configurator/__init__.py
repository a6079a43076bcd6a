"""
Taiko Drum Controller Addon Configurator

Configuration schema, validation and defaults for the Taiko addon.
"""

__version__ = "1.0.0"
