"""
Taiko Configurator Models
"""
