"""
Taiko Configurator Constants

Application-wide settings. Hardware constants must match
firmware headers/addons/taiko.h.
"""

from pathlib import Path


APP_NAME = "Taiko Configurator"

# ============================================================================
# Files and logging
# ============================================================================

APP_DIR = Path.home() / ".taiko_configurator"
LOG_DIR = APP_DIR / "logs"
LOG_FILE_NAME = "taiko_configurator.log"
ERROR_LOG_FILE_NAME = "taiko_configurator_errors.log"
LOG_RETENTION_DAYS = 30

# Persisted file format
CONFIG_FILE_VERSION = "1.0"
CONFIG_OPTIONS_KEY = "taikoAddonOptions"

# ============================================================================
# Hardware (RP2040)
# ============================================================================

TAIKO_SENSOR_COUNT = 4

# 12-bit ADC
ADC_BITS = 12
ADC_MAX = (1 << ADC_BITS) - 1  # 4095

# GPIO 26-29 are ADC0-ADC3
ADC_PIN_OFFSET = 26
ADC_CHANNEL_COUNT = 4

# Unassigned pin
PIN_UNASSIGNED = -1
