"""
defaults.py

Fixed channels created on first run, when no saved registry exists.

Digital and one-wire pins are BCM GPIO numbers; analog pins are MCP3008
input numbers.
"""

DEFAULT_FIXED_CHANNELS = [
    {"channel": 1, "pin": 17, "mode": "DIGITAL", "active": True},  # door contact
    {"channel": 2, "pin": 0, "mode": "ANALOG", "active": True},    # light level
    {"channel": 3, "pin": 4, "mode": "ONEWIRE", "active": True},   # DS18B20 temperature
    {"channel": 4, "pin": 27, "mode": "DIGITAL", "active": True},  # motion
    {"channel": 5, "pin": 1, "mode": "ANALOG", "active": True},    # soil moisture
]
