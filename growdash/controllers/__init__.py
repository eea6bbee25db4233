"""Controllers package for upstream sensor and AI services"""

from .sensor_relay import SensorRelayClient, parse_reading_value
from .gemini import GeminiClient, decode_data_url

__all__ = [
    'SensorRelayClient',
    'parse_reading_value',
    'GeminiClient',
    'decode_data_url',
]
