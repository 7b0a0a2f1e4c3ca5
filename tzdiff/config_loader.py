"""
Configuration loader for Timezone Diff.

Supports loading configuration from:
1. config.ini file ([App] section)
2. Environment variables (for automation/Docker)
"""

import configparser
import os
from dataclasses import dataclass
from typing import Optional

from tzdiff.timezone_utils import DEFAULT_TIMEZONE

TRUE_VALUES = ('1', 'true', 'yes', 'on')


@dataclass
class AppSettings:
    """Runtime settings for the timezone-diff service."""

    default_timezone: str = DEFAULT_TIMEZONE
    # ip-api.com - free tier: 45 requests/minute, HTTP only
    geo_api_url: str = "http://ip-api.com/json/{ip}?fields=status,message,timezone"
    geo_timeout: float = 5.0
    trust_proxy: bool = False  # honour X-Forwarded-For
    log_level: str = 'INFO'
    port: int = 3001


def _parse_bool(value: Optional[str]) -> bool:
    return str(value or '').strip().lower() in TRUE_VALUES


class ConfigLoader:
    """Load configuration from various sources."""

    def __init__(self, config_file: str = "config.ini"):
        """
        Initialize config loader.

        Args:
            config_file: Path to config file (default: config.ini)
        """
        self.config_file = config_file
        self.config = None

    def load_from_file(self) -> bool:
        """
        Load configuration from INI file.

        Returns:
            True if file was loaded successfully, False otherwise
        """
        if not os.path.exists(self.config_file):
            return False

        self.config = configparser.ConfigParser()
        self.config.read(self.config_file)
        return True

    def get_settings(self) -> AppSettings:
        """
        Get application settings.

        Returns:
            AppSettings with configured values

        Raises:
            ValueError: If a numeric setting is not a number
        """
        settings = AppSettings()

        # Try config file first
        if self.config and self.config.has_section('App'):
            section = self.config['App']
            settings.default_timezone = section.get('default_timezone', fallback=settings.default_timezone)
            settings.geo_api_url = section.get('geo_api_url', fallback=settings.geo_api_url)
            settings.geo_timeout = section.getfloat('geo_timeout', fallback=settings.geo_timeout)
            settings.trust_proxy = section.getboolean('trust_proxy', fallback=settings.trust_proxy)
            settings.log_level = section.get('log_level', fallback=settings.log_level).upper()
            settings.port = section.getint('port', fallback=settings.port)
            return settings

        # Try environment variables
        settings.default_timezone = os.getenv('TZDIFF_DEFAULT_TIMEZONE', settings.default_timezone)
        settings.geo_api_url = os.getenv('TZDIFF_GEO_API_URL', settings.geo_api_url)
        settings.geo_timeout = float(os.getenv('TZDIFF_GEO_TIMEOUT', str(settings.geo_timeout)))
        settings.trust_proxy = _parse_bool(os.getenv('TZDIFF_TRUST_PROXY'))
        settings.log_level = os.getenv('TZDIFF_LOG_LEVEL', settings.log_level).upper()
        settings.port = int(os.getenv('PORT', str(settings.port)))

        return settings


def load_settings(config_file: str = "config.ini") -> AppSettings:
    """
    Convenience function to load settings from file or environment.

    Raises:
        ValueError: If configuration is invalid
    """
    loader = ConfigLoader(config_file)
    loader.load_from_file()
    return loader.get_settings()
