"""
Preferred-language detection for visitors.

Kept apart from the ask flow: it only ever picks the translation target,
never the prompt contents.
"""

import ipaddress
import requests
from config import settings
from services.translator import DEFAULT_LANGUAGE, SUPPORTED_LANGUAGES
from typing import Optional
import logging

logger = logging.getLogger(__name__)

COUNTRY_TO_LANGUAGE = {
    "kr": "ko",  # South Korea
    "de": "de",  # Germany
    "at": "de",  # Austria
    "ch": "de",  # Switzerland (German-speaking regions)
    "nl": "nl",  # Netherlands
    "be": "nl",  # Belgium (Dutch-speaking regions)
}


class LanguageDetector:
    def __init__(self, geolocation_url: Optional[str] = None, timeout: float = 5):
        self.geolocation_url = geolocation_url or settings.GEOLOCATION_URL
        self.timeout = timeout

    def detect_preferred_language(self, ip_or_locale: Optional[str]) -> str:
        """Map an IP address or an Accept-Language value to a supported language code"""
        if not ip_or_locale:
            return DEFAULT_LANGUAGE

        value = ip_or_locale.strip()
        if self._is_ip(value):
            return self._from_ip(value)
        return self.from_locale(value)

    def from_locale(self, locale: str) -> str:
        """Pick the first supported primary tag, e.g. 'de-DE,de;q=0.9' -> 'de'"""
        for part in locale.split(","):
            tag = part.split(";")[0].strip().lower()
            primary = tag.split("-")[0].split("_")[0]
            if primary in SUPPORTED_LANGUAGES:
                return primary
        return DEFAULT_LANGUAGE

    def _from_ip(self, ip: str) -> str:
        address = ipaddress.ip_address(ip)
        if address.is_private or address.is_loopback:
            return DEFAULT_LANGUAGE

        try:
            response = requests.get(self.geolocation_url.format(ip=ip), timeout=self.timeout)
            response.raise_for_status()
            country_code = (response.json().get("country_code") or "").lower()
        except Exception as e:
            logger.warning(f"Failed to detect location for {ip}, using English: {e}")
            return DEFAULT_LANGUAGE

        language = COUNTRY_TO_LANGUAGE.get(country_code, DEFAULT_LANGUAGE)
        logger.info(f"Detected language {language} for country {country_code or 'unknown'}")
        return language

    @staticmethod
    def _is_ip(value: str) -> bool:
        try:
            ipaddress.ip_address(value)
            return True
        except ValueError:
            return False
