"""Input format detection."""

import json
import logging
from typing import Optional
from .types import Format

_JSON_OPENERS = ("{", "[", '"')


class FormatDetector:
    """
    Decides whether document text should be read as JSON or YAML.

    JSON is (almost) a subset of YAML, so detection leans on JSON: text
    that opens like a JSON container or string, or that is exactly one
    JSON scalar, is JSON. Blank text is also routed to JSON so that it is
    reported as empty input. Everything else is YAML.
    """

    def __init__(self, logger: Optional[logging.Logger] = None):
        self.logger = logger or logging.getLogger(__name__)

    def detect(self, text: str, requested: Format = Format.AUTO) -> Format:
        """
        Detect the format of ``text``.

        Args:
            text: Document text
            requested: Explicit format; returned unchanged unless AUTO

        Returns:
            Format.JSON or Format.YAML
        """
        if requested is not Format.AUTO:
            return requested

        detected = Format.JSON if self.looks_like_json(text) else Format.YAML
        self.logger.debug(f"Detected input format: {detected.value}")
        return detected

    def looks_like_json(self, text: str) -> bool:
        stripped = text.lstrip("\ufeff").strip()
        if not stripped or stripped.startswith(_JSON_OPENERS):
            return True
        try:
            json.loads(stripped)
        except ValueError:
            return False
        return True
