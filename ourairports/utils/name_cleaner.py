"""
Airport name cleaning utility.

OurAirports names are user contributed. Before a name is published in a
shard, full-width characters are folded to their ASCII forms and names that
are too short or flagged as spam are rejected.
"""

import re
import logging

logger = logging.getLogger(__name__)


class AirportNameCleaner:
    """Utility for cleaning and validating airport names."""

    MIN_NAME_LENGTH = 3

    # Full-width forms of '!' through '~' sit at a fixed offset from ASCII
    FULL_WIDTH_START = 0xFF01
    FULL_WIDTH_END = 0xFF5E
    FULL_WIDTH_OFFSET = 0xFEE0
    IDEOGRAPHIC_SPACE = '\u3000'

    def __init__(self):
        """Initialize the airport name cleaner."""
        self.full_width_pattern = re.compile(
            '[' + chr(self.FULL_WIDTH_START) + '-' + chr(self.FULL_WIDTH_END) + ']'
        )
        # "(spam)" anywhere, or "spam" as a standalone whitespace separated token
        self.spam_pattern = re.compile(r'\(spam\)|(?:^|\s)spam(?:\s|$)', re.IGNORECASE)

    def full_width_to_half_width(self, text: str) -> str:
        """
        Convert full-width characters to their half-width equivalents.

        Args:
            text: Raw text

        Returns:
            Text with full-width ASCII forms and ideographic spaces folded
        """
        folded = self.full_width_pattern.sub(
            lambda match: chr(ord(match.group(0)) - self.FULL_WIDTH_OFFSET), text
        )
        return folded.replace(self.IDEOGRAPHIC_SPACE, ' ')

    def contains_spam(self, name: str) -> bool:
        return bool(self.spam_pattern.search(name))

    def clean_name(self, airport_name: str) -> str:
        """
        Clean an airport name.

        Args:
            airport_name: Raw airport name

        Returns:
            Cleaned airport name
        """
        if not airport_name:
            return ""
        return self.full_width_to_half_width(str(airport_name))

    def is_valid_name(self, airport_name: str) -> bool:
        """
        Check whether a (cleaned) name may be published.

        A name is rejected when it is shorter than MIN_NAME_LENGTH characters
        or is flagged as spam.
        """
        if not airport_name or len(airport_name) < self.MIN_NAME_LENGTH:
            return False
        if self.contains_spam(airport_name):
            logger.debug(f"Rejected spam airport name: {airport_name!r}")
            return False
        return True
