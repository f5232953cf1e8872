"""
Configuration for the TeachLang front end.

Author: xwest
"""

import logging
from typing import Any, Dict
from dataclasses import dataclass, fields

logger = logging.getLogger(__name__)


@dataclass
class FrontendConfig:
    """Options shared by the lexer, parser and analyzer."""

    # Name used in source locations
    filename: str = "<string>"

    # Reject char literals that are not exactly one character wherever
    # they appear, not only when assigned to a char variable
    strict_char_literals: bool = True

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'FrontendConfig':
        """
        Create a FrontendConfig from a dictionary.

        Unknown keys are ignored with a warning.

        Raises:
            ValueError: if a known key has a value of the wrong type
        """
        known = {f.name: f for f in fields(cls)}
        options = {}

        for key, value in data.items():
            if key not in known:
                logger.warning("Ignoring unknown config option: %s", key)
                continue

            expected = bool if known[key].type in (bool, 'bool') else str
            if not isinstance(value, expected):
                raise ValueError(
                    f"Config option '{key}' must be {expected.__name__}, got {type(value).__name__}"
                )
            options[key] = value

        return cls(**options)
