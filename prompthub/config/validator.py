"""Configuration validator utilities for prompthub.

Turns pydantic validation failures into readable ``field: message`` strings
and flags settings that are valid but probably unintended.
"""

from typing import Dict, List, Tuple

from pydantic import ValidationError

from .schema import Config


class ConfigValidator:
    """Utility class for validating prompthub configurations."""

    @staticmethod
    def validate_config(config_dict: Dict) -> Tuple[bool, List[str]]:
        """Validate a configuration dictionary.

        Args:
            config_dict: Configuration dictionary to validate

        Returns:
            Tuple of (is_valid, error_messages)
        """
        errors: List[str] = []

        try:
            Config(**config_dict)
            return True, []
        except ValidationError as e:
            for error in e.errors():
                field = '.'.join(str(x) for x in error['loc'])
                msg = error['msg']
                errors.append(f"{field}: {msg}")
            return False, errors

    @staticmethod
    def validate_http_config(http_config: Dict) -> List[str]:
        """Return warnings for risky remote fetch settings."""
        warnings: List[str] = []

        if http_config.get("remote_max_bytes") is None:
            warnings.append("Warning: remote_max_bytes is not set. Remote SKILL.md downloads are unbounded.")

        timeout = http_config.get("timeout", 30.0)
        if isinstance(timeout, (int, float)) and timeout > 300:
            warnings.append("Warning: http timeout is very high (>5 minutes).")

        return warnings
