"""Runtime configuration for the validation runner."""

from __future__ import annotations

import os
from dataclasses import dataclass

_TRUTHY = {"1", "true", "yes", "on"}


@dataclass
class ValidationConfig:
    """Validation runner configuration.

    Attributes:
        strict: Raise UnknownRuleError for unregistered rule names instead
            of skipping them.
    """

    strict: bool = False

    @classmethod
    def from_env(cls) -> ValidationConfig:
        """Create config from environment variables.

        Reads FORMRULES_STRICT (1/true/yes/on, case-insensitive).
        """
        strict = os.environ.get("FORMRULES_STRICT", "").strip().lower() in _TRUTHY
        return cls(strict=strict)
