"""Built-in rules for formrules.

This module exposes the rule table that seeds every default registry.
"""

from formrules.rules.builtin import BUILTIN_RULES, register_builtin_rules

__all__ = [
    "BUILTIN_RULES",
    "register_builtin_rules",
]
