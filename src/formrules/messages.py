"""Error message formatting.

Templates use literal placeholders:
- {name} - the field's name
- {val} - the field's current raw value
- {param1}, {param2}, ... - the invocation's parameters, 1-indexed

Each placeholder is replaced once, in that order. Unmatched placeholders are
left in place.
"""

from typing import Sequence


class MessageFormatter:
    """Formats rule message templates for a failed invocation."""

    def format(
        self,
        template: str,
        name: str,
        value: str,
        params: Sequence[str] = (),
    ) -> str:
        """Substitute placeholders into a message template.

        Args:
            template: Message template from the rule
            name: Field name
            value: Field value as seen by the predicate
            params: Invocation parameters

        Returns:
            The formatted message
        """
        message = template.replace("{name}", name, 1).replace("{val}", value, 1)
        for index, param in enumerate(params, start=1):
            message = message.replace(f"{{param{index}}}", param, 1)
        return message
