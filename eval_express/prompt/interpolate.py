"""Placeholder interpolation for prompt templates: ``{{key}}`` → value."""

import re
from collections.abc import Mapping

# Either an escaped opening ``\{{`` or a full ``{{key}}`` placeholder.
_TOKEN_PATTERN = re.compile(r"\\\{\{|\{\{([A-Za-z0-9_.-]+)\}\}")


def interpolate(template: str, values: Mapping[str, str]) -> str:
    """Substitute every ``{{key}}`` whose key is in values.

    Unknown keys are left verbatim. A backslash before the braces escapes
    them: ``\\{{name}}`` renders as ``{{name}}``.
    """
    if "{{" not in template:
        return template

    def _replace(match: re.Match[str]) -> str:
        key = match.group(1)
        if key is None:
            return "{{"
        value = values.get(key)
        return match.group(0) if value is None else str(value)

    return _TOKEN_PATTERN.sub(_replace, template)
