"""
Header redaction and merging.

REDACTION_MARKER and ALWAYS_SENSITIVE_HEADERS are the only definition of the
redaction set. Request echo and response echo both go through
sanitize_headers().

Headers from the optional source (caller-supplied or HEADER_* environment
entries) are never redacted, even when they carry a sensitive name. See
DESIGN.md, open question on optional-source redaction.
"""

from collections.abc import Mapping

REDACTION_MARKER = "[REDACTED]"

ALWAYS_SENSITIVE_HEADERS: frozenset[str] = frozenset({"authorization"})


def sensitive_header_names(api_key_header_name: str | None = None) -> frozenset[str]:
    """Lowercase names whose values are redacted."""
    if api_key_header_name:
        return ALWAYS_SENSITIVE_HEADERS | {api_key_header_name.lower()}
    return ALWAYS_SENSITIVE_HEADERS


def sanitize_headers(
    headers: Mapping[str, str],
    is_from_optional_source: bool = False,
    *,
    api_key_header_name: str | None = None,
) -> dict[str, str]:
    """
    Produce a copy of headers that is safe to echo or log.

    Args:
        headers: Headers to sanitize (not modified)
        is_from_optional_source: True for caller/custom headers, copied as is
        api_key_header_name: Configured API key header, redacted like Authorization

    Returns:
        Same keys in the same order, sensitive values replaced by REDACTION_MARKER
    """
    if is_from_optional_source:
        return dict(headers)

    sensitive = sensitive_header_names(api_key_header_name)
    return {
        key: REDACTION_MARKER if key.lower() in sensitive else value
        for key, value in headers.items()
    }


def merge_headers(*layers: Mapping[str, str]) -> dict[str, str]:
    """
    Merge header layers, later layers winning case-insensitively.

    The surviving entry keeps the name casing of the layer it came from.
    """
    merged: dict[str, str] = {}
    names: dict[str, str] = {}  # lowercase -> key in merged
    for layer in layers:
        for key, value in layer.items():
            previous = names.get(key.lower())
            if previous is not None:
                del merged[previous]
            merged[key] = value
            names[key.lower()] = key
    return merged
