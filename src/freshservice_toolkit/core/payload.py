from typing import Any, Dict, Mapping, Optional


def project_field(envelope: Any, field_name: Optional[str]) -> Any:
    """
    Pulls a named value out of a response envelope.
    Example: project_field({"ticket": {...}}, "ticket") -> {...}
    Without a field name the whole envelope is returned.
    """
    if not field_name:
        return envelope
    if not isinstance(envelope, Mapping):
        return None
    return envelope.get(field_name)


def compact(values: Mapping[str, Any]) -> Dict[str, Any]:
    """Drop keys whose value is None so absent fields never reach the wire."""
    return {k: v for k, v in values.items() if v is not None}


def full_name(first: Optional[str], last: Optional[str]) -> Optional[str]:
    parts = [p.strip() for p in (first, last) if isinstance(p, str) and p.strip()]
    return " ".join(parts) or None
