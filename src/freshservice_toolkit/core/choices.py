"""
Code <-> label lookups for ticket choice fields (status, priority, ...).

The cache belongs to whoever creates it. It starts with Freshservice's stock
values and is refreshed from the instance by one explicit `load()` call.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, Mapping, Optional

from .client import EnvironmentLike, FreshserviceClient
from .config import resolve_environment

log = logging.getLogger("freshservice_toolkit.core.choices")

DEFAULT_CHOICES: Dict[str, Dict[int, str]] = {
    "status": {2: "Open", 3: "Pending", 4: "Resolved", 5: "Closed"},
    "priority": {1: "Low", 2: "Medium", 3: "High", 4: "Urgent"},
    "urgency": {1: "Low", 2: "Medium", 3: "High"},
    "impact": {1: "Low", 2: "Medium", 3: "High"},
    "source": {
        1: "Email",
        2: "Portal",
        3: "Phone",
        4: "Chat",
        5: "Feedback widget",
        6: "Yammer",
        7: "AWS Cloudwatch",
        8: "Pagerduty",
        9: "Walkup",
        10: "Slack",
    },
}

FORM_FIELDS_PATH = "ticket_form_fields"


def _parse_choices(raw: Any) -> Dict[int, str]:
    """
    Accept both shapes seen in ticket_form_fields:
    - [{"id": 2, "value": "Open"}, ...]
    - {"Open": [2, ...]} / {"Low": 1}
    """
    parsed: Dict[int, str] = {}
    if isinstance(raw, list):
        for item in raw:
            if not isinstance(item, dict):
                continue
            code, label = item.get("id"), item.get("value")
            if isinstance(code, int) and isinstance(label, str):
                parsed[code] = label
    elif isinstance(raw, dict):
        for label, code in raw.items():
            if isinstance(code, list):
                code = code[0] if code else None
            if isinstance(code, int):
                parsed[code] = str(label)
    return parsed


class ChoiceCache:
    def __init__(self, choices: Optional[Mapping[str, Mapping[int, str]]] = None):
        source = DEFAULT_CHOICES if choices is None else choices
        self._choices: Dict[str, Dict[int, str]] = {
            field: dict(values) for field, values in source.items()
        }
        self.loaded = False

    @property
    def fields(self) -> Iterable[str]:
        return tuple(self._choices)

    def load(
        self, client: FreshserviceClient, environment: EnvironmentLike = None
    ) -> "ChoiceCache":
        """Replace the stock values with the instance's ticket form choices."""
        env = resolve_environment(environment, client.default_environment)
        fields = client.get(FORM_FIELDS_PATH, "ticket_fields", environment=env)
        refreshed = 0
        for field in fields:
            if not isinstance(field, dict):
                continue
            name = field.get("name")
            if name not in self._choices:
                continue
            values = _parse_choices(field.get("choices"))
            if values:
                self._choices[name] = values
                refreshed += 1
        self.loaded = True
        log.info(
            "choices.loaded", extra={"environment": env.value, "fields": refreshed}
        )
        return self

    def label(self, field: str, code: Any) -> Optional[str]:
        if isinstance(code, bool) or not isinstance(code, int):
            return None
        return self._choices.get(field, {}).get(code)

    def code(self, field: str, value: int | str | None) -> Optional[int]:
        """
        Resolve a label (case-insensitive) or numeric code to a code.
        Raises ValueError listing the valid labels when nothing matches.
        """
        if value is None:
            return None
        if isinstance(value, int) and not isinstance(value, bool):
            return value
        text = str(value).strip()
        if text.isdigit():
            return int(text)

        values = self._choices.get(field, {})
        wanted = text.casefold()
        for code, label in values.items():
            if label.casefold() == wanted:
                return code
        raise ValueError(
            f"Unknown {field} {value!r}; expected one of: "
            + ", ".join(values.values())
        )


__all__ = ["ChoiceCache", "DEFAULT_CHOICES", "FORM_FIELDS_PATH"]
