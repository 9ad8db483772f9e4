"""Postman ``{{variable}}`` substitution."""

from __future__ import annotations

import re
from typing import Any, Callable, Dict, Iterable, Mapping, Optional

from .model import Variable

VARIABLE_RE = re.compile(r"\{\{([^{}]*?)\}\}")
URI_TEMPLATE_VARIABLE_RE = re.compile(r"\{([^{}]*?)\}")

# Upper bound on nested substitutions; guards self-referencing variables.
VAR_REPLACE_CREDITS = 20


def build_variable_map(variables: Iterable[Variable]) -> Dict[str, Any]:
    mapping: Dict[str, Any] = {}
    for var in variables:
        if var.key is None or var.value is None or var.value == "":
            continue
        mapping[var.key] = var.value
    return mapping


def to_uri_template(text: str) -> str:
    """Rewrite leftover ``{{name}}`` placeholders as ``{name}``."""

    return VARIABLE_RE.sub(r"{\1}", text)


class VariableResolver:
    def __init__(self, variables: Mapping[str, Any], credits: int = VAR_REPLACE_CREDITS):
        self._variables = dict(variables)
        self._credits = credits

    @property
    def variables(self) -> Dict[str, Any]:
        return dict(self._variables)

    def resolve(
        self,
        text: str,
        replace_fn: Optional[Callable[[str], str]] = None,
        credits: Optional[int] = None,
    ) -> str:
        """Substitute known string variables, then apply ``replace_fn`` to the rest."""

        remaining = self._credits if credits is None else credits
        while remaining > 0:
            substituted = self._substitute_first(text)
            if substituted is None:
                break
            text = substituted
            remaining -= 1
        return replace_fn(text) if replace_fn else text

    def _substitute_first(self, text: str) -> Optional[str]:
        for match in VARIABLE_RE.finditer(text):
            value = self._variables.get(match.group(1))
            if isinstance(value, str):
                return text.replace(match.group(0), value)
        return None


__all__ = [
    "URI_TEMPLATE_VARIABLE_RE",
    "VARIABLE_RE",
    "VAR_REPLACE_CREDITS",
    "VariableResolver",
    "build_variable_map",
    "to_uri_template",
]
