"""Output format selection and emission."""

from __future__ import annotations

import json
from enum import Enum
from typing import Any, Mapping

import yaml

from .model import TransformError


class OutputFormat(str, Enum):
    YAML = "yaml"
    JSON = "json"

    @classmethod
    def coerce(cls, value: "OutputFormat | str") -> "OutputFormat":
        if isinstance(value, cls):
            return value
        token = str(value).strip().lower()
        if token == "yml":
            token = "yaml"
        try:
            return cls(token)
        except ValueError as exc:
            choices = ", ".join(member.value for member in cls)
            raise TransformError(f"Unsupported output format '{value}'. Expected one of: {choices}.") from exc


def emit(document: Mapping[str, Any], output_format: OutputFormat | str) -> str:
    fmt = OutputFormat.coerce(output_format)
    if fmt is OutputFormat.JSON:
        return json.dumps(document, indent=2, ensure_ascii=False) + "\n"
    return yaml.safe_dump(
        dict(document),
        sort_keys=False,
        default_flow_style=False,
        allow_unicode=True,
    )


__all__ = ["OutputFormat", "emit"]
