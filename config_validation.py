"""Validation helpers for numeric entry configuration payloads."""

from __future__ import annotations

import math
from dataclasses import dataclass, fields
from typing import Any, Dict, List, Mapping

from numeric_entry import NumericEntryConfig

FLAG_FIELDS = ("include_minimum", "include_maximum", "integer_only")
MESSAGE_FIELDS = ("minimum_message", "maximum_message", "format_message")


@dataclass(frozen=True)
class ValidationIssue:
    """Represents a configuration validation problem."""

    field: str
    title: str
    message: str


class ConfigurationError(ValueError):
    """Raised when a settings payload cannot produce a usable configuration."""

    def __init__(self, issues: List[ValidationIssue]):
        self.issues = list(issues)
        summary = "; ".join(f"{issue.field}: {issue.title}" for issue in self.issues)
        super().__init__(f"Invalid numeric entry configuration ({summary})")


def _coerce_number(value: Any) -> int | float | None:
    """Best-effort conversion to a number returning ``None`` on failure."""

    if isinstance(value, bool):
        # ``bool`` is a subclass of ``int`` in Python, but we treat it as invalid
        return None
    if isinstance(value, (int, float)):
        return None if isinstance(value, float) and math.isnan(value) else value
    text = str(value).strip()
    try:
        return int(text)
    except ValueError:
        pass
    try:
        number = float(text)
    except ValueError:
        return None
    return None if math.isnan(number) else number


def validate_configuration(settings: Mapping[str, Any]) -> List[ValidationIssue]:
    """Validate a configuration payload.

    Parameters
    ----------
    settings:
        Mapping of configuration keys to values, e.g. loaded from a settings
        file or gathered from a form. Missing keys take their defaults.

    Returns
    -------
    list[ValidationIssue]
        A collection of validation issues. An empty list denotes success.
    """

    issues: List[ValidationIssue] = []
    defaults = NumericEntryConfig()

    bounds: Dict[str, int | float | None] = {}
    for name in ("minimum", "maximum"):
        if name not in settings:
            bounds[name] = getattr(defaults, name)
            continue
        bounds[name] = _coerce_number(settings[name])
        if bounds[name] is None:
            issues.append(
                ValidationIssue(
                    field=name,
                    title="Bound Not Numeric",
                    message=f"The {name} must be a number, got {settings[name]!r}.",
                )
            )

    for name in FLAG_FIELDS:
        if name in settings and not isinstance(settings[name], bool):
            issues.append(
                ValidationIssue(
                    field=name,
                    title="Flag Not Boolean",
                    message=f"Set {name} to true or false.",
                )
            )

    for name in MESSAGE_FIELDS:
        if name in settings and settings[name] is not None and not isinstance(settings[name], str):
            issues.append(
                ValidationIssue(
                    field=name,
                    title="Message Not Text",
                    message=f"The {name} override must be text; leave it empty to use the default.",
                )
            )

    minimum, maximum = bounds["minimum"], bounds["maximum"]
    if minimum is not None and maximum is not None:
        include_minimum = settings.get("include_minimum", defaults.include_minimum) is not False
        include_maximum = settings.get("include_maximum", defaults.include_maximum) is not False
        if minimum > maximum:
            issues.append(
                ValidationIssue(
                    field="minimum",
                    title="Minimum Above Maximum",
                    message="The minimum must not exceed the maximum, otherwise no value is accepted.",
                )
            )
        elif minimum == maximum and not (include_minimum and include_maximum):
            issues.append(
                ValidationIssue(
                    field="minimum",
                    title="Empty Range",
                    message="An open bound with equal minimum and maximum leaves no acceptable value.",
                )
            )

        if settings.get("integer_only") is True:
            for name, bound in (("minimum", minimum), ("maximum", maximum)):
                if name in settings and isinstance(bound, float) and math.isfinite(bound) \
                        and not bound.is_integer():
                    issues.append(
                        ValidationIssue(
                            field=name,
                            title="Fractional Integer Bound",
                            message=f"Integer-only fields should use a whole-number {name}.",
                        )
                    )

    return issues


def config_from_settings(settings: Mapping[str, Any]) -> NumericEntryConfig:
    """Build a :class:`NumericEntryConfig` or raise :class:`ConfigurationError`."""

    issues = validate_configuration(settings)
    if issues:
        raise ConfigurationError(issues)

    known = {item.name for item in fields(NumericEntryConfig)}
    values: Dict[str, Any] = {}
    for name, value in settings.items():
        if name not in known:
            continue
        if name in ("minimum", "maximum"):
            value = _coerce_number(value)
        elif name in MESSAGE_FIELDS and value is None:
            value = ""
        values[name] = value
    return NumericEntryConfig(**values)
