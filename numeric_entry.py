"""
Numeric Entry Filter for Numeric Entry.

Toolkit-independent core of the numeric entry field: decides which typed or
pasted fragments may be inserted and turns the current field text into a
validation message according to the configured range.
"""

from __future__ import annotations

import dataclasses
import re
import sys
from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, Optional, Union

from logger import LoggableMixin, LogCategory

Number = Union[int, float]
MessageListener = Callable[[str], None]

DIGITS = frozenset("0123456789")
INTEGER_CHARACTERS = DIGITS | {"-"}
DECIMAL_CHARACTERS = INTEGER_CHARACTERS | {"."}

_INTEGER_LITERAL = re.compile(r"[+-]?[0-9]+")
_DECIMAL_LITERAL = re.compile(r"[+-]?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)")

DEFAULT_INTEGER_FORMAT_MESSAGE = "Please enter a valid integer."
DEFAULT_DECIMAL_FORMAT_MESSAGE = "Please enter a valid number."


class ValidationErrorKind(Enum):
    """Kinds of problems the validator reports."""

    FORMAT = "format"
    MINIMUM = "minimum"
    MAXIMUM = "maximum"

    @property
    def is_range_error(self) -> bool:
        return self is not ValidationErrorKind.FORMAT


@dataclass(frozen=True)
class NumericEntryConfig:
    """Range, parsing mode and message overrides of a numeric entry field."""

    minimum: Number = -sys.float_info.max
    maximum: Number = sys.float_info.max
    include_minimum: bool = True
    include_maximum: bool = True
    integer_only: bool = False
    minimum_message: str = ""
    maximum_message: str = ""
    format_message: str = ""

    @property
    def allowed_characters(self) -> frozenset:
        return INTEGER_CHARACTERS if self.integer_only else DECIMAL_CHARACTERS


@dataclass(frozen=True)
class ValidationOutcome:
    """Result of evaluating one text against a configuration."""

    kind: Optional[ValidationErrorKind] = None
    message: str = ""

    @property
    def is_valid(self) -> bool:
        return self.kind is None


VALID = ValidationOutcome()


def format_bound(value: Number) -> str:
    """Render a bound the way Python prints it, without a trailing ``.0``."""

    text = repr(value)
    if isinstance(value, float) and text.endswith(".0"):
        return text[:-2]
    return text


def parse_number(text: str, integer_only: bool) -> Optional[Number]:
    """Parse ``text`` as a whole signed literal, returning ``None`` on failure."""

    if integer_only:
        if _INTEGER_LITERAL.fullmatch(text) is None:
            return None
        try:
            return int(text)
        except ValueError:
            # Digit count above sys.get_int_max_str_digits(); compares as +/-inf
            return float(text)
    if _DECIMAL_LITERAL.fullmatch(text) is None:
        return None
    return float(text)


def evaluate(text: str, config: NumericEntryConfig) -> ValidationOutcome:
    """Validate ``text`` against ``config`` without touching any state.

    The lower bound is checked before the upper bound, so a configuration
    with ``minimum > maximum`` always reports the minimum message.
    """

    if not text:
        return VALID

    value = parse_number(text, config.integer_only)
    if value is None:
        if config.format_message:
            message = config.format_message
        elif config.integer_only:
            message = DEFAULT_INTEGER_FORMAT_MESSAGE
        else:
            message = DEFAULT_DECIMAL_FORMAT_MESSAGE
        return ValidationOutcome(ValidationErrorKind.FORMAT, message)

    if (config.include_minimum and value < config.minimum) or (
        not config.include_minimum and value <= config.minimum
    ):
        if config.minimum_message:
            message = config.minimum_message
        elif config.include_minimum:
            message = f"Value must be greater than or equal to {format_bound(config.minimum)}."
        else:
            message = f"Value must be greater than {format_bound(config.minimum)}."
        return ValidationOutcome(ValidationErrorKind.MINIMUM, message)

    if (config.include_maximum and value > config.maximum) or (
        not config.include_maximum and value >= config.maximum
    ):
        if config.maximum_message:
            message = config.maximum_message
        elif config.include_maximum:
            message = f"Value must be less than or equal to {format_bound(config.maximum)}."
        else:
            message = f"Value must be less than {format_bound(config.maximum)}."
        return ValidationOutcome(ValidationErrorKind.MAXIMUM, message)

    return VALID


class NumericEntryFilter(LoggableMixin):
    """Keystroke/paste filter and range validator for a numeric field.

    The filter keeps no reference to the widget it serves. Hosts call
    :meth:`accepts` for typed text, :meth:`accepts_paste` for clipboard or
    drop payloads, and :meth:`validate` with the full field text after every
    change. Interested parties register with :meth:`add_message_listener`.
    """

    def __init__(self, config: Optional[NumericEntryConfig] = None,
                 on_message_changed: Optional[MessageListener] = None, **overrides):
        LoggableMixin.__init__(self)
        base = config if config is not None else NumericEntryConfig()
        self._config = dataclasses.replace(base, **overrides) if overrides else base
        self._validation_message = ""
        self._last_outcome = VALID
        self._listeners: List[MessageListener] = []
        if on_message_changed is not None:
            self.add_message_listener(on_message_changed)

    # Configuration

    @property
    def config(self) -> NumericEntryConfig:
        return self._config

    @config.setter
    def config(self, config: NumericEntryConfig):
        self._config = config
        self.log_debug("Configuration replaced", category=LogCategory.CONFIGURATION,
                       config=dataclasses.asdict(config))

    def configure(self, **changes) -> NumericEntryConfig:
        """Replace individual configuration fields and return the new config."""
        self.config = dataclasses.replace(self._config, **changes)
        return self._config

    # Keystroke and paste filtering

    def accepts(self, fragment: str) -> bool:
        """Return ``True`` when ``fragment`` holds only allowed characters."""
        allowed = self._config.allowed_characters
        rejected = any(char not in allowed for char in fragment)
        if rejected:
            self.log_trace("Fragment rejected", category=LogCategory.INPUT_FILTER,
                           fragment=fragment)
        return not rejected

    def accepts_paste(self, text: str) -> bool:
        """Decide whether a pasted payload may be inserted as a whole."""
        accepted = self.accepts(text)
        if not accepted:
            self.log_user_action("paste_rejected", {"length": len(text)})
        return accepted

    # Validation

    @property
    def validation_message(self) -> str:
        return self._validation_message

    @property
    def last_outcome(self) -> ValidationOutcome:
        return self._last_outcome

    def evaluate(self, text: str) -> ValidationOutcome:
        """Evaluate ``text`` against the current configuration."""
        return evaluate(text, self._config)

    def validate(self, text: str) -> str:
        """Recompute the validation message for ``text`` and return it."""
        outcome = evaluate(text, self._config)
        previous = self._validation_message
        self._last_outcome = outcome
        self._validation_message = outcome.message
        if outcome.message != previous:
            self.log_debug("Validation message changed", category=LogCategory.VALIDATION,
                           kind=outcome.kind.value if outcome.kind else None,
                           validation_message=outcome.message)
            self._notify(outcome.message)
        return outcome.message

    # Listeners

    def add_message_listener(self, callback: MessageListener):
        """Call ``callback(message)`` whenever the validation message changes."""
        if callback not in self._listeners:
            self._listeners.append(callback)

    def remove_message_listener(self, callback: MessageListener):
        """Stop notifying ``callback``; unknown callbacks are ignored."""
        if callback in self._listeners:
            self._listeners.remove(callback)

    def _notify(self, message: str):
        for callback in list(self._listeners):
            try:
                callback(message)
            except Exception as e:
                self.log_error("Validation message listener failed", exception=e,
                               category=LogCategory.VALIDATION)
