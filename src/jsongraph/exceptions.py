"""Exceptions for parsing JSON text and building/laying out graphs."""

from __future__ import annotations


class ParseError(Exception):
    """Input text is not valid JSON.

    Raised by ``parse_json`` before any graph is built. Carries the
    underlying parser's message and position so callers can point the user
    at the offending character.

    Attributes:
        reason: The JSON decoder's message (without position suffix)
        line: 1-based line of the error, if known
        column: 1-based column of the error, if known
        message: Human-readable error message
    """

    def __init__(
        self,
        reason: str,
        *,
        line: int | None = None,
        column: int | None = None,
        message: str | None = None,
    ) -> None:
        self.reason = reason
        self.line = line
        self.column = column
        self.message = message or self._default_message()
        super().__init__(self.message)

    def _default_message(self) -> str:
        if self.line is None:
            return f"Invalid JSON: {self.reason}"
        return f"Invalid JSON: {self.reason} (line {self.line}, column {self.column})"


class DocumentTooDeepError(Exception):
    """Input text nests deeper than the JSON decoder can follow.

    Not a ``ParseError``: depth is not a syntax problem, so ``parse_json``
    never hands such text to a repairer.

    Attributes:
        message: Human-readable error message
    """

    def __init__(self, message: str | None = None) -> None:
        self.message = message or "JSON document is nested too deeply for the decoder"
        super().__init__(self.message)


class RepairFailedError(Exception):
    """A repair pass ran but its output still does not parse.

    Raised instead of a plain ``ParseError`` so callers can tell "the input is
    broken" apart from "the input is broken and we already tried to fix it".

    Attributes:
        original: ParseError from the first (unrepaired) parse
        repaired_error: ParseError from parsing the repaired text, or None
            when the repairer itself raised
        message: Human-readable error message
    """

    def __init__(
        self,
        original: ParseError,
        repaired_error: ParseError | None = None,
        message: str | None = None,
    ) -> None:
        self.original = original
        self.repaired_error = repaired_error
        self.message = message or self._default_message()
        super().__init__(self.message)

    def _default_message(self) -> str:
        msg = f"Repair failed. Original error: {self.original.message}"
        if self.repaired_error is not None:
            msg += f"\nAfter repair: {self.repaired_error.message}"
        return msg


class GraphInvariantError(Exception):
    """An internal graph invariant does not hold.

    Builder output is always a forest with consistent ids, so this only
    fires when a node/edge set was assembled by hand (or by a bug). It is
    never caught inside the library.
    """

    pass
