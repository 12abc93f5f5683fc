"""Argument scanner for marker calls in generated code.

Bundled output has no syntax tree, so marker calls are located textually
and their arguments are split by a small finite-state scanner instead of a
full JavaScript parser. The scanner knows just enough to find argument
boundaries:

    - String literals ('...', "...") and template literals (`...`) hide
      structural characters; a backslash hides the next character
    - `${ ... }` slots inside template literals are code again, and may
      hold further template literals
    - (, [ and { nest; commas separate arguments only at call level or
      directly inside the parameter array

Accepted call shapes (the first argument is always a double-quoted key):

    __$LOCALIZE$__("key", [expr1, expr2])   parameter array
    __$LOCALIZE$__("key", expr1, expr2)     flat parameters
    __$LOCALIZE$__("key")                   no parameter list (raw translation)

Python 3.13+.
"""

from __future__ import annotations

import json
from dataclasses import dataclass

from compiledi18n.constants import LOCALIZE_CALL, LOCALIZE_MARKER
from compiledi18n.diagnostics import ErrorTemplate, MalformedBundleError
from compiledi18n.enums import ScanState

__all__ = ["ArgumentScanner", "ScannedCall", "scan_call"]

_OPENERS = "([{"
_CLOSERS = {")": "(", "]": "[", "}": "{"}
_TEMPLATE = "`"
_TEMPLATE_SLOT = "${"


class ArgumentScanner:
    """Character-level state machine over a marker call's argument list.

    The delimiter stack starts with the call's own "(" already open. Besides
    brackets it holds "`" for each open template literal and "${" for each
    open template slot, so template nesting is tracked explicitly.

    feed() consumes one character and reports whether it is structural,
    i.e. a bracket or comma seen in NORMAL state. Brackets are then pushed
    and popped by the caller through open() and close(), which need the
    depth before the change to decide argument boundaries.

    Attributes:
        state: Current lexical state
        stack: Open delimiters, innermost last
    """

    __slots__ = ("_previous", "_resume", "stack", "state")

    def __init__(self) -> None:
        self.state = ScanState.NORMAL
        self.stack: list[str] = ["("]
        self._resume = ScanState.NORMAL
        self._previous = ""

    @property
    def depth(self) -> int:
        """Number of open delimiters, the call's own parenthesis included."""
        return len(self.stack)

    def feed(self, char: str) -> bool:
        """Consume one character.

        Args:
            char: Next character of the call text

        Returns:
            True if char is a bracket or comma outside any literal
        """
        previous, self._previous = self._previous, char

        if self.state is ScanState.ESCAPE:
            self.state = self._resume
            # An escaped "$" cannot start a template slot
            self._previous = ""
            return False
        if char == "\\":
            self._resume = self.state
            self.state = ScanState.ESCAPE
            return False

        match self.state:
            case ScanState.SINGLE_QUOTE:
                if char == "'":
                    self.state = ScanState.NORMAL
                return False
            case ScanState.DOUBLE_QUOTE:
                if char == '"':
                    self.state = ScanState.NORMAL
                return False
            case ScanState.TEMPLATE_LITERAL:
                if char == _TEMPLATE:
                    self.stack.pop()
                    self.state = ScanState.NORMAL
                elif char == "{" and previous == "$":
                    self.stack.append(_TEMPLATE_SLOT)
                    self.state = ScanState.NORMAL
                return False

        if char == "'":
            self.state = ScanState.SINGLE_QUOTE
            return False
        if char == '"':
            self.state = ScanState.DOUBLE_QUOTE
            return False
        if char == _TEMPLATE:
            self.stack.append(_TEMPLATE)
            self.state = ScanState.TEMPLATE_LITERAL
            return False
        if char == "}" and self.stack[-1] == _TEMPLATE_SLOT:
            self.stack.pop()
            self.state = ScanState.TEMPLATE_LITERAL
            return False
        return char in _OPENERS or char in _CLOSERS or char == ","

    def open(self, char: str) -> None:
        """Push an opening bracket."""
        self.stack.append(char)

    def close(self, char: str) -> bool:
        """Pop the bracket matching char.

        Returns:
            False if the innermost open delimiter does not match
        """
        if self.stack[-1] != _CLOSERS[char]:
            return False
        self.stack.pop()
        return True


@dataclass(frozen=True, slots=True)
class ScannedCall:
    """One marker call located in generated code.

    Attributes:
        start: Offset of the marker name
        end: Offset just past the closing parenthesis
        key: Message key from the first argument
        parameters: Source text of each parameter expression, trimmed
        has_parameter_list: False for the key-only form, whose translation
            is emitted raw for runtime interpolation
    """

    start: int
    end: int
    key: str
    parameters: tuple[str, ...]
    has_parameter_list: bool


def _append(arguments: list[str], text: str) -> None:
    stripped = text.strip()
    if stripped:
        arguments.append(stripped)


def _opens_array(arguments: list[str], pending: str) -> bool:
    return len(arguments) == 1 and not pending.strip()


def _parse_key(source: str, code: str, start: int) -> str:
    if not source.startswith('"'):
        raise MalformedBundleError(ErrorTemplate.marker_key_invalid(source, code, start), start)
    try:
        key = json.loads(source)
    except json.JSONDecodeError as e:
        diagnostic = ErrorTemplate.marker_key_invalid(source, code, start)
        raise MalformedBundleError(diagnostic, start) from e
    if not isinstance(key, str):
        raise MalformedBundleError(ErrorTemplate.marker_key_invalid(source, code, start), start)
    return key


def scan_call(code: str, start: int) -> ScannedCall:
    """Split the marker call at start into key and parameter expressions.

    Args:
        code: Generated code
        start: Offset of a LOCALIZE_CALL occurrence

    Returns:
        The scanned call

    Raises:
        MalformedBundleError: If delimiters do not balance, the call has no
            arguments, or the key is not a double-quoted string literal
    """
    scanner = ArgumentScanner()
    arguments: list[str] = []
    has_array = False
    in_array = False
    arg_start = start + len(LOCALIZE_CALL)

    for index in range(arg_start, len(code)):
        char = code[index]
        if not scanner.feed(char):
            continue

        depth = scanner.depth
        if char in _OPENERS:
            # Only a "[" directly after the key opens the parameter array
            if depth == 1 and char == "[" and _opens_array(arguments, code[arg_start:index]):
                has_array = in_array = True
                arg_start = index + 1
            scanner.open(char)
        elif char == ",":
            if depth == 1 or (depth == 2 and in_array):
                _append(arguments, code[arg_start:index])
                arg_start = index + 1
        else:
            if depth == 2 and char == "]" and in_array:
                _append(arguments, code[arg_start:index])
                arg_start = index + 1
                in_array = False
            if not scanner.close(char):
                raise MalformedBundleError(ErrorTemplate.marker_unbalanced(code, start), start)
            if scanner.depth == 0:
                _append(arguments, code[arg_start:index])
                if not arguments:
                    diagnostic = ErrorTemplate.marker_no_arguments(LOCALIZE_MARKER, code, start)
                    raise MalformedBundleError(diagnostic, start)
                key = _parse_key(arguments[0], code, start)
                parameters = tuple(arguments[1:])
                return ScannedCall(
                    start=start,
                    end=index + 1,
                    key=key,
                    parameters=parameters,
                    has_parameter_list=has_array or bool(parameters),
                )

    raise MalformedBundleError(ErrorTemplate.marker_unbalanced(code, start), start)
