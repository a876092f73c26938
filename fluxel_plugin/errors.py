"""
Error handling utilities for the Fluxel compiler.
"""
import re


class FluxelCompileError(Exception):
    """A file that cannot be elementized: where it failed and how to fix it.

    The report reads like a compiler diagnostic::

        ❌ Fluxel: cannot compile src/card.tsx:3:14
           Unexpected ')'
           > return <p>{count)}</p>
           💡 Unmatched parentheses: found 1 '(' but 2 ')'
    """
    headline = "cannot compile"

    def __init__(self, message, line_number=None, column=None, context=None, suggestion=None, filename=None):
        self.message = message
        self.filename = filename
        self.line_number = line_number
        self.column = column
        self.context = context  # The offending line
        self.suggestion = suggestion  # How to fix it
        super().__init__(self._format_error())

    def location(self):
        """`file:line:column`, as much of it as is known."""
        parts = [self.filename or "<input>"]
        if self.line_number:
            parts.append(str(self.line_number))
            if self.column:
                parts.append(str(self.column))
        return ":".join(parts)

    def _format_error(self):
        lines = [f"\n❌ Fluxel: {self.headline} {self.location()}\n", f"   {self.message}\n"]
        if self.context:
            lines.append(f"   > {self.context}\n")
        if self.suggestion:
            lines.append(f"   💡 {self.suggestion}\n")
        return "".join(lines)


class FluxelSyntaxError(FluxelCompileError):
    """Raised by the module reader for source it cannot parse."""


class FluxelConfigError(FluxelCompileError):
    """Raised for an unreadable or invalid elementizer configuration."""
    headline = "invalid configuration"


def get_line_context(source_code, line_number):
    """Extract the line of code from source by line number (1-based)."""
    if not source_code or line_number is None:
        return None
    source_lines = source_code.split('\n')
    if 0 < line_number <= len(source_lines):
        return source_lines[line_number - 1].strip()
    return None


_PAIRS = [
    ('{', '}', "braces", "unmatched_braces"),
    ('(', ')', "parentheses", "unmatched_parens"),
    ('[', ']', "brackets", "unmatched_brackets"),
]


def detect_common_error_patterns(source_code):
    """Detect common mistakes and return (suggestion, error_type)."""
    # Template literals spanning a stray backtick break every token after them
    if source_code.count('`') % 2:
        return "Unterminated template literal: check for a missing '`'", "unterminated_template"

    for opening, closing, label, error_type in _PAIRS:
        open_count = source_code.count(opening)
        close_count = source_code.count(closing)
        if open_count != close_count:
            return (
                f"Unmatched {label}: found {open_count} '{opening}' but {close_count} '{closing}'",
                error_type,
            )

    if re.search(r'\bexport\s+default[ \t]*(?:;|$)', source_code, re.MULTILINE):
        return "'export default' needs a function, class or expression after it", "empty_default_export"

    return None, None
