"""
Unit tests for fluxel_plugin/errors.py.
"""
from fluxel_plugin.errors import (
    FluxelCompileError,
    FluxelConfigError,
    FluxelSyntaxError,
    detect_common_error_patterns,
    get_line_context,
)


class TestFluxelCompileError:
    """Tests for the formatted error report."""

    def test_full_report(self):
        error = FluxelCompileError(
            message="Unexpected ')'",
            filename='src/card.tsx',
            line_number=3,
            column=7,
            context='foo())',
            suggestion='Check syntax around this line',
        )
        text = str(error)
        assert 'Fluxel: cannot compile src/card.tsx:3:7\n' in text
        assert "Unexpected ')'" in text
        assert '> foo())' in text
        assert 'Check syntax around this line' in text

    def test_message_only(self):
        text = str(FluxelCompileError(message='Cannot read x.js', filename='x.js'))
        assert 'cannot compile x.js\n' in text
        assert '>' not in text

    def test_without_filename(self):
        error = FluxelCompileError(message='Unexpected end of input', line_number=2)
        assert error.location() == '<input>:2'

    def test_syntax_and_config_errors_are_compile_errors(self):
        assert issubclass(FluxelSyntaxError, FluxelCompileError)
        assert issubclass(FluxelConfigError, FluxelCompileError)


class TestGetLineContext:

    def test_line(self):
        assert get_line_context('a\n  b  \nc', 2) == 'b'

    def test_out_of_range(self):
        assert get_line_context('a', 5) is None

    def test_no_line(self):
        assert get_line_context('a', None) is None


class TestDetectCommonErrorPatterns:
    """Tests for syntax error hints."""

    def test_unmatched_braces(self):
        suggestion, error_type = detect_common_error_patterns('function f() {\n')
        assert error_type == 'unmatched_braces'
        assert "1 '{' but 0 '}'" in suggestion

    def test_unmatched_parens(self):
        _, error_type = detect_common_error_patterns('f(1))')
        assert error_type == 'unmatched_parens'

    def test_unmatched_brackets(self):
        _, error_type = detect_common_error_patterns('const a = [1, 2\n')
        assert error_type == 'unmatched_brackets'

    def test_unterminated_template(self):
        _, error_type = detect_common_error_patterns('const s = `abc\n')
        assert error_type == 'unterminated_template'

    def test_empty_default_export(self):
        _, error_type = detect_common_error_patterns('export default;\nconst a = 1\n')
        assert error_type == 'empty_default_export'

    def test_empty_default_export_at_end_of_line(self):
        _, error_type = detect_common_error_patterns('export default\n')
        assert error_type == 'empty_default_export'

    def test_valid_source(self):
        assert detect_common_error_patterns('export default function App() {}\n') == (None, None)
