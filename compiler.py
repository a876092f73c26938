import sys

from fluxel_plugin.codegen import emit_program
from fluxel_plugin.elementizer import DefaultExportElementizer
from fluxel_plugin.errors import (
    FluxelCompileError,
    FluxelSyntaxError,
    detect_common_error_patterns,
    get_line_context,
)
from fluxel_plugin.parser import parse_module

# Global verbose flag
_VERBOSE = False

def set_verbose(value):
    """Set the global verbose flag."""
    global _VERBOSE
    _VERBOSE = value

def debug_log(message):
    """Log a debug message to stderr if verbose mode is enabled."""
    if _VERBOSE:
        print(f"\033[94mDEBUG:\033[0m {message}", file=sys.stderr)


def parse_source(source_code, filename="<stdin>"):
    """Parse JS/TSX source into a Module, adding the file, offending line and a hint to syntax errors."""
    try:
        return parse_module(source_code)
    except FluxelSyntaxError as e:
        suggestion_text, error_type = detect_common_error_patterns(source_code)
        debug_log(f"Parse failed ({error_type or 'unknown'}): {e.message}")

        # If no specific pattern matched, provide generic hint
        if not suggestion_text:
            suggestion_text = "Check syntax around this line"

        raise FluxelSyntaxError(
            message=e.message,
            filename=filename,
            line_number=e.line_number,
            column=e.column,
            context=get_line_context(source_code, e.line_number),
            suggestion=suggestion_text,
        )


def read_source(file_path):
    """Read a source file, which must be UTF-8."""
    try:
        with open(file_path, "r", encoding="utf-8") as f:
            return f.read()
    except OSError as e:
        raise FluxelCompileError(message=f"Cannot read {file_path}: {e.strerror}", filename=file_path)
    except UnicodeDecodeError as e:
        raise FluxelCompileError(
            message=f"{file_path} is not valid UTF-8 (byte {e.object[e.start]:#04x} at offset {e.start})",
            filename=file_path,
            suggestion="Save the file as UTF-8",
        )


def compile_source(file_path, source_code=None, config=None):
    """Elementize one file and return the resulting JavaScript."""
    if source_code is None:
        source_code = read_source(file_path)

    debug_log(f"Compiling source: {file_path}")
    module = parse_source(source_code, file_path)
    debug_log(f"Parsed {len(module.body)} top-level items")

    elementizer = DefaultExportElementizer(config)
    plan = elementizer.plan(module)
    if plan is None:
        debug_log("No eligible default export, module left unchanged")
        return emit_program(module, source_code)

    debug_log(f"Elementizing {plan.component.name} as <{plan.tag_name}> ({plan.class_name})")
    return emit_program(elementizer.apply(module, plan), source_code)


def analyze_source(source_code, config=None, filename="<stdin>"):
    """Describe the element a module would produce, or None if it would be left unchanged."""
    module = parse_source(source_code, filename)
    plan = DefaultExportElementizer(config).plan(module)
    if plan is None:
        return None
    return plan.as_dict()
