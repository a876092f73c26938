import argparse
import json
import os
import sys

from compiler import analyze_source, compile_source, read_source, set_verbose
from fluxel_plugin.config import CONFIG_FILE, load_config, write_default_config
from fluxel_plugin.errors import FluxelCompileError

BUILD_DIR = "__fluxel_build__"
SOURCE_EXTENSIONS = (".js", ".jsx", ".ts", ".tsx")

def log(message):
    """Log informational messages to stderr."""
    print(f"\033[92m\033[1mINFO:\033[0m {message}", file=sys.stderr)

def fail(message):
    print(f"Error: {message}", file=sys.stderr)
    sys.exit(1)

def collect_sources(source):
    """A single file, or every JS/TS file below a directory (sorted)."""
    if os.path.isfile(source):
        return [(source, os.path.basename(source))]

    sources = []
    for root, dirs, files in os.walk(source):
        dirs[:] = sorted(d for d in dirs if d != BUILD_DIR and not d.startswith("."))
        for name in sorted(files):
            if name.endswith(SOURCE_EXTENSIONS):
                path = os.path.join(root, name)
                sources.append((path, os.path.relpath(path, source)))
    return sources

def cmd_build(args):
    try:
        config = load_config(args.config)
    except FluxelCompileError as e:
        fail(f"Configuration Failed:\n{e}")

    if args.source == "-":
        # stdin -> stdout
        try:
            sys.stdout.write(compile_source("<stdin>", sys.stdin.read(), config))
        except FluxelCompileError as e:
            fail(f"Compilation Failed:\n{e}")
        except UnicodeDecodeError:
            fail("Standard input is not valid UTF-8.")
        return

    if not os.path.exists(args.source):
        fail(f"File '{args.source}' not found.")

    sources = collect_sources(args.source)
    if not sources:
        fail(f"No {'/'.join(SOURCE_EXTENSIONS)} files found in '{args.source}'.")

    output_dir = args.output or BUILD_DIR
    for path, relative in sources:
        try:
            code = compile_source(path, config=config)
        except FluxelCompileError as e:
            fail(f"Compilation of {path} Failed:\n{e}")

        target_file = os.path.join(output_dir, relative)
        os.makedirs(os.path.dirname(target_file) or ".", exist_ok=True)
        with open(target_file, "w", encoding="utf-8") as f:
            f.write(code)
        log(f"{path} -> {target_file}")

    log(f"Built {len(sources)} file(s) into {output_dir}/")

def cmd_check(args):
    if not os.path.isfile(args.filename):
        fail(f"File '{args.filename}' not found.")

    try:
        config = load_config(args.config)
        plan = analyze_source(read_source(args.filename), config, args.filename)
    except FluxelCompileError as e:
        fail(f"Check Failed:\n{e}")

    if args.json:
        print(json.dumps({"filename": args.filename, "element": plan}, indent=2))
    elif plan is None:
        print(f"{args.filename}: no eligible default export, left unchanged")
    else:
        print(f"{args.filename}: {plan['component']} -> <{plan['tag_name']}> ({plan['class_name']})")

def cmd_init(args):
    if os.path.exists(CONFIG_FILE):
        log(f"{CONFIG_FILE} already exists, leaving it untouched.")
        return
    write_default_config(CONFIG_FILE)
    log(f"Wrote default configuration to {CONFIG_FILE}")

def main(argv=None):
    parser = argparse.ArgumentParser(description="Fluxel CLI - turn default-exported components into custom elements")
    parser.add_argument("--verbose", action="store_true", help="Enable verbose output (sent to stderr)")
    subparsers = parser.add_subparsers(dest="command")

    build = subparsers.add_parser("build", help="Elementize a file or directory")
    build.add_argument("source", help="Source file, directory, or - for stdin")
    build.add_argument("--output", help=f"Output directory (default: {BUILD_DIR})")
    build.add_argument("--config", help=f"Configuration file (default: ./{CONFIG_FILE} or ~/.fluxel/{CONFIG_FILE})")

    check = subparsers.add_parser("check", help="Show the element a file would produce")
    check.add_argument("filename")
    check.add_argument("--json", action="store_true", help="Print the result as JSON")
    check.add_argument("--config", help="Configuration file")

    subparsers.add_parser("init", help=f"Write a default {CONFIG_FILE}")

    args = parser.parse_args(argv)
    set_verbose(args.verbose)

    if args.command == "build": cmd_build(args)
    elif args.command == "check": cmd_check(args)
    elif args.command == "init": cmd_init(args)
    else: parser.print_help()

if __name__ == "__main__":
    main()
