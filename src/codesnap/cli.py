# src/codesnap/cli.py
import sys
import argparse
import os
from dataclasses import replace
from pathlib import Path

from colorama import just_fix_windows_console

from codesnap.config import COMMAND_TIMEOUT, IGNORE_FILE_NAME, SnapshotConfig
from codesnap.core.document import assemble_document, compute_stats, format_summary
from codesnap.core.ignore import load_exclusions
from codesnap.core.scanner import ProjectScanner
from codesnap.core.tree import parse_tree_summary, run_tree_command
from codesnap.delivery.clipboard import FileSink, default_sinks, deliver
from codesnap.errors import InvalidRootError
from codesnap.utils.tokenizer import Tokenizer


def create_arg_parser():
    parser = argparse.ArgumentParser(
        prog="codesnap",
        description="Copy a snapshot of a codebase (tree + file contents) to the clipboard, ready to paste into a prompt."
    )
    parser.add_argument("root_dir", type=str, nargs="?", default=os.getcwd(), help="Project root directory")
    parser.add_argument(
        "-o", "--output",
        type=str,
        default=None,
        help="Write the snapshot to this file instead of the clipboard"
    )
    parser.add_argument(
        "--ignore-file",
        type=str,
        default=IGNORE_FILE_NAME,
        help=f"Ignore file at the project root (default: {IGNORE_FILE_NAME})"
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=COMMAND_TIMEOUT,
        help=f"Seconds to wait for external commands (default: {COMMAND_TIMEOUT:g})"
    )
    return parser


def run(root_dir: Path, config: SnapshotConfig, sinks) -> str:
    """Builds and delivers one snapshot, returning the summary line."""
    if not root_dir.is_dir():
        raise InvalidRootError(f"Invalid directory '{root_dir}'")

    exclusions = load_exclusions(root_dir, config)

    tree_text = run_tree_command(root_dir, exclusions, timeout=config.command_timeout)
    tree_summary = parse_tree_summary(tree_text)

    result = ProjectScanner(root_dir, exclusions, config).run()

    document = assemble_document(tree_text, result)
    stats = compute_stats(document, tree_text, result, config.char_limit)

    deliver(document, sinks)

    tokens = Tokenizer.count(document, timeout=config.command_timeout)
    return format_summary(tree_summary, result, stats, tokens, config.char_limit)


def main():
    just_fix_windows_console()
    try:
        parser = create_arg_parser()
        args = parser.parse_args()

        root_dir = Path(args.root_dir).resolve()
        config = replace(
            SnapshotConfig(),
            ignore_file_name=args.ignore_file,
            command_timeout=args.timeout,
        )

        if args.output:
            output_file = Path(args.output).resolve()
            # Never snapshot a previous snapshot.
            config = replace(config, builtin_excludes=config.builtin_excludes + (output_file.name,))
            sinks = [FileSink(output_file)]
        else:
            sinks = default_sinks(timeout=config.command_timeout)

        print(run(root_dir, config, sinks))

    except KeyboardInterrupt:
        print("\nCancelled.", file=sys.stderr)
        sys.exit(1)

    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
