"""Command-line interface for sharpdoc.

This module provides the main entry point for running sharpdoc from the
command line. It uses argparse to handle subcommands and configuration.
"""

import argparse
import json
import logging
import sys
from pathlib import Path

from . import __version__
from .analysis.analyzer import DocumentationAnalyzer
from .analysis.documenter import Documenter
from .claude.claude_client import ClaudeClient
from .claude.doc_generator import ClaudeDocGenerator
from .claude.prompt_builder import PromptBuilder
from .generation.coordinator import FAILURE_POLICIES
from .parsers.csharp_parser import CSharpParser
from .utils.settings import DEFAULT_CONFIG_FILE, Settings, load_settings
from .writer.output_writer import OutputWriter

logger = logging.getLogger(__name__)

# Documented when the configured input file does not exist.
EXAMPLE_SOURCE = """
using System;
namespace DemoApp
{
    public class Calculator
    {
        public int Add(int a, int b)
        {
            return a + b;
        }

        /// <summary>
        /// Existing documentation should be ignored.
        /// </summary>
        public void PrintResult(int result)
        {
            Console.WriteLine(result);
        }

        public double Divide(double a, double b) => a / b;
    }
}"""


def format_json(result) -> str:
    """Format analysis result as JSON.

    Args:
        result: AnalysisResult object to format.

    Returns:
        JSON string representation.
    """
    return json.dumps(result.to_dict(), indent=2)


def format_summary(result) -> str:
    """Format analysis result as human-readable summary.

    Args:
        result: AnalysisResult object to format.

    Returns:
        Formatted summary string.
    """
    lines = []
    lines.append("=" * 60)
    lines.append("Documentation Coverage Analysis")
    lines.append("=" * 60)
    lines.append("")
    lines.append(
        f"Overall Coverage: {result.coverage_percent:.1f}% "
        f"({result.documented_items}/{result.total_items} items)"
    )
    lines.append("")

    undocumented = result.get_undocumented_items()
    if undocumented:
        lines.append("Undocumented Declarations:")
        lines.append("-" * 60)
        lines.extend(
            f"  {item.type:6s} {item.name:40s} ({item.filepath}:{item.line_number})"
            for item in undocumented
        )
        lines.append("")

    if result.parse_failures:
        lines.append("Parse Failures:")
        lines.append("-" * 60)
        lines.extend(
            f"  {failure.filepath}: {failure.error}"
            for failure in result.parse_failures
        )
        lines.append("")

    lines.append("=" * 60)
    return "\n".join(lines)


def apply_overrides(settings: Settings, args: argparse.Namespace) -> Settings:
    """Apply command-line flags on top of file and environment settings."""
    if args.input:
        settings.input_file = args.input
    if args.output:
        settings.output_file = args.output
    if args.model:
        settings.model = args.model
    if args.max_concurrency is not None:
        settings.max_concurrency = args.max_concurrency
    if args.timeout is not None:
        settings.timeout = args.timeout
    if args.failure_policy:
        settings.failure_policy = args.failure_policy
    if args.tone:
        settings.tone = args.tone
    return settings


def create_documenter(settings: Settings) -> Documenter:
    """Create a Documenter wired to Claude from validated settings.

    Args:
        settings: Validated settings.

    Returns:
        Documenter: Configured pipeline instance.
    """
    client = ClaudeClient(
        api_key=settings.api_key,
        model=settings.model,
        base_url=settings.endpoint,
    )
    generator = ClaudeDocGenerator(client, PromptBuilder(tone=settings.tone))
    return Documenter(
        parser=CSharpParser(),
        generator=generator,
        max_concurrency=settings.max_concurrency,
        timeout=settings.timeout,
        failure_policy=settings.failure_policy,
    )


def cmd_generate(
    args: argparse.Namespace,
    settings: Settings,
    documenter: Documenter,
    writer: OutputWriter,
) -> int:
    """Handle the generate subcommand.

    Args:
        args: Parsed command-line arguments.
        settings: Validated settings.
        documenter: Documentation pipeline (dependency injection).
        writer: Output writer (dependency injection).

    Returns:
        Exit code (0 for success, 1 for error).
    """
    input_path = Path(settings.input_file)
    if input_path.is_file():
        print(f"Reading code from {input_path}...")
        with input_path.open(encoding="utf-8", newline="") as f:
            source = f.read()
    else:
        print(f"File {input_path} not found. Using example code...")
        source = EXAMPLE_SOURCE

    print("\n--- Analyzing Code ---")
    try:
        result = documenter.add_documentation(source)
    except SyntaxError as e:
        print(f"Error: Failed to parse {input_path}: {e}", file=sys.stderr)
        return 1
    except RuntimeError:
        logger.exception("Rewriting failed; writing the original source unchanged")
        writer.write(settings.output_file, source)
        return 1

    if result.targets:
        print(
            f"Documented {len(result.generated)} of {len(result.targets)} "
            f"undocumented items."
        )
        for failure in result.failures:
            print(f"  ✗ {failure.name}: {failure.error}")

    try:
        output_path = writer.write(settings.output_file, result.text)
    except OSError as e:
        print(f"Error: Failed to write {settings.output_file}: {e}", file=sys.stderr)
        return 1

    print(f"\n--- Generated Code written to {output_path} ---\n")
    print(result.text)
    return 0


def cmd_analyze(args: argparse.Namespace, analyzer: DocumentationAnalyzer) -> int:
    """Handle the analyze subcommand.

    Args:
        args: Parsed command-line arguments.
        analyzer: Coverage analyzer (dependency injection).

    Returns:
        Exit code (0 for success, 1 for error).
    """
    try:
        if args.verbose:
            print(f"Analyzing: {args.path}", file=sys.stderr)

        result = analyzer.analyze(args.path, verbose=args.verbose, strict=args.strict)

        if args.format == "json":
            output = format_json(result)
        else:  # summary
            output = format_summary(result)

        print(output)
        return 0

    except FileNotFoundError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        if args.verbose:
            import traceback

            traceback.print_exc(file=sys.stderr)
        return 1


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser with all subcommands."""
    parser = argparse.ArgumentParser(
        prog="sharpdoc",
        description="Generate missing XML documentation comments for C# code",
    )

    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Generate command
    generate_parser = subparsers.add_parser(
        "generate", help="Add generated documentation to undocumented declarations"
    )
    generate_parser.add_argument(
        "--config",
        default=DEFAULT_CONFIG_FILE,
        help=f"Path to JSON configuration file (default: {DEFAULT_CONFIG_FILE})",
    )
    generate_parser.add_argument("--input", help="C# file to document")
    generate_parser.add_argument("--output", help="Where to write the documented file")
    generate_parser.add_argument("--model", help="Claude model to use")
    generate_parser.add_argument(
        "--max-concurrency",
        type=int,
        help="Maximum generation requests in flight (default: 3)",
    )
    generate_parser.add_argument(
        "--timeout",
        type=float,
        help="Overall generation time limit in seconds (default: none)",
    )
    generate_parser.add_argument(
        "--failure-policy",
        choices=list(FAILURE_POLICIES),
        help="What to insert when generation fails (default: drop)",
    )
    generate_parser.add_argument(
        "--tone",
        choices=list(PromptBuilder.TONE_DESCRIPTIONS),
        help="Documentation tone (default: concise)",
    )
    generate_parser.add_argument(
        "--verbose", action="store_true", help="Enable verbose output"
    )

    # Analyze command
    analyze_parser = subparsers.add_parser(
        "analyze", help="Report documentation coverage of C# files"
    )
    analyze_parser.add_argument("path", help="Path to file or directory to analyze")
    analyze_parser.add_argument(
        "--format",
        choices=["json", "summary"],
        default="summary",
        help="Output format (default: summary)",
    )
    analyze_parser.add_argument(
        "--verbose", action="store_true", help="Enable verbose output"
    )
    analyze_parser.add_argument(
        "--strict",
        action="store_true",
        help="Fail immediately on first parse error",
    )

    return parser


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the CLI.

    Args:
        argv: Command-line arguments (defaults to sys.argv).

    Returns:
        Exit code (0 for success, 1 for error).
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    if args.command == "generate":
        logging.basicConfig(
            level=logging.DEBUG if args.verbose else logging.INFO,
            format="%(message)s",
            stream=sys.stderr,
        )
        try:
            settings = apply_overrides(load_settings(args.config), args)
            settings.validate()
        except ValueError as e:
            print(f"Error: {e}", file=sys.stderr)
            return 1
        documenter = create_documenter(settings)
        return cmd_generate(args, settings, documenter, OutputWriter())
    elif args.command == "analyze":
        logging.basicConfig(
            level=logging.DEBUG if args.verbose else logging.WARNING,
            format="%(levelname)s: %(message)s",
            stream=sys.stderr,
        )
        analyzer = DocumentationAnalyzer(parser=CSharpParser())
        return cmd_analyze(args, analyzer)

    return 1


if __name__ == "__main__":
    sys.exit(main())
