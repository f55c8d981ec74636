#!/usr/bin/env python3
"""
PromptIDE CLI - Main Entry Point

Usage:
    promptide                          # Start the interactive workspace
    promptide "build a calculator"     # Run a single prompt
    promptide --local                  # Generate with the built-in templates
    promptide --classifier claude      # Generate with Claude (needs ANTHROPIC_API_KEY)
    promptide --api-url URL            # Use another file store / chat service
"""

import argparse
import asyncio
import sys

from rich.console import Console

from cli.config import CLIConfig


def create_parser() -> argparse.ArgumentParser:
    """Create argument parser for CLI"""
    parser = argparse.ArgumentParser(
        prog="promptide",
        description="PromptIDE - describe an app, get a file tree you can edit",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  promptide                                  Start interactive mode
  promptide "create a landing page"          Generate files and exit
  promptide --local "build a react app"      Generate without the chat service

Slash Commands:
  /tree /toggle /open /edit /save /new /delete /clear /logs /projects /preview /help /quit
        """
    )

    parser.add_argument(
        "prompt",
        nargs="?",
        help="Prompt to execute (starts interactive mode if omitted)"
    )

    parser.add_argument(
        "-p", "--prompt",
        dest="prompt_flag",
        help="Prompt to execute"
    )

    parser.add_argument(
        "--api-url",
        type=str,
        help="File store and chat service URL (default: http://localhost:3000/api)"
    )

    parser.add_argument(
        "--local",
        action="store_true",
        help="Classify prompts with the built-in templates instead of the chat service"
    )

    parser.add_argument(
        "--classifier",
        choices=["remote", "template", "claude"],
        help="How prompts are answered: chat service, built-in templates or Claude (default: remote)"
    )

    parser.add_argument(
        "--project",
        type=str,
        help="Project display name"
    )

    parser.add_argument(
        "--timeout",
        type=float,
        help="Seconds to wait for a generation before giving up"
    )

    parser.add_argument(
        "-y", "--yes",
        action="store_true",
        help="Do not ask for confirmation before deleting files"
    )

    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable verbose output"
    )

    parser.add_argument(
        "--config",
        type=str,
        help="Path to config file"
    )

    parser.add_argument(
        "--version",
        action="version",
        version="%(prog)s 1.0.0"
    )

    return parser


def build_config(args: argparse.Namespace) -> CLIConfig:
    config = CLIConfig.load_default()
    if args.config:
        config.load_from_file(args.config)
    if args.api_url:
        config.api_base_url = args.api_url
    if args.local:
        config.local = True
    if args.classifier:
        config.classifier = args.classifier
    if args.project:
        config.project_name = args.project
    if args.timeout:
        config.timeout = args.timeout
    if args.yes:
        config.non_interactive = True
    if args.verbose:
        config.verbose = True
    return config


def main():
    """Main entry point"""
    parser = create_parser()
    args = parser.parse_args()
    console = Console()

    config = build_config(args)
    prompt = args.prompt or args.prompt_flag

    from cli.app import PromptIDECLI

    try:
        cli = PromptIDECLI(config, console)
        if prompt:
            outcome = asyncio.run(cli.run_single(prompt))
            sys.exit(0 if outcome.ok else 1)
        asyncio.run(cli.run_interactive())

    except KeyboardInterrupt:
        console.print("\n\nGoodbye! 👋")
        sys.exit(0)
    except Exception as e:
        if config.verbose:
            console.print_exception()
        else:
            console.print(f"\n[red]❌ Error: {e}[/red]")
        sys.exit(1)


if __name__ == "__main__":
    main()
