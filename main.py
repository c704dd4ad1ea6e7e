#!/usr/bin/env python3
"""
Eliza Chat - Main Entry Point
=============================

This is the main entry point for Eliza Chat. It provides a
command-line interface for chatting with the rule-based responder
and for running its terminal and web front ends.

Usage:
    python main.py --chat              # Chat on stdin/stdout
    python main.py --test "Hello"      # Show the reply to one message
    python main.py --tui               # Start terminal UI
    python main.py --web               # Start web UI
    python main.py --check-rules       # Validate the rule table
    python main.py --help              # Show help
"""

import os
import sys
import argparse
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent))

from core.config import load_config, create_default_config, Config
from core.logging import setup_logging, get_logger, set_log_context, clear_log_context
from core.exceptions import ElizaChatError, UIError

logger = get_logger("main")

PROMPT = "you> "


def parse_args(argv=None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Eliza Chat - rule-based dialogue responder",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python main.py --chat                     Chat in the terminal
  python main.py --test "I am tired"        Reply to a single message
  python main.py --tui                      Start terminal UI
  python main.py --web --port 9000          Start web UI on port 9000
  python main.py --rules my_rules.yaml      Use a custom rule file
  python main.py --export-rules rules.yaml  Write the built-in rules to a file
        """
    )

    mode_group = parser.add_mutually_exclusive_group()
    mode_group.add_argument(
        "--chat",
        action="store_true",
        help="Chat on standard input/output"
    )
    mode_group.add_argument(
        "--test",
        type=str,
        metavar="MESSAGE",
        help="Print the reply to a single message"
    )
    mode_group.add_argument(
        "--tui",
        action="store_true",
        help="Start terminal UI"
    )
    mode_group.add_argument(
        "--web",
        action="store_true",
        help="Start web UI server"
    )
    mode_group.add_argument(
        "--check-rules",
        action="store_true",
        help="Load and validate the configured rule table"
    )
    mode_group.add_argument(
        "--export-rules",
        type=str,
        metavar="PATH",
        help="Write the built-in rule table to PATH (.yaml or .json)"
    )
    mode_group.add_argument(
        "--setup",
        action="store_true",
        help="Create a default configuration directory"
    )

    parser.add_argument(
        "--config",
        type=str,
        metavar="PATH",
        help="Path to configuration file"
    )
    parser.add_argument(
        "--rules",
        type=str,
        metavar="PATH",
        help="Rule file to use instead of the configured one"
    )
    parser.add_argument(
        "--seed",
        type=int,
        help="Seed the reply selection for reproducible output"
    )
    parser.add_argument(
        "--port",
        type=int,
        default=None,
        help="Port for web UI (default: from config, 8080)"
    )
    parser.add_argument(
        "--host",
        type=str,
        default=None,
        help="Host for web UI (default: from config, 127.0.0.1)"
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug mode"
    )

    return parser.parse_args(argv)


def run_chat(config: Config, stdin=None, stdout=None) -> None:
    """Run an interactive chat loop until EOF or 'quit'."""
    from rules.loader import build_matcher
    from services.chat import ChatService

    stdin = stdin or sys.stdin
    stdout = stdout or sys.stdout

    set_log_context(channel="cli")
    service = ChatService(
        build_matcher(config),
        max_input_length=config.ui.max_input_length
    )

    interactive = stdin.isatty()
    if interactive:
        stdout.write("Type a message and press Enter. 'quit' or Ctrl+D exits.\n")

    while True:
        if interactive:
            stdout.write(PROMPT)
            stdout.flush()

        line = stdin.readline()
        if not line:
            break
        if line.strip().lower() in ("quit", "exit"):
            break

        try:
            turn = service.submit(line)
        except UIError as e:
            stdout.write(f"{e.message}\n")
            continue

        stdout.write(f"bot> {turn.bot.text}\n")
        stdout.flush()

    clear_log_context()


def run_test_message(config: Config, message: str) -> None:
    """Reply to one message and show which rule fired."""
    from rules.loader import build_matcher
    from services.chat import ChatService

    service = ChatService(
        build_matcher(config),
        max_input_length=config.ui.max_input_length
    )
    turn = service.submit(message)

    print(f"\nMessage: {turn.user.text}")
    print("-" * 50)
    print(f"  Rule:  {turn.matched_rule or '(default replies)'}")
    print(f"  Reply: {turn.bot.text}")


def run_check_rules(config: Config) -> None:
    """Validate the configured rule table and print a summary."""
    from rules.loader import build_matcher

    matcher = build_matcher(config)

    source = config.responder.rules_file or "built-in"
    print(f"\nRule table: {source}")
    print("-" * 50)
    for position, rule in enumerate(matcher.rules, start=1):
        label = rule.name or "(unnamed)"
        print(f"  {position:>2}. {label:<14} {rule.pattern}  [{len(rule.replies)} replies]")
    print(f"\n  Default replies: {len(matcher.default_replies)}")
    print("✓ Rule table is valid")


def run_export_rules(path: str) -> None:
    """Write the built-in rule table to a file."""
    from rules.loader import default_matcher_config, save_matcher_config

    save_matcher_config(default_matcher_config(), path)
    print(f"✓ Built-in rules written to {path}")


def run_setup() -> None:
    """Create the default configuration directory and rule file."""
    from rules.loader import load_or_create

    config = create_default_config()
    rules_path = Path(config.config_dir) / config.responder.rules_file
    load_or_create(rules_path)

    print(f"✓ Configuration written to {config.config_dir}/config.yaml")
    print(f"✓ Rules written to {rules_path}")


def run_web_ui(config: Config, host: str, port: int, debug: bool) -> None:
    """Run the web UI server."""
    from ui.web.app import run_app

    print(f"\nStarting Web UI on http://{host}:{port}")
    print("Press Ctrl+C to stop\n")

    run_app(host=host, port=port, debug=debug, config=config)


def run_terminal_ui(config: Config) -> None:
    """Run the terminal UI."""
    from ui.terminal.app import run_tui

    run_tui(config=config)


def main(argv=None) -> int:
    """Main entry point."""
    args = parse_args(argv)

    try:
        if args.setup:
            run_setup()
            return 0

        if args.export_rules:
            run_export_rules(args.export_rules)
            return 0

        config = load_config(args.config)

        # Apply command-line overrides
        if args.rules:
            config.responder.rules_file = os.path.abspath(args.rules)
            config.responder.create_rules_file = False
        if args.seed is not None:
            config.responder.random_seed = args.seed
        if args.debug:
            config.debug = True

        # Keep the console quiet while it doubles as the chat transcript
        quiet = args.chat or args.test is not None
        if config.debug:
            log_level = "DEBUG"
        else:
            log_level = "WARNING" if quiet else "INFO"

        setup_logging(
            log_dir=None if quiet else config.log_dir,
            log_level=log_level,
            json_format=config.json_logs,
            console_output=not args.tui
        )

        if args.chat:
            run_chat(config)
        elif args.test is not None:
            run_test_message(config, args.test)
        elif args.tui:
            run_terminal_ui(config)
        elif args.web:
            host = args.host or config.ui.web_host
            port = args.port or config.ui.web_port
            run_web_ui(config, host, port, config.debug)
        elif args.check_rules:
            run_check_rules(config)
        else:
            run_check_rules(config)
            print("\nNo mode specified. Use --chat, --tui, --web, or --help")

        return 0

    except ElizaChatError as e:
        print(f"\nError: {e}")
        return 1
    except KeyboardInterrupt:
        print("\nInterrupted")
        return 0
    except Exception as e:
        print(f"\nUnexpected error: {e}")
        if args.debug:
            import traceback
            traceback.print_exc()
        return 1


if __name__ == "__main__":
    sys.exit(main())
