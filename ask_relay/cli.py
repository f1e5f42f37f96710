"""Command line entry points for the relay."""

import argparse
import json
import sys

from ask_relay.core.errors import RelayError
from ask_relay.core.logging import configure_logging
from ask_relay.core.relay import RelayService
from ask_relay.core.settings import Settings, SettingsError
from ask_relay.main import run


def _ask(question: str) -> int:
    try:
        settings = Settings.from_env()
    except SettingsError as exc:
        raise SystemExit(f"Cannot start relay: {exc}") from exc
    configure_logging(settings.LOG_LEVEL)

    try:
        resp = RelayService(settings).handle_ask(question)
    except RelayError as exc:
        print(f"error: {exc.detail}", file=sys.stderr)
        return 1
    except Exception as exc:
        print(f"error: {str(exc) or type(exc).__name__}", file=sys.stderr)
        return 1
    print(json.dumps(resp.model_dump(), indent=2, ensure_ascii=False))
    return 0


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Knowledge Ask Relay")
    subparsers = parser.add_subparsers(dest="command")

    serve_parser = subparsers.add_parser("serve", help="Run the relay server")
    serve_parser.add_argument("--host", default=None, help="Host to bind (default: $HOST or 0.0.0.0)")
    serve_parser.add_argument("-p", "--port", type=int, default=None,
                              help="Port to run on (default: $PORT or 8000)")

    ask_parser = subparsers.add_parser("ask", help="Ask one question without starting a server")
    ask_parser.add_argument("question", help="Your question")

    args = parser.parse_args(argv)

    if args.command == "serve":
        run(args.host, args.port)
        return 0
    if args.command == "ask":
        return _ask(args.question)

    parser.print_help()
    return 2


if __name__ == "__main__":
    raise SystemExit(main())
