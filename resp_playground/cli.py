"""
RESP playground command line.

Usage:
    resp-playground encode SET mykey Hello
    resp-playground decode '+OK\\r\\n'
    resp-playground serve [--host HOST] [--port PORT] [--config FILE]
"""

import argparse
import sys
from typing import List, Optional

from .config import PlaygroundConfig, setup_logging
from .resp_interceptor import RESPInterceptor


def cmd_encode(interceptor: RESPInterceptor, args) -> int:
    view = interceptor.format_request(" ".join(args.command))
    if view.is_empty:
        # Nothing to send
        return 0
    if args.raw and view.error is None:
        print(view.display)
    else:
        print(view.text)
    return 1 if view.error else 0


def cmd_decode(interceptor: RESPInterceptor, args) -> int:
    text = sys.stdin.read() if args.data == "-" else args.data
    view = interceptor.decode_escaped(text)
    print(view.text)
    if view.values:
        print()
        print(view.result)
    return 0 if view.error is None and view.complete else 1


def cmd_serve(config: PlaygroundConfig, args) -> int:
    from .main import launch

    if args.host:
        config.host = args.host
    if args.port:
        config.port = args.port
    if args.share:
        config.share = True
    launch(config)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="resp-playground", description="Interactive RESP encoder and decoder")
    parser.add_argument("--config", "-c", type=str, default=None, help="Config file")
    parser.add_argument("--loglevel", "-l", type=str, default=None,
                        choices=["debug", "info", "warning", "error"],
                        help="Log level")
    sub = parser.add_subparsers(dest="action", required=True)

    encode = sub.add_parser("encode", help="Show the RESP request for a command")
    encode.add_argument("command", nargs="*", help="Command and arguments")
    encode.add_argument("--raw", action="store_true", help="Print only the escaped wire string")

    decode = sub.add_parser("decode", help="Decode RESP bytes written with \\r\\n escapes")
    decode.add_argument("data", help="Escaped RESP text, or - to read stdin")

    serve = sub.add_parser("serve", help="Launch the web UI")
    serve.add_argument("--host", type=str, default=None, help="Host to bind to")
    serve.add_argument("--port", "-p", type=int, default=None, help="Port to listen on")
    serve.add_argument("--share", action="store_true", help="Create a public Gradio link")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)

    config = PlaygroundConfig.from_file(args.config) if args.config else PlaygroundConfig()
    if args.loglevel:
        config.loglevel = args.loglevel
    setup_logging(config.loglevel)

    if args.action == "serve":
        return cmd_serve(config, args)

    interceptor = RESPInterceptor(config.decoder_limits())
    if args.action == "encode":
        return cmd_encode(interceptor, args)
    return cmd_decode(interceptor, args)


if __name__ == "__main__":
    sys.exit(main())
