"""Command-line interface for sending mail and replies through Gmail.

Usage::

    python -m mailer.cli send --to jane@example.com --subject "Hello" \\
        --body-file body.html --attach report.pdf
    python -m mailer.cli reply --message-id 18c2f0a1b2c3d4e5 --body "<p>Thanks!</p>"

Settings (token paths, default sender, templates directory) come from
``mailer.config.Settings``.  The sent message's ids are printed as JSON.
"""

from __future__ import annotations

import argparse
import json
import sys
from collections.abc import Sequence
from pathlib import Path

import structlog

from mailer.config import get_settings, validate_credentials
from mailer.domain.errors import MailerError
from mailer.email.builder import MessageBuilder
from mailer.email.client import GmailClient
from mailer.observability.logging_config import configure_logging

logger = structlog.get_logger()


def parse_header(raw: str) -> tuple[str, str]:
    """Split a ``Name: Value`` argument into a header pair.

    Raises:
        argparse.ArgumentTypeError: If there is no colon or the name is empty.
    """
    name, sep, value = raw.partition(":")
    if not sep or not name.strip():
        raise argparse.ArgumentTypeError(f"Header must look like 'Name: Value', got {raw!r}")
    return name.strip(), value.strip()


def _add_message_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--to", action="append", help="Recipient (repeatable)")
    parser.add_argument("--to-name", help="Display name for a single --to recipient")
    parser.add_argument("--cc", action="append", help="Carbon copy recipient (repeatable)")
    parser.add_argument("--bcc", action="append", help="Blind carbon copy recipient (repeatable)")
    parser.add_argument("--reply-to", action="append", help="Reply-To address (repeatable)")
    parser.add_argument("--from", dest="from_email", help="Sender address")
    parser.add_argument("--from-name", help="Sender display name")
    parser.add_argument("--subject", help="Subject line")

    body = parser.add_mutually_exclusive_group()
    body.add_argument("--body", help="HTML body")
    body.add_argument("--body-file", type=Path, help="File containing the HTML body")
    body.add_argument("--view", help="Template to render as the body")

    parser.add_argument("--data", type=json.loads, default={}, help="JSON context for --view")
    parser.add_argument("--attach", action="append", type=Path, default=[], help="File to attach")
    parser.add_argument("--priority", type=int, help="1 (highest) to 5 (lowest)")
    parser.add_argument(
        "--header",
        action="append",
        type=parse_header,
        default=[],
        help="Extra header as 'Name: Value' (repeatable)",
    )


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser with ``send`` and ``reply`` subcommands.

    Returns:
        A configured :class:`argparse.ArgumentParser`.
    """
    parser = argparse.ArgumentParser(description="Send email through the Gmail API")
    subparsers = parser.add_subparsers(dest="command", required=True)

    send = subparsers.add_parser("send", help="Send a new message")
    _add_message_arguments(send)

    reply = subparsers.add_parser("reply", help="Reply to an existing message")
    reply.add_argument("--message-id", required=True, help="Gmail ID of the message to answer")
    _add_message_arguments(reply)

    return parser


def _single_or_list(values: list[str] | None) -> str | list[str] | None:
    if not values:
        return None
    if len(values) == 1:
        return values[0]
    return values


def apply_arguments(builder: MessageBuilder, args: argparse.Namespace) -> MessageBuilder:
    """Copy parsed command-line options onto ``builder``.

    Options that were not given leave the builder untouched, so reply
    defaults still apply.
    """
    if args.to:
        builder.to(_single_or_list(args.to), args.to_name)
    if args.cc:
        builder.cc(_single_or_list(args.cc))
    if args.bcc:
        builder.bcc(_single_or_list(args.bcc))
    if args.reply_to:
        builder.reply_to_addresses(_single_or_list(args.reply_to))
    if args.from_email:
        builder.from_(args.from_email, args.from_name)
    if args.subject is not None:
        builder.subject(args.subject)

    if args.body is not None:
        builder.body(args.body)
    elif args.body_file is not None:
        builder.body(args.body_file.read_text(encoding="utf-8"))
    elif args.view is not None:
        builder.view(args.view, args.data)

    if args.attach:
        builder.attach(*args.attach)
    if args.priority is not None:
        builder.priority(args.priority)
    for name, value in args.header:
        builder.set_header(name, value)
    return builder


def main(argv: Sequence[str] | None = None) -> int:
    """Parse arguments, send the message, and print the result.

    Returns:
        Process exit code: 0 on success, 1 on a mail error.
    """
    args = build_parser().parse_args(argv)

    settings = get_settings()
    configure_logging(settings.production)
    validate_credentials(settings)

    try:
        client = GmailClient.from_settings(settings)
        if args.command == "reply":
            result = apply_arguments(client.reply_to(args.message_id), args).reply()
        else:
            result = apply_arguments(client.compose(), args).send()
    except MailerError as exc:
        logger.error("cli_send_failed", command=args.command, error=str(exc))
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    print(result.model_dump_json(indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
