from __future__ import annotations

import argparse
from http import HTTPStatus

from sdetech_sms.config import get_settings
from sdetech_sms.service import ShortMessageService


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Exercise the SDE Tech SMS gateway.")
    sub = parser.add_subparsers(dest="command", required=True)

    send = sub.add_parser("send", help="send one message")
    send.add_argument("to", type=str)
    send.add_argument("from_", metavar="from", type=str)
    send.add_argument("message", type=str)
    send.add_argument("--reference", type=str, default=None)

    cell = sub.add_parser("cell", help="check whether a number is a cell phone")
    cell.add_argument("digits", type=str)
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    settings = get_settings()

    def show_entry(action: str, message: str) -> None:
        print(f"audit: [{action}] {message}")

    def show_status(status: HTTPStatus, message: str) -> None:
        print(f"status: {status.value} {message}")

    with ShortMessageService(
        settings=settings,
        on_post_entry=show_entry,
        on_http_response=show_status,
    ) as service:
        if args.command == "send":
            ok = service.send(
                settings.api_key,
                settings.api_password,
                args.to,
                args.from_,
                args.message,
                args.reference,
                None,
            )
        else:
            ok = service.is_a_cell(settings.api_key, settings.api_password, args.digits)

    print(f"result: {ok}")
    return 0 if ok else 1


if __name__ == "__main__":
    raise SystemExit(main())
