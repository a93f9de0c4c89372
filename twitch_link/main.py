from __future__ import annotations

import argparse
import asyncio
import json
import logging
import os
import sys

from dotenv import load_dotenv

from .api.resolver import BatchResult, TwitchLink
from .models import ContentKind, ManifestEntry
from .utils.errors import NotFoundError, TwitchLinkError
from .utils.http_client import DEFAULT_CLIENT_ID

load_dotenv()

DEFAULT_TIMEOUT = 10

KIND_BY_COMMAND = {
    "stream": ContentKind.LIVE,
    "video": ContentKind.ARCHIVED,
}


def _env_str(name: str) -> str | None:
    value = os.getenv(name)
    if value is None or value == "":
        return None
    return value


def _env_int(name: str) -> int | None:
    value = _env_str(name)
    if value is None:
        return None
    try:
        return int(value)
    except ValueError:
        return None


def _env_bool(name: str) -> bool:
    value = _env_str(name)
    if value is None:
        return False
    return value.strip().lower() in {"1", "true", "yes", "on"}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Resolve Twitch channels or videos into playable m3u8 URLs.")
    parser.add_argument("command", choices=sorted(KIND_BY_COMMAND), help="'stream' for live channels, 'video' for VODs")
    parser.add_argument("identifiers", nargs="+", help="Channel logins (stream) or video ids (video)")
    parser.add_argument(
        "--client-id",
        default=_env_str("TWITCH_CLIENT_ID") or DEFAULT_CLIENT_ID,
        help="Client-ID header sent to the GQL endpoint",
    )
    env_timeout = _env_int("TWITCH_TIMEOUT")
    parser.add_argument(
        "--timeout",
        type=int,
        default=DEFAULT_TIMEOUT if env_timeout is None else env_timeout,
        help="Per-request timeout in seconds",
    )
    parser.add_argument("--json", action="store_true", default=_env_bool("JSON_OUTPUT"), help="Print results as JSON on stdout")
    parser.add_argument("--verbose", action="store_true", default=_env_bool("VERBOSE"), help="Enable debug logging")
    return parser


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.timeout <= 0:
        parser.error(f"--timeout must be a positive number of seconds, got {args.timeout}")
    return args


def configure_logging(verbose: bool = False) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(message)s",
    )


def print_entries(identifier: str, entries: list[ManifestEntry]) -> None:
    if not entries:
        logging.info("%s: no renditions listed.", identifier)
        return
    logging.info("%s", identifier)
    logging.info("%-50s | %-60s | %s", "Quality", "Resolution", "URL")
    logging.info("%s", "-" * 140)
    for entry in entries:
        logging.info("%-50s | %-60s | %s", entry.quality, entry.resolution, entry.url)


def report_failure(identifier: str, exc: Exception) -> None:
    if isinstance(exc, NotFoundError):
        logging.warning("%s: not found (transcode doesn't exist or stream is offline)", identifier)
    else:
        logging.error("%s: %s", identifier, exc)


def resolve_all(args: argparse.Namespace) -> BatchResult:
    kind = KIND_BY_COMMAND[args.command]
    identifiers = list(dict.fromkeys(args.identifiers))

    if len(identifiers) == 1:
        identifier = identifiers[0]
        with TwitchLink(client_id=args.client_id, timeout=args.timeout) as link:
            try:
                if kind is ContentKind.LIVE:
                    return {identifier: link.resolve_stream(identifier)}
                return {identifier: link.resolve_video(identifier)}
            except TwitchLinkError as exc:
                return {identifier: exc}

    async def _run() -> BatchResult:
        async with TwitchLink(client_id=args.client_id, timeout=args.timeout) as link:
            return await link.resolve_many_async(identifiers, kind)

    return asyncio.run(_run())


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    configure_logging(args.verbose)

    results = resolve_all(args)
    failed = False
    document: dict[str, object] = {}
    for identifier, result in results.items():
        if isinstance(result, Exception):
            failed = True
            report_failure(identifier, result)
            document[identifier] = {"error": type(result).__name__, "message": str(result)}
            continue
        if args.json:
            document[identifier] = [entry.model_dump() for entry in result]
        else:
            print_entries(identifier, result)

    if args.json:
        json.dump(document, sys.stdout, ensure_ascii=False, indent=2)
        sys.stdout.write("\n")
    return 1 if failed else 0


if __name__ == "__main__":
    sys.exit(main())
