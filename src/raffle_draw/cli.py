from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from .config import Settings
from .import_parser import ImportFormat
from .project_constants import PREVIEW_DISPLAY_LIMIT
from .scheduler import AsyncioScheduler
from .session import RaffleSession
from .sources import TextSourceClient, read_text_file


def setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(level=level, format="%(levelname)s: %(message)s")


def _load_import_text(args: argparse.Namespace) -> Optional[str]:
    if args.file:
        if args.file == "-":
            return sys.stdin.read()
        return read_text_file(args.file)
    if args.url:
        client = TextSourceClient(timeout_s=args.timeout)
        try:
            return client.fetch_text(args.url)
        finally:
            client.close()
    if args.text is not None:
        # Allow literal "\n" so a whole list fits in one shell argument.
        return args.text.replace("\\n", "\n")
    return None


def build_session(args: argparse.Namespace, settings: Settings) -> RaffleSession:
    log = logging.getLogger("session")
    session = RaffleSession(AsyncioScheduler(), settings)

    for name in args.name or []:
        session.add_participant(name)

    text = _load_import_text(args)
    if text is not None:
        session.set_import_format(args.format)
        session.submit_import_text(text)
        log.info("Import preview    : %d candidates", session.import_preview_size)
        session.accept_import()
        if session.last_import_excluded:
            log.info("Skipped duplicates: %d", session.last_import_excluded)

    return session


def cmd_preview(args: argparse.Namespace) -> int:
    settings = Settings.from_env()
    session = RaffleSession(AsyncioScheduler(), settings)

    text = _load_import_text(args)
    if text is None:
        raise SystemExit("Nothing to preview. Pass --file, --url or --text.")

    session.set_import_format(args.format)
    preview = session.submit_import_text(text)

    print(f"Preview ({len(preview)} participants)")
    for p in preview[:PREVIEW_DISPLAY_LIMIT]:
        suffix = f" <{p.email}>" if p.email else ""
        print(f"  {p.name}{suffix}")
    if len(preview) > PREVIEW_DISPLAY_LIMIT:
        print(f"  ... and {len(preview) - PREVIEW_DISPLAY_LIMIT} more")

    session.accept_import()
    print(f"Win chance    : {session.win_chance_percent}%")
    return 0


async def run_draws(session: RaffleSession, rounds: int, show_ticks: bool = True) -> List[Any]:
    loop = asyncio.get_running_loop()
    winners = []

    for _ in range(rounds):
        revealed: asyncio.Future = loop.create_future()

        def on_event(event: str, s: RaffleSession) -> None:
            if event == "tick" and show_ticks and s.current is not None:
                print(f"\r🎲 {s.current.name:<40}", end="", flush=True)
            elif event == "reveal" and not revealed.done():
                revealed.set_result(s.current_winner)

        unsubscribe = session.subscribe(on_event)
        try:
            if not session.start_draw():
                break
            winner = await revealed
        finally:
            unsubscribe()

        if show_ticks:
            print("\r" + " " * 44 + "\r", end="")
        winners.append(winner)
        _print_winner(winner)

    return winners


def _print_winner(winner) -> None:
    p = winner.participant
    print("========================================")
    print("🏆 WINNER")
    print(f"Name          : {p.name}")
    if p.email:
        print(f"Email         : {p.email}")
    print(f"Drawn at      : {winner.timestamp.isoformat()}")
    print("========================================")


def _history_payload(session: RaffleSession) -> Dict[str, Any]:
    return {
        "metadata": {
            "tool": "raffle-draw",
            "generated_at_utc": datetime.now(timezone.utc).isoformat(),
            "participants": len(session.participants),
            "seed": session.settings.seed,
        },
        "history": [
            {
                "id": w.participant.id,
                "name": w.participant.name,
                "email": w.participant.email,
                "timestamp": w.timestamp.isoformat(),
            }
            for w in session.history_entries
        ],
    }


def cmd_draw(args: argparse.Namespace) -> int:
    settings = Settings.from_env(seed_override=args.seed, instant=args.instant)
    log = logging.getLogger("draw")

    session = build_session(args, settings)
    log.info("Participants      : %d", len(session.participants))
    log.info("Win chance        : %d%%", session.win_chance_percent)

    if not session.participants:
        raise SystemExit("No participants. Pass --name, --file, --url or --text.")

    asyncio.run(run_draws(session, args.rounds, show_ticks=not args.quiet))

    recent = session.recent_history()
    print(f"Draw history ({len(session.history_entries)} total)")
    for i, w in enumerate(recent, start=1):
        print(f"  {i:>2}. {w.participant.name}  ({w.timestamp.strftime('%H:%M:%S')})")

    if args.out:
        with open(args.out, "w", encoding="utf-8") as f:
            json.dump(_history_payload(session), f, indent=2)
        print(f"🧾 Wrote history: {args.out}")
    return 0


def _add_source_args(p: argparse.ArgumentParser) -> None:
    src = p.add_mutually_exclusive_group()
    src.add_argument("--file", default=None, help="Participant list (.txt/.csv), '-' for stdin.")
    src.add_argument("--url", default=None, help="URL serving a raw participant list.")
    src.add_argument("--text", default=None, help="Inline list; '\\n' separates lines.")
    p.add_argument(
        "--format",
        choices=[f.value for f in ImportFormat],
        default=ImportFormat.NAMES_ONLY.value,
        help="'names' = one name per line, 'name-email' = name,email per line.",
    )


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="raffle-draw",
        description="Pick random winners from a participant list with a suspenseful reveal.",
    )
    p.add_argument("--verbose", action="store_true", help="Enable debug logging.")
    p.add_argument("--timeout", type=float, default=30.0, help="HTTP timeout seconds for --url.")

    sub = p.add_subparsers(dest="cmd", required=True)

    pre = sub.add_parser("preview", help="Parse a participant list and show what would be imported.")
    _add_source_args(pre)
    pre.set_defaults(func=cmd_preview)

    d = sub.add_parser("draw", help="Import participants and draw winners.")
    _add_source_args(d)
    d.add_argument("--name", action="append", help="Add a participant by name (repeatable).")
    d.add_argument("--rounds", type=int, default=1, help="Number of draws to run.")
    d.add_argument("--seed", type=int, default=None, help="Seed for a reproducible draw.")
    d.add_argument("--instant", action="store_true", help="Skip the animation delays.")
    d.add_argument("--quiet", action="store_true", help="Do not print suspense ticks.")
    d.add_argument("--out", default=None, help="Write draw history JSON to this path.")
    d.set_defaults(func=cmd_draw)

    return p


def main() -> None:
    parser = build_parser()
    args = parser.parse_args()
    setup_logging(args.verbose)
    try:
        code = args.func(args)
    except RuntimeError as e:
        raise SystemExit(str(e))
    raise SystemExit(code)
