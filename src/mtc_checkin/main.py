from __future__ import annotations

import argparse
import asyncio
import importlib
import json
import logging
from typing import Optional, Sequence

from dotenv import load_dotenv

from .checkin.flow import CheckInFlow
from .checkin.view import status_view
from .config import get_settings_module
from .container import build_container
from .core.exceptions import DomainError
from .location.replay_provider import ReplayGeolocationProvider, load_track
from .session.store import JsonFileSessionStore

logger = logging.getLogger("mtc_checkin")


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=getattr(logging, str(level).upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


async def run_checkin(flow: CheckInFlow, *, duration_s: float, submit: bool, poll_s: float = 1.0) -> dict:
    async with flow:
        loop = asyncio.get_running_loop()
        deadline = loop.time() + duration_s
        while loop.time() < deadline:
            await asyncio.sleep(poll_s)
            view = status_view(flow)
            logger.info(
                "%s | %s | %s",
                view["location_status"] or "locating...",
                f"{view['distance_m']} m" if view["distance_m"] is not None else "-",
                view["attendance"],
            )
            if submit and flow.can_submit:
                result = await flow.submit()
                logger.info("submit: %s %s", result.outcome.value, result.message)
                break
        return status_view(flow)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="mtc-checkin", description="Location-verified attendance check-in")
    parser.add_argument("--session", required=True, help="JSON file with the stored userData/guestData object")
    parser.add_argument("--track", help="recorded position track (JSON); omit to run without device positioning")
    parser.add_argument("--duration", type=float, default=30.0, help="seconds to keep positioning (default 30)")
    parser.add_argument("--submit", action="store_true", help="mark attendance as soon as it is allowed")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    load_dotenv(override=False)
    args = build_parser().parse_args(argv)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))
    if getattr(settings, "DEBUG", False):
        logger.debug("settings=%s api=%s", settings_module, settings.API_BASE_URL)

    provider = None
    try:
        session = JsonFileSessionStore(args.session).load()
        if args.track:
            provider = ReplayGeolocationProvider(load_track(args.track))
        container = build_container(settings=settings, session=session, provider=provider)
    except (DomainError, OSError, ValueError) as e:
        logger.error("%s", e)
        return 2

    try:
        view = asyncio.run(run_checkin(container.checkin_flow, duration_s=args.duration, submit=args.submit))
    finally:
        if provider is not None:
            provider.close()

    print(json.dumps(view, indent=2))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
