from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from typing import Optional

import httpx
import uvicorn
from pydantic import ValidationError

from .config import Settings
from .console import run_console
from .gateway import HttpSubmissionGateway
from .web import create_app
from .wizard.machine import SurveyWizard


logger = logging.getLogger(__name__)


async def run_server(settings: Settings) -> None:
    app = create_app(settings)
    config = uvicorn.Config(
        app,
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )
    server = uvicorn.Server(config)
    logger.info("Server listening at http://%s:%s", settings.host, settings.port)
    await server.serve()


async def take_survey(base_url: str, timeout: float) -> bool:
    gateway = HttpSubmissionGateway(base_url, timeout=timeout)
    try:
        survey = await gateway.fetch_survey()
    except httpx.HTTPError as e:
        logger.error("Could not fetch survey from %s: %s", base_url, e)
        return False
    except (ValidationError, json.JSONDecodeError) as e:
        logger.error("Survey from %s is malformed: %s", base_url, e)
        return False
    return await run_console(SurveyWizard(survey, gateway=gateway))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="survey-wizard",
        description="Multi-step survey wizard and its backend",
    )
    # no subcommand means serve
    parser.set_defaults(host=None, port=None)
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    serve_parser = subparsers.add_parser("serve", help="Run the HTTP service")
    serve_parser.add_argument("--host", help="Bind address (default: HOST or 127.0.0.1)")
    serve_parser.add_argument("--port", type=int, help="Port (default: PORT or 4000)")

    take_parser = subparsers.add_parser("take", help="Take the survey in the terminal")
    take_parser.add_argument(
        "--url",
        default="http://127.0.0.1:4000",
        help="Base URL of a running survey service",
    )
    return parser


def main(argv: Optional[list[str]] = None) -> int:
    settings = Settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    args = build_parser().parse_args(argv)
    try:
        if args.command == "take":
            ok = asyncio.run(take_survey(args.url, settings.submit_timeout))
            return 0 if ok else 1
        if args.host:
            settings.host = args.host
        if args.port:
            settings.port = args.port
        asyncio.run(run_server(settings))
    except KeyboardInterrupt:
        pass
    return 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
