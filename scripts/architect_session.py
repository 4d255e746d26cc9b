#!/usr/bin/env python
"""Terminal front-end: upload a floorplan, show its scores, then chat about it."""

from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from virtual_architect.clients import ArchitectApiClient  # noqa: E402
from virtual_architect.core.config import ClientSettings  # noqa: E402
from virtual_architect.core.logging import configure_logging  # noqa: E402
from virtual_architect.session import (  # noqa: E402
    ConversationPage,
    HistoryNavigator,
    LoggingNarration,
    ResultsView,
    SubmissionPipeline,
    UploadCollector,
    UploadedFile,
)

EXIT_COMMANDS = {"exit", "quit"}


def _print_blocks(role: str, text: str) -> None:
    header = "You" if role == "user" else "Architect"
    print(f"{header}: ")
    for line in text.splitlines():
        print(line)
    print()


def _print_results(view: ResultsView) -> None:
    print(f"Floorplan: {view.image_url}\n")
    for row in view.dimensions():
        print(f"{row.title}: {row.score}/100 [{row.band}]")
        for item in row.feedback:
            print(f"  - {item}")
    print()


async def _chat_loop(page: ConversationPage) -> int:
    _print_blocks("assistant", page.transcript[0].content)
    print("Type 'exit' or 'quit' to end.\n")
    while True:
        try:
            message = await asyncio.to_thread(input, "You: ")
        except (EOFError, KeyboardInterrupt):
            print("\nGoodbye!")
            return 0
        if message.strip().lower() in EXIT_COMMANDS:
            print("Goodbye!")
            return 0
        reply = await page.submit(message)
        if reply is not None:
            _print_blocks("assistant", reply.content)


async def run_session(path: Path, settings: ClientSettings, voice: bool) -> int:
    collector = UploadCollector()
    navigator = HistoryNavigator()
    narration = LoggingNarration() if voice else None

    async with ArchitectApiClient.from_settings(settings) as api:
        collector.select([UploadedFile.from_path(path)])
        pipeline = SubmissionPipeline(
            api,
            collector,
            navigator,
            discard_orphaned_assets=settings.discard_orphaned_assets,
        )
        print(f"Analyzing {path.name} ({collector.file.size_label})...")
        outcome = await pipeline.submit()
        if outcome is None or not outcome.succeeded:
            print(outcome.failure_message if outcome else "Nothing to submit.", file=sys.stderr)
            return 1

        view = ResultsView.from_location(outcome.location)
        if view.message:
            print(view.message, file=sys.stderr)
            return 2

        _print_results(view)
        if narration is not None:
            view.toggle_voice(narration)
        page = view.open_conversation(api, narration=narration)
        return await _chat_loop(page)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Analyze a floorplan and chat with the Virtual Architect."
    )
    parser.add_argument("floorplan", type=Path, help="Image or PDF of the floorplan.")
    parser.add_argument(
        "--api-base-url",
        dest="api_base_url",
        default=None,
        help="Override ARCHITECT_API_BASE_URL for this session.",
    )
    parser.add_argument(
        "--voice",
        action="store_true",
        help="Narrate the summary and assistant replies through the log.",
    )
    parser.add_argument("--log-level", default="WARNING")

    args = parser.parse_args(argv)
    configure_logging(args.log_level)

    if not args.floorplan.is_file():
        print(f"No such file: {args.floorplan}", file=sys.stderr)
        return 2

    settings = ClientSettings()
    if args.api_base_url:
        settings = settings.model_copy(update={"api_base_url": args.api_base_url})
    return asyncio.run(run_session(args.floorplan, settings, args.voice))


if __name__ == "__main__":  # pragma: no cover - CLI entry point
    sys.exit(main())
