"""Verify that the Virtual Architect configuration is complete and usable.

The tool performs three checks:

1. It instantiates ``AppSettings`` from the provided ``.env`` file, surfacing
   a missing ``GEMINI_API_KEY`` or malformed values before the server starts
   failing requests.
2. It confirms the upload directory exists (creating it when needed) and is
   writable, since every store step lands there.
3. It can record and verify a checksum for the ``.env`` file so unexpected
   edits are detected.

Example usages::

    # Validate settings and record the expected checksum.
    python -m scripts.check_env record --env-file /opt/virtual-architect/.env \
        --hash-file /opt/virtual-architect/.env.sha256

    # Run later (e.g. from cron/systemd) to alert on drift.
    python -m scripts.check_env verify --env-file /opt/virtual-architect/.env \
        --hash-file /opt/virtual-architect/.env.sha256

    # Print the effective configuration without touching checksums.
    python -m scripts.check_env check --env-file .env
"""

from __future__ import annotations

import argparse
import hashlib
import sys
import tempfile
from pathlib import Path
from typing import Callable

from pydantic import ValidationError

from virtual_architect.core.config import AppSettings, _load_env_file

EXIT_OK = 0
EXIT_VALIDATION_ERROR = 2
EXIT_CHECKSUM_ERROR = 3
EXIT_STORAGE_ERROR = 4
EXIT_RUNTIME_ERROR = 5


def _compute_hash(env_file: Path) -> str:
    """Return the SHA256 checksum for the target environment file."""
    return hashlib.sha256(env_file.read_bytes()).hexdigest()


def _load_settings(env_file: Path) -> AppSettings:
    """Load settings, letting values from ``env_file`` fill unset variables."""
    _load_env_file(str(env_file))
    return AppSettings()  # type: ignore[call-arg]


def _check_upload_dir(upload_dir: Path) -> None:
    """Raise ``OSError`` when floorplans could not be written to ``upload_dir``."""
    upload_dir.mkdir(parents=True, exist_ok=True)
    with tempfile.NamedTemporaryFile(dir=upload_dir, prefix=".probe-"):
        pass


def _describe(settings: AppSettings) -> str:
    storage = settings.storage
    return "\n".join(
        [
            f"environment:        {settings.environment}",
            f"text model:         {settings.gemini.model_name}",
            f"vision model:       {settings.gemini.vision_model_name}",
            f"upload dir:         {storage.upload_dir}",
            f"public base url:    {storage.public_base_url}",
            f"max upload size:    {storage.max_upload_size_mb}MB",
            f"allowed types:      {', '.join(storage.allowed_media_types)}",
            f"api base url:       {settings.client.api_base_url}",
            f"request attempts:   {settings.client.retry_attempts}",
        ]
    )


def _record_checksum(env_file: Path, hash_file: Path) -> int:
    """Persist the current checksum to ``hash_file``."""
    checksum = _compute_hash(env_file)
    hash_file.write_text(f"{checksum}\n", encoding="utf-8")
    print(f"Recorded checksum to {hash_file} ({checksum})")
    return EXIT_OK


def _verify_checksum(env_file: Path, hash_file: Path) -> int:
    """Compare the current checksum to the recorded baseline."""
    if not hash_file.exists():
        print(
            f"Expected checksum file {hash_file} is missing. "
            "Re-run with the 'record' command to establish a baseline.",
            file=sys.stderr,
        )
        return EXIT_RUNTIME_ERROR

    expected = hash_file.read_text(encoding="utf-8").strip()
    actual = _compute_hash(env_file)
    if expected == actual:
        print("Environment checksum OK.")
        return EXIT_OK

    print(
        "Environment checksum mismatch!\n"
        f"  expected: {expected}\n"
        f"  actual:   {actual}\n"
        "Investigate recent changes before restarting the API.",
        file=sys.stderr,
    )
    return EXIT_CHECKSUM_ERROR


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Validate Virtual Architect settings and detect .env drift."
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    def add_common_arguments(subparser: argparse.ArgumentParser) -> None:
        subparser.add_argument(
            "--env-file",
            default=".env",
            type=Path,
            help="Path to the environment file (default: .env in the repo root).",
        )

    record_parser = subparsers.add_parser(
        "record",
        help="Validate settings and store the checksum baseline.",
    )
    add_common_arguments(record_parser)
    record_parser.add_argument(
        "--hash-file",
        required=True,
        type=Path,
        help="Location to write the checksum baseline.",
    )

    verify_parser = subparsers.add_parser(
        "verify",
        help="Validate settings and compare the checksum with the baseline.",
    )
    add_common_arguments(verify_parser)
    verify_parser.add_argument(
        "--hash-file",
        required=True,
        type=Path,
        help="Location of the previously recorded checksum baseline.",
    )

    check_parser = subparsers.add_parser(
        "check",
        help="Validate settings and print the effective configuration.",
    )
    add_common_arguments(check_parser)

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    env_file: Path = args.env_file
    if not env_file.exists():
        print(
            f"Environment file {env_file} does not exist. "
            "Ensure the path is correct or create it before running this tool.",
            file=sys.stderr,
        )
        return EXIT_RUNTIME_ERROR

    try:
        settings = _load_settings(env_file)
    except ValidationError as exc:
        print(
            "Settings validation failed. Missing or invalid values detected:\n"
            f"{exc.json(indent=2)}",
            file=sys.stderr,
        )
        return EXIT_VALIDATION_ERROR

    try:
        _check_upload_dir(settings.storage.upload_dir)
    except OSError as exc:
        print(
            f"Upload directory {settings.storage.upload_dir} is not writable: {exc}",
            file=sys.stderr,
        )
        return EXIT_STORAGE_ERROR

    command: str = args.command
    handlers: dict[str, Callable[[], int]] = {
        "record": lambda: _record_checksum(env_file, args.hash_file),
        "verify": lambda: _verify_checksum(env_file, args.hash_file),
        "check": lambda: _print_and_succeed(settings),
    }
    return handlers[command]()


def _print_and_succeed(settings: AppSettings) -> int:
    print(_describe(settings))
    return EXIT_OK


if __name__ == "__main__":  # pragma: no cover - script entry point
    sys.exit(main())
