"""One-Shot Forge — dev launcher.

Starts the API server in watch mode, or with --generate runs a single
generation against the live services and prints the one-shot as JSON.
"""

import argparse
import asyncio
import logging
import os
import subprocess
import sys
from pathlib import Path

from dotenv import load_dotenv

ROOT = Path(__file__).parent
load_dotenv(ROOT / ".env")

HOST = os.getenv("HOST", "0.0.0.0")
PORT = os.getenv("PORT", "3000")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")


async def _generate_once(party_size: int, level: int, environment: str) -> str:
    from oneshot_forge.bestiary import BestiaryClient
    from oneshot_forge.config import load_settings
    from oneshot_forge.endpoint import generate_oneshot
    from oneshot_forge.loot import LootClient

    settings = load_settings()
    oneshot = await generate_oneshot(
        {"partySize": party_size, "averageLevel": level, "environment": environment},
        bestiary=BestiaryClient(settings.bestiary_url, timeout=settings.http_timeout),
        loot=LootClient(settings.loot_url, page_size=settings.loot_page_size,
                        timeout=settings.http_timeout),
        sample_size=settings.sample_size,
    )
    return oneshot.model_dump_json(by_alias=True, indent=2)


def main():
    parser = argparse.ArgumentParser(description="One-Shot Forge dev launcher")
    parser.add_argument("--generate", action="store_true",
                        help="Generate one one-shot, print it as JSON and exit")
    parser.add_argument("--party-size", type=int, default=4)
    parser.add_argument("--level", type=int, default=3,
                        help="Average party level")
    parser.add_argument("--environment", default="forest")
    args = parser.parse_args()

    logging.basicConfig(
        level=LOG_LEVEL.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.generate:
        from oneshot_forge.errors import OneShotError

        try:
            print(asyncio.run(_generate_once(args.party_size, args.level, args.environment)))
        except OneShotError as e:
            print(f"error: {e}", file=sys.stderr)
            sys.exit(1)
        return

    print(f"Starting backend on http://localhost:{PORT} ...")
    proc = subprocess.Popen(
        ["uvicorn", "backend.app:app", "--reload", "--host", HOST, "--port", PORT],
        cwd=ROOT,
    )
    try:
        proc.wait()
    except KeyboardInterrupt:
        print("\nShutting down...")
        proc.terminate()
        proc.wait()


if __name__ == "__main__":
    main()
