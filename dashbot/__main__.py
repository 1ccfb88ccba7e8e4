"""Entry point: ``python -m dashbot``."""

import asyncio

from dashbot.app import main


def run() -> None:
    asyncio.run(main())


if __name__ == "__main__":
    run()
