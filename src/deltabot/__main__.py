from __future__ import annotations

import asyncio

from dotenv import load_dotenv

from .bot import DeltaBot
from .config import load_settings
from .logging_setup import setup_logging


def main() -> None:
    load_dotenv()
    settings = load_settings()
    setup_logging(settings.log_level)

    bot = DeltaBot(settings)
    asyncio.run(bot.start())


if __name__ == "__main__":
    main()
