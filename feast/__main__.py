import argparse
import asyncio
import logging
import sys

from rich.console import Console
from rich.logging import RichHandler

from feast.config import Settings
from feast.consumer import ConsoleConsumer
from feast.errors import InvalidQuery, PrimaryGenerationFailed
from feast.llm_service import LLMService
from feast.orchestrator import Orchestrator


def setup_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), rich_tracebacks=True)],
    )


async def main(query: str, settings: Settings) -> int:
    console = Console()
    llm = LLMService(settings=settings)
    orchestrator = Orchestrator(llm, ConsoleConsumer(console), settings=settings)
    try:
        run = await orchestrator.start(query)
        await run.wait()
    except InvalidQuery as e:
        console.print(f"[red]{e}[/red]")
        return 1
    except PrimaryGenerationFailed:
        return 2
    finally:
        await orchestrator.close()
        await llm.close()
    return 0


def cli(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="fridge-feast",
        description="List your ingredients and let AI find tasty recipes for you.",
    )
    parser.add_argument("ingredients", help='e.g. "chicken, broccoli, soy sauce"')
    args = parser.parse_args(argv)

    settings = Settings()
    setup_logging(settings.log_level)
    return asyncio.run(main(args.ingredients, settings))


if __name__ == "__main__":
    sys.exit(cli())
