from collections.abc import Sequence
from typing import Protocol
from urllib.parse import quote

from rich.console import Console
from rich.markup import escape

from feast.models import EnrichedCandidate, EnrichmentStatus, Media


FALLBACK_IMAGE_URL = "https://picsum.photos/seed/{seed}/400/300"


def fallback_image_url(title: str) -> str:
    return FALLBACK_IMAGE_URL.format(seed=quote(title, safe=""))


class Consumer(Protocol):
    def on_base_list_ready(self, entries: Sequence[EnrichedCandidate]) -> None:
        ...

    def on_entry_updated(
        self, id: str, status: EnrichmentStatus, media: Media | None
    ) -> None:
        ...

    def on_primary_failed(self, reason: str) -> None:
        ...

    def on_no_results(self) -> None:
        ...


class ConsoleConsumer:
    """Prints each notification as it arrives."""

    def __init__(self, console: Console | None = None) -> None:
        self.console = Console() if console is None else console
        self._titles: dict[str, str] = {}

    def on_base_list_ready(self, entries: Sequence[EnrichedCandidate]) -> None:
        self._titles = {e.id: e.title for e in entries}
        self.console.rule("Your Recipe Suggestions")
        for n, entry in enumerate(entries, start=1):
            self.console.print(
                f"[bold]{n}. {escape(entry.title)}[/bold] [dim]({escape(entry.id)})[/dim]"
            )
            if entry.description:
                self.console.print(f"   {escape(entry.description)}")
            for step_n, step in enumerate(entry.steps, start=1):
                self.console.print(f"   {step_n}) {escape(step)}")
            if entry.link:
                self.console.print(f"   {escape(entry.link)}")
        self.console.print("[dim]Cooking up images ...[/dim]")

    def on_entry_updated(
        self, id: str, status: EnrichmentStatus, media: Media | None
    ) -> None:
        title = self._titles.get(id, id)
        match status:
            case EnrichmentStatus.ready:
                self.console.print(f"[green]✔[/green] {escape(title)}: image ready")
            case EnrichmentStatus.failed:
                self.console.print(
                    f"[yellow]✘[/yellow] {escape(title)}: no image, "
                    f"using {escape(fallback_image_url(title))}"
                )
            case _:
                self.console.print(f"{escape(title)}: {status.value}")

    def on_primary_failed(self, reason: str) -> None:
        self.console.print(
            "[bold red]Error Generating Recipes[/bold red] "
            "An unexpected error occurred while generating recipes. "
            "Please check your connection or try again later."
        )
        self.console.print(f"[dim]{escape(reason)}[/dim]")

    def on_no_results(self) -> None:
        self.console.print(
            "[bold]No Recipes Found[/bold] "
            "We couldn't find any recipes with those ingredients. "
            "Try different or more ingredients."
        )
