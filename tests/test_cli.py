from collections.abc import Callable

import pytest

from conftest import FakeClient, media_for, recipes
import feast.__main__ as cli_module
from feast.models import Candidate, Media


class InstantLLM(FakeClient):
    closed = False

    async def enrich_candidate(self, candidate: Candidate) -> Media:
        return media_for(candidate.title)

    async def close(self) -> None:
        self.closed = True


def fake_llm(
    monkeypatch: pytest.MonkeyPatch, suggestions
) -> Callable[[], InstantLLM]:
    made: list[InstantLLM] = []

    def factory(*args, **kwargs) -> InstantLLM:
        llm = InstantLLM(suggestions)
        made.append(llm)
        return llm

    monkeypatch.setattr(cli_module, "LLMService", factory)
    monkeypatch.setattr(cli_module, "setup_logging", lambda level: None)
    return lambda: made[0]


def test_cli_success(monkeypatch: pytest.MonkeyPatch, capsys) -> None:
    made = fake_llm(monkeypatch, {"eggs, flour": recipes("Pancakes", "Crepes")})

    assert cli_module.cli(["eggs, flour"]) == 0

    out = capsys.readouterr().out
    assert "Pancakes" in out
    assert "Crepes: image ready" in out
    assert made().closed


def test_cli_no_results(monkeypatch: pytest.MonkeyPatch, capsys) -> None:
    fake_llm(monkeypatch, {"gravel": []})
    assert cli_module.cli(["gravel"]) == 0
    assert "No Recipes Found" in capsys.readouterr().out


def test_cli_invalid_query(monkeypatch: pytest.MonkeyPatch) -> None:
    made = fake_llm(monkeypatch, {})
    assert cli_module.cli(["   "]) == 1
    assert made().suggest_calls == []


def test_cli_primary_failure(monkeypatch: pytest.MonkeyPatch) -> None:
    fake_llm(monkeypatch, {"eggs": ConnectionError("offline")})
    assert cli_module.cli(["eggs"]) == 2
