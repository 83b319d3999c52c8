import io
from types import SimpleNamespace

import pytest

from termwordle import agent
from termwordle.agent import AgentPlayer, extract_guess
from termwordle.config import Mode
from termwordle.env import WordleEnv
from termwordle.game import Outcome
from termwordle.render import TextUI


def reply(content, reasoning=None):
    message = SimpleNamespace(content=content, reasoning_content=reasoning)
    return SimpleNamespace(choices=[SimpleNamespace(message=message)])


@pytest.fixture
def completions(monkeypatch):
    """Replaces the model with canned answers and records every request."""
    calls = []

    def install(*answers):
        pending = list(answers)

        def fake_completion(**kwargs):
            calls.append(dict(kwargs, messages=list(kwargs["messages"])))
            return reply(pending.pop(0) if len(pending) > 1 else pending[0])

        monkeypatch.setattr(agent, "completion", fake_completion)
        return calls

    return install


def make_env(game):
    return WordleEnv(game, mode=Mode.TEST, ui=TextUI(out=io.StringIO(), err=io.StringIO()))


@pytest.mark.parametrize("answer, guess", [
    ("[CRANE]", "CRANE"),
    ("Let me think... my guess is [slate].", "SLATE"),
    ("CRANE", None),
    ("[CRANES]", None),
])
def test_extract_guess(answer, guess):
    assert extract_guess(answer) == guess


def test_agent_wins(make_game, completions):
    calls = completions("Starting with [SLATE]", "[CRANE]")
    game = make_game(word="CRANE")
    env = make_env(game)

    env.run(AgentPlayer("test/model", ui=env.ui))

    assert game.outcome is Outcome.SUCCESS
    assert len(calls) == 2
    # the second request carries the board from the first guess
    assert "|SLATE|" in calls[1]["messages"][-1]["content"]
    assert env.ui.out.getvalue().splitlines()[-1] == "CORRECT 2"


def test_bad_answers_fall_back_and_are_capped(make_game, completions):
    calls = completions("I'd rather not.")
    game = make_game(word="CRANE")
    env = make_env(game)
    player = AgentPlayer("test/model", ui=env.ui, max_requests=3)

    env.run(player)

    # the fallback word isn't in the list so no attempt is used up
    assert len(calls) == 3
    assert player.requests == 3
    assert game.outcome is Outcome.QUIT
    assert env.ui.err.getvalue().count("INVALID") == 3


def test_reasoning_effort_only_sent_when_supported(make_game, completions, monkeypatch):
    calls = completions("[CRANE]")
    monkeypatch.setattr(agent, "get_supported_openai_params", lambda model: ["reasoning_effort"])
    game = make_game(word="CRANE")
    env = make_env(game)
    env.run(AgentPlayer("test/model", reasoning_effort="low", ui=env.ui))
    assert calls[0]["reasoning_effort"] == "low"

    calls.clear()
    monkeypatch.setattr(agent, "get_supported_openai_params", lambda model: [])
    game = make_game(word="CRANE")
    env = make_env(game)
    env.run(AgentPlayer("test/model", reasoning_effort="low", ui=env.ui))
    assert "reasoning_effort" not in calls[0]
