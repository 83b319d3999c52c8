import os
from pathlib import Path

import pytest

from termwordle import config
from termwordle.cli import main
from termwordle.config import Mode, Options, load_options
from termwordle.errors import ConfigError


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in list(os.environ):
        if name.startswith(config.ENV_PREFIX):
            monkeypatch.delenv(name)
    monkeypatch.setattr(config, "load_dotenv", lambda *args, **kwargs: False)


def test_defaults():
    options = load_options([])
    assert options == Options()
    assert options.mode is Mode.INTERACTIVE
    assert options.interactive_target
    assert options.effective_seed == 2048


def test_command_line_flags():
    options = load_options([
        "-r", "-s", "7", "-D", "-d", "2", "-t", "-m", "test",
        "-f", "final.txt", "-a", "acceptable.txt",
    ])
    assert options.random and options.difficult and options.stats
    assert options.seed == 7 and options.effective_seed == 7
    assert options.day == 2
    assert options.mode is Mode.TEST
    assert options.final_set == Path("final.txt")
    assert options.acceptable_set == Path("acceptable.txt")
    assert not options.interactive_target


def test_environment_defaults(monkeypatch):
    monkeypatch.setenv("TERMWORDLE_RANDOM", "true")
    monkeypatch.setenv("TERMWORDLE_SEED", "99")
    monkeypatch.setenv("TERMWORDLE_MODE", "tui")
    options = load_options([])
    assert options.random
    assert options.seed == 99
    assert options.mode is Mode.TUI


def test_command_line_beats_environment(monkeypatch):
    monkeypatch.setenv("TERMWORDLE_SEED", "99")
    assert load_options(["-r", "--seed", "5"]).seed == 5


def test_bad_environment_value(monkeypatch):
    monkeypatch.setenv("TERMWORDLE_SEED", "lots")
    with pytest.raises(ConfigError):
        load_options([])


@pytest.mark.parametrize("argv", [
    ["-r", "-d", "0"],
    ["-r", "-d", "7"],
    ["-d", "2"],
    ["-w", "crane", "-r"],
    ["-w", "cran"],
    ["--tick-rate", "0"],
    ["--agent", "some/model", "-r", "-m", "tui"],
    ["--agent", "some/model"],
])
def test_invalid_combinations(argv):
    with pytest.raises(ConfigError):
        load_options(argv)


def test_day_boundaries():
    assert Options(random=True, day=1).validate().day == 1
    assert Options(random=True, day=6).validate().day == 6


@pytest.mark.parametrize("name, value", [
    ("TERMWORDLE_REASONING_EFFORT", "extreme"),
    ("TERMWORDLE_LOG_LEVEL", "chatty"),
])
def test_bad_choice_in_environment(monkeypatch, name, value):
    monkeypatch.setenv(name, value)
    with pytest.raises(ConfigError):
        load_options([])


def test_bad_choice_in_environment_exits_cleanly(monkeypatch, capsys):
    monkeypatch.setenv("TERMWORDLE_REASONING_EFFORT", "extreme")
    assert main([]) == 1
    assert "reasoning effort" in capsys.readouterr().err


def test_log_level_is_case_insensitive(monkeypatch):
    monkeypatch.setenv("TERMWORDLE_LOG_LEVEL", "debug")
    assert load_options([]).log_level == "DEBUG"
    assert load_options(["--log-level", "info"]).log_level == "INFO"


def test_environment_flags_can_be_turned_off(monkeypatch):
    monkeypatch.setenv("TERMWORDLE_RANDOM", "1")
    monkeypatch.setenv("TERMWORDLE_STATS", "yes")
    options = load_options(["--no-random", "--no-stats"])
    assert not options.random
    assert not options.stats
