import json
from collections import deque
from pathlib import Path

import pytest

from logscribe.config import AppPaths


class ScriptedConsole:
    """Console port that replays canned answers and records everything shown."""

    def __init__(self, answers=()):
        self.answers = deque(answers)
        self.prompts = []
        self.lines = []

    def print(self, message=""):
        self.lines.append(("print", message))

    def info(self, message):
        self.lines.append(("info", message))

    def success(self, message):
        self.lines.append(("success", message))

    def warning(self, message):
        self.lines.append(("warning", message))

    def error(self, message):
        self.lines.append(("error", message))

    def ask(self, prompt):
        self.prompts.append(prompt)
        if not self.answers:
            raise EOFError
        return self.answers.popleft()

    @property
    def text(self):
        return "\n".join(message for _, message in self.lines)

    def messages(self, kind):
        return [message for level, message in self.lines if level == kind]


@pytest.fixture()
def scripted_console():
    return ScriptedConsole


@pytest.fixture()
def paths(tmp_path) -> AppPaths:
    return AppPaths.from_base(tmp_path)


@pytest.fixture()
def config_data():
    return {
        "apiEndpoint": "http://localhost",
        "apiPort": 11434,
        "apiPath": "/v1/chat/completions",
        "model": "llama3.2",
        "temperature": 0.2,
        "maxTokens": 512,
        "timeoutSeconds": 5,
        "systemPrompt": "You are a log analyst.",
    }


@pytest.fixture()
def write_config(paths, config_data):
    def _write(**overrides):
        data = {**config_data, **overrides}
        Path(paths.config_file).write_text(json.dumps(data), encoding="utf-8")
        return data

    return _write
