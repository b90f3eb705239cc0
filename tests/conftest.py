import json
import sys
from pathlib import Path

import pytest


# Ensure 'src/' is on sys.path so 'ai_translate' can be imported when running tests from repo root.
REPO_ROOT = Path(__file__).resolve().parents[1]
SRC_DIR = REPO_ROOT / "src"
if SRC_DIR.exists():
    sys.path.insert(0, str(SRC_DIR))


class FakeProvider:
    """
    Stand-in for a TranslationProvider.
    `replies` maps locale code -> raw text, or an exception instance to raise.
    """

    def __init__(self, replies=None, default="{}"):
        self.replies = dict(replies or {})
        self.default = default
        self.calls = []

    def name(self):
        return "fake"

    def translate(self, prompt, context_path=None):
        code = Path(context_path).stem if context_path else None
        self.calls.append({"prompt": prompt, "context_path": context_path, "locale": code})
        reply = self.replies.get(code, self.default)
        if isinstance(reply, BaseException):
            raise reply
        return reply


@pytest.fixture
def chdir_tmp(tmp_path, monkeypatch):
    """Run inside a temp directory so nothing leaks into the repo."""
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def locales_dir(tmp_path):
    d = tmp_path / "locales"
    d.mkdir()
    return d


def write_locale(locales_dir: Path, code: str, data) -> Path:
    p = locales_dir / f"{code}.json"
    text = data if isinstance(data, str) else json.dumps(data, ensure_ascii=False, indent=2)
    p.write_text(text, encoding="utf-8")
    return p


def read_locale(locales_dir: Path, code: str):
    return json.loads((locales_dir / f"{code}.json").read_text(encoding="utf-8"))
