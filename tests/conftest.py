"""Shared test fixtures — sample diffs, event payloads, clean environment."""

from __future__ import annotations

import json
import textwrap
from pathlib import Path

import pytest

_ENV_VARS = (
    "GITHUB_TOKEN",
    "GITHUB_EVENT_PATH",
    "GITHUB_API_URL",
    "IGNORED",
    "INPUT_SIZES",
    "INPUT_PATTERN",
    "DEBUG_ACTION",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Tests must not see the variables of the runner they execute on."""
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def sample_diff_markdown_edit() -> str:
    """An edit of an existing Markdown file adding 5 Cyrillic characters."""
    return textwrap.dedent("""\
        diff --git a/x.md b/x.md
        index 1234567..abcdef0 100644
        --- a/x.md
        +++ b/x.md
        @@ -1 +1,2 @@
         # Title
        +Слава
    """)


@pytest.fixture
def sample_diff_new_translation() -> str:
    """A newly created translated document (10 Cyrillic characters)."""
    return textwrap.dedent("""\
        diff --git a/docs/uk/intro.md b/docs/uk/intro.md
        new file mode 100644
        index 0000000..e69de29
        --- /dev/null
        +++ b/docs/uk/intro.md
        @@ -0,0 +1,2 @@
        +Добрий день
        +hello
    """)


@pytest.fixture
def sample_diff_english() -> str:
    """A diff without any Cyrillic text."""
    return textwrap.dedent("""\
        diff --git a/src/app.py b/src/app.py
        index 1234567..abcdef0 100644
        --- a/src/app.py
        +++ b/src/app.py
        @@ -10,2 +10,3 @@
         def main():
        -    return 1
        +    value = 2
        +    return value
    """)


@pytest.fixture
def sample_diff_multi() -> str:
    """Three files: a translation, a lock file, and a binary image."""
    return textwrap.dedent("""\
        diff --git a/docs/uk/guide.md b/docs/uk/guide.md
        index 1111111..2222222 100644
        --- a/docs/uk/guide.md
        +++ b/docs/uk/guide.md
        @@ -3,2 +3,3 @@
         Контекст
        -Старий рядок
        +Новий рядок
        +Ще
        diff --git a/yarn.lock b/yarn.lock
        index 3333333..4444444 100644
        --- a/yarn.lock
        +++ b/yarn.lock
        @@ -1 +1 @@
        -пакет
        +пакети
        diff --git a/img/logo.png b/img/logo.png
        new file mode 100644
        index 0000000..5555555
        Binary files /dev/null and b/img/logo.png differ
    """)


@pytest.fixture
def sample_diff_rename() -> str:
    """A rename with similarity header and one added line."""
    return textwrap.dedent("""\
        diff --git a/old_name.md b/new_name.md
        similarity index 97%
        rename from old_name.md
        rename to new_name.md
        index abc1234..def5678 100644
        --- a/old_name.md
        +++ b/new_name.md
        @@ -1,0 +2,1 @@
        +Рядок
    """)


def write_event(
    path: Path,
    *,
    action: str = "opened",
    labels: tuple[str, ...] = (),
    number: int = 7,
) -> Path:
    """Write a minimal pull_request event payload to *path*."""
    payload = {
        "action": action,
        "pull_request": {
            "number": number,
            "labels": [{"name": name} for name in labels],
            "base": {"repo": {"name": "docs", "owner": {"login": "acme"}}},
        },
    }
    path.write_text(json.dumps(payload), encoding="utf-8")
    return path


@pytest.fixture
def event_file(tmp_path: Path) -> Path:
    return write_event(tmp_path / "event.json")


@pytest.fixture
def make_event(tmp_path: Path):
    """Factory writing event payloads with custom action and labels."""

    def _make(**kwargs) -> Path:
        return write_event(tmp_path / "event.json", **kwargs)

    return _make
