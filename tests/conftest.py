from pathlib import Path

import pytest


@pytest.fixture(autouse=True)
def _isolated_working_dir(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Run every test from an empty directory.

    ``ConfigLoader.load()`` picks up ``./ddex_ern.toml`` when present; a config
    file in the checkout must not leak into test expectations.
    """
    monkeypatch.chdir(tmp_path)
