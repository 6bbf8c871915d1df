"""
Unit test configuration.

Every unit test runs in an empty working directory with the fbtoken and
Firebase environment variables cleared, so a developer's real .env, cache
file, config file or .firebase/ directory never leaks in.
"""

import pytest

ISOLATED_ENV_VARS = (
    "GOOGLE_APPLICATION_CREDENTIALS",
    "FIREBASE_API_KEY",
    "FIREBASE_PROJECT_ID",
    "FBTOKEN_CONFIG_DIR",
    "FBTOKEN_CACHE_FILE",
)


@pytest.fixture(autouse=True)
def isolated_workdir(tmp_path, monkeypatch):
    """Chdir into a fresh temp dir and point config at a file that doesn't exist."""
    workdir = tmp_path / "work"
    workdir.mkdir()
    monkeypatch.chdir(workdir)
    for name in ISOLATED_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("FBTOKEN_CONFIG_FILE", str(tmp_path / "no-such-config.yaml"))
    return workdir
