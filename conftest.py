"""Pytest fixtures shared by all responsive_tables tests.

Run tests with: pytest (configured for --import-mode=importlib in pyproject.toml)
"""

import pytest

# Host settings that change formatting behaviour
_ENV_VARS = (
    "COLUMNS",
    "RESPONSIVE_TABLES_MARGIN",
    "RESPONSIVE_TABLES_DISABLED",
    "RESPONSIVE_TABLES_AMBIGUOUS_WIDTH",
)


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch, tmp_path):
    """Clear width/config env vars and send trace output to tmp_path/trace.log.

    Returns:
        The test's tmp_path, for reading the trace log back.
    """
    for var in _ENV_VARS:
        monkeypatch.delenv(var, raising=False)
    monkeypatch.setenv("RESPONSIVE_TABLES_TRACE_LOG", str(tmp_path / "trace.log"))
    return tmp_path
