"""Unit tests for application version lookup."""

from importlib import metadata

from asgi_monitor.core.version import (
    ERROR_READING_VERSION,
    UNKNOWN_VERSION,
    application_version,
)


class TestApplicationVersion:
    def test_override_wins(self):
        assert application_version("pytest", override="9.9.9") == "9.9.9"

    def test_no_distribution_is_unknown(self):
        assert application_version() == UNKNOWN_VERSION

    def test_missing_distribution_is_unknown(self):
        assert application_version("surely-not-an-installed-dist-xyz") == UNKNOWN_VERSION

    def test_reads_installed_distribution(self):
        assert application_version("pytest") == metadata.version("pytest")

    def test_read_failure_returns_sentinel(self, monkeypatch):
        def _boom(name):
            raise OSError("metadata unreadable")

        monkeypatch.setattr("asgi_monitor.core.version.metadata.version", _boom)

        assert application_version("pytest") == ERROR_READING_VERSION
