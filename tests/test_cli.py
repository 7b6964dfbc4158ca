"""
Tests for the command line entry point.
"""

import sys

import pytest

from products_api import __main__ as cli


class TestServeCommand:
    """Tests for the serve subcommand."""

    def test_serve_passes_options_to_uvicorn(self, monkeypatch: pytest.MonkeyPatch) -> None:
        calls = []
        monkeypatch.setattr(cli.uvicorn, "run", lambda *args, **kwargs: calls.append((args, kwargs)))
        monkeypatch.setattr(sys, "argv", ["products_api", "serve", "--port", "8080"])

        cli.main()

        (args, kwargs), = calls
        assert args == ("products_api.main:app",)
        assert kwargs["port"] == 8080
        assert kwargs["timeout_graceful_shutdown"] == cli.settings.shutdown_grace_seconds

    def test_command_is_required(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(sys, "argv", ["products_api"])
        with pytest.raises(SystemExit):
            cli.main()
