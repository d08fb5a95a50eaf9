"""Tests for the application entry point."""

from __future__ import annotations

import main


def test_run_serves_the_application_with_uvicorn(monkeypatch) -> None:
    calls = []
    monkeypatch.setattr(main.uvicorn, "run", lambda app, **options: calls.append((app, options)))

    main.run(port=9000)

    [(served, options)] = calls
    assert served is main.app
    assert options["host"] == "0.0.0.0"
    assert options["port"] == 9000
