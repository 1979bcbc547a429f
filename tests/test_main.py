"""Tests for main — wiring, saved page and exit codes of one full run."""

from __future__ import annotations

import functools
import logging

import httpx
import pytest

import main
from binsweep.config import Config
from binsweep.fetcher import BinFetcher
from binsweep.results import ResultsDocument

from .conftest import bin_id_of


@pytest.fixture
def output_path(tmp_path, monkeypatch):
    """Run against a one-letter sweep, a mocked network and a tmp results page."""
    for var in Config.ENV_MAPPINGS:
        monkeypatch.delenv(var, raising=False)

    path = tmp_path / "results.html"
    monkeypatch.setenv("OUTPUT_PATH", str(path))
    monkeypatch.setenv("SWEEP_ALPHABET", "abc")
    monkeypatch.setenv("SWEEP_LENGTH", "1")
    monkeypatch.setattr(main, "load_dotenv", lambda: None)
    monkeypatch.setattr(main, "setup_logging", lambda level: None)

    def handler(request: httpx.Request) -> httpx.Response:
        if bin_id_of(request) == "b":
            return httpx.Response(200, text='{"found": true}')
        return httpx.Response(404)

    monkeypatch.setattr(
        main,
        "BinFetcher",
        functools.partial(BinFetcher, transport=httpx.MockTransport(handler)),
    )
    return path


class TestRun:
    def test_saves_found_bins(self, output_path) -> None:
        main.run()
        assert output_path.exists()
        assert ResultsDocument.from_file(output_path).entries == [("b", '{"found": true}')]

    def test_invalid_setting_exits_1(self, output_path, monkeypatch, caplog) -> None:
        caplog.set_level(logging.INFO)
        monkeypatch.setenv("SWEEP_ALPHABET", "aab")

        with pytest.raises(SystemExit) as exc:
            main.run()

        assert exc.value.code == 1
        assert "fatal_error" in caplog.text
        assert not output_path.exists()

    def test_missing_template_container_exits_1(self, output_path, tmp_path, monkeypatch, caplog) -> None:
        caplog.set_level(logging.INFO)
        template = tmp_path / "page.html"
        template.write_text("<html><body><p>no list here</p></body></html>")
        monkeypatch.setenv("OUTPUT_TEMPLATE", str(template))

        with pytest.raises(SystemExit) as exc:
            main.run()

        assert exc.value.code == 1
        assert "fatal_error" in caplog.text
        assert not output_path.exists()

    def test_interrupt_exits_0(self, output_path, monkeypatch, caplog) -> None:
        caplog.set_level(logging.INFO)

        async def interrupted():
            raise KeyboardInterrupt

        monkeypatch.setattr(main, "main", interrupted)

        with pytest.raises(SystemExit) as exc:
            main.run()

        assert exc.value.code == 0
        assert "sweep_interrupted" in caplog.text
