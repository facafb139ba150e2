import json

import pytest
from typer.testing import CliRunner

import cli.main as cli_main
from core.interfaces.fetcher import FetchResponse, PageFetcher

runner = CliRunner()


class StubFetcher(PageFetcher):
    def __init__(self, page_html, payload, page_status=200):
        self.page_html = page_html
        self.payload = payload
        self.page_status = page_status

    async def fetch(self, url):
        if 'GetPDDrivers' in url:
            return FetchResponse(status=200, body=json.dumps(self.payload))
        return FetchResponse(status=self.page_status, body=self.page_html)


@pytest.fixture
def isolated(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv('ROG_DRIVERS_EXPORT_DIR', str(tmp_path / 'exports'))
    return tmp_path


def _use_stub(monkeypatch, fetcher):
    monkeypatch.setattr(cli_main, 'build_fetcher', lambda settings: fetcher)


def test_devices_lists_known_slugs(isolated):
    result = runner.invoke(cli_main.app, ['devices'])
    assert result.exit_code == 0
    assert 'rog-ally-2023' in result.output


def test_fetch_shows_catalog(isolated, monkeypatch, product_page_html, drivers_payload):
    _use_stub(monkeypatch, StubFetcher(product_page_html, drivers_payload))
    result = runner.invoke(cli_main.app, ['fetch', 'rog-ally-2023', '--no-banner'])
    assert result.exit_code == 0, result.output
    assert 'ROG Ally (2023) RC71L' in result.output
    assert 'Categories: 3' in result.output
    assert 'Latest versions: 3' in result.output


def test_fetch_export_writes_links(isolated, monkeypatch, product_page_html, drivers_payload):
    _use_stub(monkeypatch, StubFetcher(product_page_html, drivers_payload))
    result = runner.invoke(cli_main.app, ['fetch', 'rog-ally-2023', '--no-banner', '--export', '--json', 'catalog.json'])
    assert result.exit_code == 0, result.output

    exported = isolated / 'exports' / 'latest_drivers_ROG_Ally_(2023)_RC71L.txt'
    assert exported.exists()
    assert len(exported.read_text(encoding='utf-8').splitlines()) == 4
    assert json.loads((isolated / 'catalog.json').read_text(encoding='utf-8'))['model_name'] == 'ROG Ally (2023) RC71L'


def test_fetch_reports_stage_error(isolated, monkeypatch, product_page_html, drivers_payload):
    _use_stub(monkeypatch, StubFetcher(product_page_html, drivers_payload, page_status=404))
    result = runner.invoke(cli_main.app, ['fetch', 'rog-ally-2023', '--no-banner'])
    assert result.exit_code == 1
    assert 'HTTP 404' in result.output


def test_fetch_reports_missing_parameters(isolated, monkeypatch, drivers_payload):
    _use_stub(monkeypatch, StubFetcher('<html></html>', drivers_payload))
    result = runner.invoke(cli_main.app, ['fetch', 'rog-ally-2023', '--no-banner'])
    assert result.exit_code == 1
    assert 'product_id' in result.output
    assert 'system_code' in result.output


def test_fetch_rejects_unknown_website(isolated):
    result = runner.invoke(cli_main.app, ['fetch', 'rog-ally-2023', '--website', 'xx'])
    assert result.exit_code != 0


def test_bad_log_level_is_reported_as_configuration_error(isolated, monkeypatch):
    monkeypatch.setenv('ROG_DRIVERS_LOG_LEVEL', 'verbose')
    result = runner.invoke(cli_main.app, ['devices'])
    assert result.exit_code == 2
    assert 'Invalid configuration' in result.output
    assert 'log_level' in result.output
