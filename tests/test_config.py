from pathlib import Path

import pytest
from pydantic import ValidationError

from cli.messages import describe_error
from core.config import AppSettings, write_user_env_vars
from core.domain.errors import ExportError, ExtractionError, NormalizationError, StageError
from core.domain.language import Website


def test_settings_defaults(monkeypatch):
    monkeypatch.delenv('ROG_DRIVERS_PAGE_LOCALE', raising=False)
    settings = AppSettings(_env_file=None)
    assert settings.page_locale == 'us'
    assert settings.default_website is Website.GLOBAL
    assert settings.page_url('rog-ally-2023') == (
        'https://rog.asus.com/us/gaming-handhelds/rog-ally/rog-ally-2023/helpdesk_download/'
    )


def test_settings_from_env(monkeypatch):
    monkeypatch.setenv('ROG_DRIVERS_DEFAULT_WEBSITE', 'jp')
    monkeypatch.setenv('ROG_DRIVERS_RELAY_PREFIX', 'https://corsproxy.io/?')
    monkeypatch.setenv('ROG_DRIVERS_EXPORT_DIR', '/tmp/rog-exports')
    settings = AppSettings(_env_file=None)
    assert settings.default_website is Website.JAPAN
    assert settings.relay_prefix == 'https://corsproxy.io/?'
    assert settings.export_dir == Path('/tmp/rog-exports')


def test_log_level_is_normalized(monkeypatch):
    monkeypatch.setenv('ROG_DRIVERS_LOG_LEVEL', ' info ')
    assert AppSettings(_env_file=None).log_level == 'INFO'


def test_unknown_log_level_is_rejected(monkeypatch):
    monkeypatch.setenv('ROG_DRIVERS_LOG_LEVEL', 'verbose')
    with pytest.raises(ValidationError):
        AppSettings(_env_file=None)


def test_write_user_env_vars_merges(tmp_path):
    env_path = tmp_path / 'cfg' / '.env'
    write_user_env_vars({'ROG_DRIVERS_DEFAULT_WEBSITE': 'us'}, env_path=env_path)
    write_user_env_vars({'ROG_DRIVERS_RELAY_PREFIX': 'https://r/?', 'ROG_DRIVERS_DEFAULT_WEBSITE': None}, env_path=env_path)
    lines = env_path.read_text(encoding='utf-8').splitlines()
    assert lines[0].startswith('#')
    assert 'ROG_DRIVERS_DEFAULT_WEBSITE=us' in lines
    assert 'ROG_DRIVERS_RELAY_PREFIX=https://r/?' in lines


def test_website_from_locale():
    assert Website.from_locale('zh-TW') is Website.TAIWAN
    assert Website.from_locale('ja-JP') is Website.JAPAN
    assert Website.from_locale('en-US') is Website.US
    assert Website.from_locale('fr-FR') is Website.GLOBAL


def test_describe_error_messages():
    assert describe_error(StageError('fetch-page', 503)) == 'Could not load the product page (HTTP 503).'
    assert describe_error(StageError('parse-params', ('product_id', 'website'))).endswith('product_id, website.')
    assert 'product_id' in describe_error(ExtractionError(('product_id',)))
    assert describe_error(NormalizationError('empty-or-malformed')).startswith('The driver list was empty')
    assert describe_error(ExportError('no-links')) == 'No downloadable links were found to export.'
