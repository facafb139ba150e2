import json
from datetime import date

import pytest

from adapters.json_exporter import export_catalog_json
from adapters.text_exporter import export_latest_links
from core.domain.errors import ExportError
from core.domain.models import Catalog, DriverCategory, DriverFile
from core.services.catalog import normalize, select_latest
from core.services.export import assemble, resolve_download_url, select_export_latest, suggested_filename

HOST = 'https://dlcdnets.asus.com'


def _f(file_id, title='T', version='1.0', released=None, url='https://cdn.example/f.zip'):
    return DriverFile(id=file_id, title=title, version=version, release_date=released, download_url=url)


def test_two_categories_in_name_order():
    catalog = Catalog(
        model_name='Model X',
        categories=[
            DriverCategory(name='Audio', files=[_f('a', 'Audio Driver', url='https://cdn.example/audio.zip')]),
            DriverCategory(name='BIOS', files=[_f('b', 'BIOS', url='https://cdn.example/bios.zip')]),
        ],
    )
    bundle = assemble(catalog)
    assert bundle.urls == ['https://cdn.example/audio.zip', 'https://cdn.example/bios.zip']
    assert bundle.suggested_filename == 'latest_drivers_Model_X.txt'


def test_fixture_catalog_export(drivers_payload):
    bundle = assemble(normalize(drivers_payload))
    assert bundle.urls == [
        f'{HOST}/pub/ASUS/GamingNB/RC71L/Audio_6.0.9.zip',
        f'{HOST}/pub/ASUS/GamingNB/RC71L/RC71LAS330.zip',
        f'{HOST}/pub/ASUS/mb/Utilities/MyASUS.exe',
        f'{HOST}/pub/ASUS/mb/Utilities/ArmouryCrateSE_1.5.0.zip',
    ]
    assert bundle.suggested_filename == 'latest_drivers_ROG_Ally_(2023)_RC71L.txt'


def test_no_catalog():
    with pytest.raises(ExportError) as excinfo:
        assemble(None)
    assert excinfo.value.reason == 'no-catalog'


def test_no_links_when_every_file_lacks_url():
    catalog = Catalog(
        model_name='Model X',
        categories=[DriverCategory(name='Audio', files=[_f('a', url=None), _f('b', url='')])],
    )
    with pytest.raises(ExportError) as excinfo:
        assemble(catalog)
    assert excinfo.value.reason == 'no-links'


def test_no_links_for_empty_categories():
    with pytest.raises(ExportError):
        assemble(Catalog(model_name='Model X', categories=[DriverCategory(name='Audio')]))


def test_export_picks_max_date_regardless_of_order():
    old = _f('old', released=date(2022, 1, 1))
    new = _f('new', released=date(2024, 1, 1))
    assert select_export_latest([old, new]) is new
    # badge selection only looks at order
    assert select_latest([old, new]) is old


def test_export_ties_keep_first_seen():
    first = _f('first', released=date(2024, 1, 1))
    second = _f('second', released=date(2024, 1, 1))
    assert select_export_latest([first, second]) is first


def test_export_ignores_newer_placeholder():
    real = _f('real', version='2.1.0', released=date(2023, 1, 1))
    stub = _f('stub', version='latest version fallback', released=date(2024, 1, 1))
    assert select_export_latest([stub, real]) is real


def test_export_falls_back_to_first_placeholder():
    stub_a = _f('a', version='latest version')
    stub_b = _f('b', version='latest version')
    assert select_export_latest([stub_a, stub_b]) is stub_a
    assert select_export_latest([]) is None


def test_undated_files_lose_to_dated_ones():
    undated = _f('undated')
    dated = _f('dated', released=date(2020, 1, 1))
    assert select_export_latest([undated, dated]) is dated


def test_resolve_download_url():
    assert resolve_download_url('/pub/x.zip', HOST) == f'{HOST}/pub/x.zip'
    assert resolve_download_url('https://other.example/x.zip', HOST) == 'https://other.example/x.zip'


def test_suggested_filename_replaces_every_space():
    assert suggested_filename('ROG Ally X  2024') == 'latest_drivers_ROG_Ally_X__2024.txt'


def test_bundle_text_and_bytes():
    catalog = Catalog(
        model_name='Model X',
        categories=[DriverCategory(name='A', files=[_f('1', 'One', url='/a'), _f('2', 'Two', url='/b')])],
    )
    bundle = assemble(catalog, asset_host='https://h')
    assert bundle.text == 'https://h/a\nhttps://h/b'
    assert bundle.to_bytes() == b'https://h/a\nhttps://h/b'


def test_export_latest_links_writes_file(tmp_path, drivers_payload):
    bundle = assemble(normalize(drivers_payload))
    path = export_latest_links(bundle=bundle, output_dir=tmp_path / 'out')
    assert path.name == bundle.suggested_filename
    assert path.read_text(encoding='utf-8').splitlines() == bundle.urls


def test_export_catalog_json(tmp_path, drivers_payload):
    catalog = normalize(drivers_payload)
    path = export_catalog_json(catalog=catalog, output_path=tmp_path / 'catalog.json')
    data = json.loads(path.read_text(encoding='utf-8'))
    assert data['model_name'] == 'ROG Ally (2023) RC71L'
    assert [c['name'] for c in data['categories']] == ['audio', 'BIOS', 'Utilities']
    assert Catalog.model_validate(data) == catalog
