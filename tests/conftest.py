"""Pytest configuration for rog-drivers tests."""
import json
import sys
from pathlib import Path

import pytest

# Add src directory to path so tests can import cli/core/adapters
src_dir = Path(__file__).parent.parent / 'src'
if str(src_dir) not in sys.path:
    sys.path.insert(0, str(src_dir))

FIXTURES = Path(__file__).parent / 'fixtures'


@pytest.fixture
def product_page_html():
    return (FIXTURES / 'product_page.html').read_text(encoding='utf-8')


@pytest.fixture
def fallback_page_html():
    return (FIXTURES / 'product_page_fallback.html').read_text(encoding='utf-8')


@pytest.fixture
def drivers_payload():
    return json.loads((FIXTURES / 'drivers_payload.json').read_text(encoding='utf-8'))
