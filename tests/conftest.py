# tests/conftest.py
import os

import pytest
import yaml

FIXTURES_DIR = os.path.join(os.path.dirname(os.path.abspath(__file__)), 'fixtures')


@pytest.fixture(scope="session")
def completions() -> dict:
    """
    Sample model completions loaded from fixtures/completions.yml.
    """
    path = os.path.join(FIXTURES_DIR, 'completions.yml')
    with open(path, 'r') as f:
        return yaml.safe_load(f)
