import pytest

from pwforge import random_source
from pwforge.config import Settings
from pwforge.random_source import SeededRandomSource


@pytest.fixture(autouse=True)
def fresh_default_source():
    random_source.reset_default_source()
    yield
    random_source.reset_default_source()


@pytest.fixture
def seeded():
    return SeededRandomSource(1234)


@pytest.fixture
def cli_obj(seeded):
    """Context object for CliRunner: default settings and a seeded source"""
    return {'settings': Settings(), 'source': seeded}
