import pytest

from plato_transcript.settings import default_settings, set_settings


@pytest.fixture(autouse=True)
def _restore_settings():
    """Each test starts from default settings, whatever the previous one installed."""
    previous = set_settings(default_settings())
    yield
    set_settings(previous)
