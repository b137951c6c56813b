import pytest

from jcache import (
    settings,
)


@pytest.fixture(autouse=True)
def restore_global():
    verbose, config = settings.Global.verbose, settings.Global.config
    yield
    settings.Global.verbose = verbose
    settings.Global.config = config


@pytest.fixture
def config(tmp_path):
    return settings.Config(base=tmp_path)


@pytest.fixture
def calls():
    return []
