import pytest

from tests.fakes import ScriptedProvider


@pytest.fixture
def provider():
    return ScriptedProvider()
