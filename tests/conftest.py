import pytest

from tests.utils import ProfileBuilder


@pytest.fixture
def builder():
    return ProfileBuilder()


@pytest.fixture
def heap_builder():
    return ProfileBuilder(kind="space")
