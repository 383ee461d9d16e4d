import pytest

from renderer import clear_image_cache


@pytest.fixture(autouse=True)
def _fresh_image_cache():
    clear_image_cache()
    yield
    clear_image_cache()
