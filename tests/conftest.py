import pytest
from _helpers import BASE_URL
from halcyon_client import HttpxFetcher


@pytest.fixture
def fetcher():
    return HttpxFetcher(base_url=BASE_URL, retry=None)
