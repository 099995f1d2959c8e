import os

import pytest


def pytest_collection_modifyitems(config: pytest.Config, items: list) -> None:
    if os.getenv("DELTA_STORAGE_TEST_API_KEY"):
        return
    mark_expr = getattr(config.option, "markexpr", "")
    if "integration" in mark_expr:
        return
    skip = pytest.mark.skip(reason="DELTA_STORAGE_TEST_API_KEY not set")
    for item in items:
        if item.get_closest_marker("integration"):
            item.add_marker(skip)


@pytest.fixture(scope="session")
def delta_api_key() -> str:
    api_key = os.getenv("DELTA_STORAGE_TEST_API_KEY")
    if not api_key:
        pytest.fail("DELTA_STORAGE_TEST_API_KEY must be set to run integration tests.")
    return api_key
