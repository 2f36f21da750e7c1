"""Pytest hooks and fixtures."""

import pytest

from xmlrpc_api.config import loader


class StateController:
    """Handler object used by the dispatch and server tests."""

    def add(self, left, right):
        return left + right

    def crash(self, message):
        raise RuntimeError(f"Error: {message}")

    def get_state_name(self, index):
        if index == 41:
            return "South Dakota"
        return None


@pytest.fixture
def controller():
    return StateController()


@pytest.fixture
def method_map(controller):
    return {
        "add": controller.add,
        "crash": controller.crash,
        "examples.getStateName": "get_state_name",
    }


@pytest.fixture(autouse=True)
def _clear_config_cache():
    loader.clear_config_cache()
    yield
    loader.clear_config_cache()
