import json
from pathlib import Path
from unittest.mock import MagicMock

import pytest

DATA_DIR = Path(__file__).resolve().parent / "data"


def load_fixture(name):
    with open(DATA_DIR / name, encoding="utf-8") as f:
        return json.load(f)


@pytest.fixture
def payload1():
    return load_fixture("payload_1.json")


@pytest.fixture
def payload2():
    return load_fixture("payload_2.json")


@pytest.fixture
def payload3():
    return load_fixture("payload_3.json")


@pytest.fixture
def config():
    return load_fixture("config.json")


@pytest.fixture
def config_empty():
    return load_fixture("config_empty.json")


@pytest.fixture
def log():
    log = MagicMock()
    log.verbose = MagicMock()
    return log


def verbose_lines(log):
    return [call.args[0] for call in log.verbose.call_args_list]
