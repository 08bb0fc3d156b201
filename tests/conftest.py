"""Shared fixtures for the zonediff tests."""

import io
from pathlib import Path

import pytest

from zonediff.parser import ZoneParser

DATA_DIR = Path(__file__).parent / "data"


@pytest.fixture
def data_dir():
    return DATA_DIR


@pytest.fixture
def open_zone():
    """Open a zone file from tests/data as a parser."""
    handles = []

    def _open(name, origin="simple.zn"):
        handle = (DATA_DIR / name).open("rb")
        handles.append(handle)
        return ZoneParser(handle, origin)

    yield _open
    for handle in handles:
        handle.close()


@pytest.fixture
def parse_text():
    """Parse zone text held in memory."""

    def _parse(text, origin="example.com."):
        return ZoneParser(io.BytesIO(text.encode("utf-8")), origin)

    return _parse
