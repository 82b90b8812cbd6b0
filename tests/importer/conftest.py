from __future__ import annotations

import pytest

from crm_app.importer.mapping import load_monica_mapping
from monica_samples import SAMPLE_DUMP


@pytest.fixture
def sample_dump() -> str:
    return SAMPLE_DUMP


@pytest.fixture
def monica_mapping():
    return load_monica_mapping()
