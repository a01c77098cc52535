from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterator

import pytest

from tests._fixtures.manifest_builder import ManifestBuilder


@pytest.fixture
def manifest_builder(tmp_path: Path) -> ManifestBuilder:
    """Provide a manifest writer rooted at the pytest tmp_path."""
    return ManifestBuilder(tmp_path)


@pytest.fixture(autouse=True)
def _reset_pkgview_logger() -> Iterator[None]:
    """Drop handlers bound to per-test capture streams."""
    yield
    logger = logging.getLogger("pkgview")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
