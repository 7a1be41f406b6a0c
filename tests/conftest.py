"""
Pytest configuration for docpress
"""

import logging
import sys
from datetime import datetime

import pytest

from docpress.engine.geometry import PageGeometry, Typography
from docpress.models import DocumentMeta, LayoutBlock


@pytest.fixture(autouse=True)
def configure_logging():
    """Reset logging so handlers installed by one test never leak into the next."""
    root_logger = logging.getLogger()
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(logging.WARNING)
    console_handler.setFormatter(logging.Formatter('%(name)s - %(levelname)s - %(message)s'))

    root_logger.addHandler(console_handler)
    root_logger.setLevel(logging.WARNING)

    yield

    root_logger.handlers.clear()
    package_logger = logging.getLogger("docpress")
    package_logger.handlers.clear()
    package_logger.setLevel(logging.NOTSET)


@pytest.fixture
def fixed_meta():
    """Metadata with a fixed timestamp so output is byte-identical between runs."""
    return DocumentMeta(title="Test", creation_date=datetime(2024, 1, 2, 3, 4, 5))


@pytest.fixture
def letter_geometry():
    """US Letter with 72pt margins."""
    return PageGeometry()


@pytest.fixture
def small_geometry():
    """A short page that only fits a handful of lines."""
    return PageGeometry.create(300, 200, 20)


@pytest.fixture
def default_typography():
    return Typography()


@pytest.fixture
def sample_blocks():
    """Heading, paragraph, rule, paragraph."""
    return [
        LayoutBlock.heading("Quarterly report", font_size=18, color="#112233"),
        LayoutBlock.paragraph("Revenue grew steadily over the period."),
        LayoutBlock.rule(),
        LayoutBlock.paragraph("Costs (fixed) stayed flat."),
    ]


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests"
    )
    config.addinivalue_line(
        "markers", "unit: marks tests as unit tests"
    )
    # Ignore logging errors during tests
    logging.raiseExceptions = False


def pytest_collection_modifyitems(config, items):
    """Mark every test that is not an integration test as a unit test."""
    for item in items:
        if "integration" not in item.keywords and "unit" not in item.keywords:
            item.add_marker(pytest.mark.unit)
