"""Shared test fixtures for stacheview tests."""

import logging
from pathlib import Path
from unittest.mock import Mock

import pytest
import structlog
from pytest_mock import MockerFixture
from structlog.testing import LogCapture
from structlog.typing import FilteringBoundLogger

from stacheview.resources import FileSystemResourceLoader, ResourceLoader
from stacheview.templating import MustacheTemplateLoader

FIXTURES_DIR = Path(__file__).parent / "fixtures"
VIEWS_PREFIX = "views/"


@pytest.fixture
def fixture_resources() -> FileSystemResourceLoader:
    """Resource loader serving the real fixture templates."""
    return FileSystemResourceLoader(FIXTURES_DIR)


@pytest.fixture
def resource_loader(
    mocker: MockerFixture, fixture_resources: FileSystemResourceLoader
) -> Mock:
    """Mock resource loader that delegates to the fixture templates.

    Tests assert on its ``get_resource`` calls to verify exactly which
    locations a compilation resolved.
    """
    mock = mocker.Mock(spec=ResourceLoader)
    mock.get_resource.side_effect = fixture_resources.get_resource
    return mock


@pytest.fixture
def log_capture() -> LogCapture:
    return LogCapture()


@pytest.fixture
def logger(log_capture: LogCapture) -> FilteringBoundLogger:
    """Standalone debug-level logger recording events into `log_capture`."""
    return structlog.wrap_logger(
        structlog.PrintLogger(),
        processors=[log_capture],
        wrapper_class=structlog.make_filtering_bound_logger(logging.DEBUG),
        context_class=dict,
    )


@pytest.fixture
def template_loader(
    resource_loader: Mock, logger: FilteringBoundLogger
) -> MustacheTemplateLoader:
    return MustacheTemplateLoader(resource_loader, prefix=VIEWS_PREFIX, logger=logger)
