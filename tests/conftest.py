"""Pytest configuration and shared fixtures for the incmark test suite."""

import logging
import os

import pytest
from hypothesis import Phase, Verbosity, settings

from incmark.ast import Comment, Document, Element, Text
from incmark.logging_utils import LIBRARY_LOGGER_NAME

# Register custom Hypothesis profiles
settings.register_profile("ci", max_examples=200, verbosity=Verbosity.verbose)
settings.register_profile("dev", max_examples=50)
settings.register_profile(
    "debug", max_examples=10, verbosity=Verbosity.verbose, phases=[Phase.explicit, Phase.reuse, Phase.generate]
)
settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "dev"))


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests - fast, isolated component tests")
    config.addinivalue_line("markers", "integration: Integration tests - component interaction tests")
    config.addinivalue_line("markers", "fuzzing: Property-based tests driven by Hypothesis")
    config.addinivalue_line("markers", "cli: Tests related to command-line interface")


@pytest.fixture(autouse=True)
def reset_library_logger():
    """Undo handler changes made by configure_logging() in CLI tests."""
    yield
    logger = logging.getLogger(LIBRARY_LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.NOTSET)
    logger.propagate = True


@pytest.fixture
def sample_document() -> Document:
    """A small document mixing all node variants."""
    return Document(
        nodes=[
            Element("h1", {}, [Text("Title")]),
            Element("p", {"class": "lead"}, [Text("Hello "), Element("strong", {}, [Text("world")])]),
            Comment("more"),
            Element("alert", {"type": "info"}, [Element("p", {}, [Text("Body")])]),
        ],
        frontmatter={"title": "Sample"},
    )
