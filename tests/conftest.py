"""Shared pytest fixtures for weft tests."""

from __future__ import annotations

import pytest

from weft.backend import PuppetBackend
from weft.printer import Printer
from weft.root import Root
from weft.theme import Theme, get_default_theme


@pytest.fixture
def theme() -> Theme:
    """The default theme."""
    return get_default_theme()


@pytest.fixture
def backend() -> PuppetBackend:
    """A 40x10 in-memory backend with no scripted input."""
    return PuppetBackend(size=(40, 10))


@pytest.fixture
def printer(backend: PuppetBackend, theme: Theme) -> Printer:
    """A printer covering the whole puppet screen."""
    return Printer(backend.screen_size(), theme, backend)


@pytest.fixture
def root(backend: PuppetBackend) -> Root:
    """An application root on the puppet backend."""
    return Root(backend)
