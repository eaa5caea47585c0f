"""Test configuration and fixtures for bookshelf."""

from tests.fixtures import *  # noqa: F401,F403
