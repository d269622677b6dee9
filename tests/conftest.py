"""Shared pytest configuration for the user directory tests."""

from tests.fixtures import *  # noqa: F401,F403
