# tests/conftest.py
#
# Puts the project root on sys.path so `lesh` imports without installing,
# and provides the shared fixtures.

import os
import sys

import pytest

project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
if project_root not in sys.path:
    sys.path.insert(0, project_root)

from lesh.session import Session  # noqa: E402


@pytest.fixture
def session():
    return Session()


@pytest.fixture
def restore_cwd():
    """Tests that chdir get their starting directory back afterwards."""
    cwd = os.getcwd()
    yield cwd
    os.chdir(cwd)
