#
# Copyright (c) 2025 LateGenXer
#
# SPDX-License-Identifier: AGPL-3.0-or-later
#


import os.path
import sys
import pytest


here = os.path.dirname(__file__)
sys.path.insert(0, here)


def pytest_addoption(parser):
    parser.addoption("--production", action="store_true")


@pytest.fixture(scope="session")
def production(request):
    return request.config.getoption("--production")


@pytest.fixture(autouse=True)
def production_environ(production, monkeypatch):
    import environ
    monkeypatch.setattr(environ, "production", production)
