"""Shared fixtures: keep the TECHCRUSH_* environment out of every test."""

import os

import pytest


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for key in list(os.environ):
        if key.startswith("TECHCRUSH_"):
            monkeypatch.delenv(key, raising=False)
