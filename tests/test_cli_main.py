"""Tests for the CLI entry point setup."""

import logging

import pytest

from storefront.cli import main as cli_main


@pytest.fixture
def basic_config_calls(monkeypatch):
    calls = []
    monkeypatch.setattr(cli_main.logging, "basicConfig", lambda **kwargs: calls.append(kwargs))
    monkeypatch.delenv(cli_main.LOG_LEVEL_ENV_VAR, raising=False)
    return calls


def test_no_logging_by_default(basic_config_calls):
    cli_main.configure_logging(0)
    assert basic_config_calls == []


@pytest.mark.parametrize("verbose,level", [(1, logging.INFO), (2, logging.DEBUG), (3, logging.DEBUG)])
def test_verbose_levels(basic_config_calls, verbose, level):
    cli_main.configure_logging(verbose)
    assert basic_config_calls[0]["level"] == level


def test_level_from_environment(basic_config_calls, monkeypatch):
    monkeypatch.setenv(cli_main.LOG_LEVEL_ENV_VAR, "debug")
    cli_main.configure_logging(0)
    assert basic_config_calls[0]["level"] == logging.DEBUG


def test_unknown_environment_level_falls_back_to_warning(basic_config_calls, monkeypatch):
    monkeypatch.setenv(cli_main.LOG_LEVEL_ENV_VAR, "chatty")
    cli_main.configure_logging(0)
    assert basic_config_calls[0]["level"] == logging.WARNING
