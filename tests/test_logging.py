"""Tests for repository log formatting."""

from __future__ import annotations

import io
import json
import logging
from typing import Iterator

import pytest

from repositories.Log.LogManager import JsonFormatter, LaravelFormatter, configure_logging


def make_record(message: str, **extra: object) -> logging.LogRecord:
    record = logging.LogRecord('UserRepository', logging.WARNING, __file__, 1, message, None, None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestFormatters:
    """Test suite for log formatters."""

    def test_laravel_formatter(self) -> None:
        line = LaravelFormatter().format(make_record('Recreating model', context={'repository': 'users'}))

        assert 'UserRepository.WARNING: Recreating model {"repository": "users"}' in line
        assert line.startswith('[')

    def test_json_formatter(self) -> None:
        entry = json.loads(JsonFormatter().format(make_record('Recreating model')))

        assert entry['channel'] == 'UserRepository'
        assert entry['level'] == 'WARNING'
        assert entry['message'] == 'Recreating model'
        assert entry['context'] == {}


class TestConfigureLogging:
    """Test suite for configure_logging()."""

    @pytest.fixture
    def stream(self) -> Iterator[io.StringIO]:
        root = logging.getLogger()
        level = root.level
        stream = io.StringIO()
        handler = configure_logging('DEBUG', stream)
        try:
            yield stream
        finally:
            root.removeHandler(handler)
            root.setLevel(level)

    def test_repository_logs_reach_the_stream(self, stream: io.StringIO) -> None:
        logging.getLogger('CriteriaStore').debug('Pushed 1 persistent criteria')

        assert 'CriteriaStore.DEBUG: Pushed 1 persistent criteria' in stream.getvalue()
