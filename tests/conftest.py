# Copyright 2024 dcmcharset authors. See LICENSE file for details.
"""Fixtures used in different tests."""

import pytest
from dcmcharset import config


@pytest.fixture
def enforce_valid_values():
    value = config.settings.reading_validation_mode
    config.settings.reading_validation_mode = config.RAISE
    yield
    config.settings.reading_validation_mode = value


@pytest.fixture
def allow_reading_invalid_values():
    value = config.settings.reading_validation_mode
    config.settings.reading_validation_mode = config.WARN
    yield
    config.settings.reading_validation_mode = value


@pytest.fixture
def ignore_reading_invalid_values():
    value = config.settings.reading_validation_mode
    config.settings.reading_validation_mode = config.IGNORE
    yield
    config.settings.reading_validation_mode = value


@pytest.fixture
def enforce_writing_invalid_values():
    value = config.settings.writing_validation_mode
    config.settings.writing_validation_mode = config.RAISE
    yield
    config.settings.writing_validation_mode = value


@pytest.fixture
def allow_writing_invalid_values():
    value = config.settings.writing_validation_mode
    config.settings.writing_validation_mode = config.WARN
    yield
    config.settings.writing_validation_mode = value


@pytest.fixture
def disable_value_validation():
    with config.disable_value_validation():
        yield
