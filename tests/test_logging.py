"""Tests for logging utilities."""

import logging
from io import StringIO

import pytest

from qvector.backend import StatevectorBackend
from qvector.circuit import PauliX, QuantumCircuit
from qvector.logging import configure_logging, get_logger, set_log_level


def test_get_logger_namespaced():
    logger = get_logger("test_module")
    assert isinstance(logger, logging.Logger)
    assert logger.name == "qvector.test_module"
    assert get_logger("qvector.backend").name == "qvector.backend"
    assert get_logger().name == "qvector"


def test_get_logger_caching():
    assert get_logger("test_module") is get_logger("test_module")
    assert get_logger("module1") is not get_logger("module2")


def test_logger_does_not_propagate():
    assert get_logger("isolated").propagate is False


def test_logger_output():
    captured = StringIO()
    logger = get_logger("test_module")
    try:
        configure_logging(level=logging.INFO, stream=captured)
        logger.info("Test message")
        output = captured.getvalue()
        assert "Test message" in output
        assert "[INFO] qvector.test_module" in output
    finally:
        configure_logging(level=logging.WARNING)


def test_custom_format():
    captured = StringIO()
    logger = get_logger("fmt")
    try:
        configure_logging(level="warning", format_string="%(message)s!", stream=captured)
        logger.warning("hello")
        assert captured.getvalue().strip() == "hello!"
    finally:
        configure_logging(level=logging.WARNING)


def test_set_log_level_by_name():
    logger = get_logger("levels")
    try:
        set_log_level("debug")
        assert logger.level == logging.DEBUG
        assert get_logger("created_after").level == logging.DEBUG
    finally:
        set_log_level(logging.WARNING)
    assert logger.level == logging.WARNING


def test_default_level_hides_debug():
    captured = StringIO()
    logger = get_logger("quiet")
    try:
        configure_logging(stream=captured)
        logger.debug("hidden")
        assert captured.getvalue() == ""
    finally:
        configure_logging(level=logging.WARNING)


def test_backend_logs_execution_at_debug():
    captured = StringIO()
    # Make sure the backend logger exists before reconfiguring handlers.
    get_logger("qvector.backend.statevector")
    try:
        configure_logging(level=logging.DEBUG, stream=captured)
        StatevectorBackend().execute(QuantumCircuit(1).add(PauliX(0)))
        output = captured.getvalue()
        assert "Executing circuit" in output
        assert "PauliX" in output
    finally:
        configure_logging(level=logging.WARNING)


def test_rejected_instruction_logged():
    captured = StringIO()
    get_logger("qvector.circuit.core")
    try:
        configure_logging(level=logging.DEBUG, stream=captured)
        with pytest.raises(ValueError):
            QuantumCircuit(1).add(PauliX(3))
        assert "Rejected instruction" in captured.getvalue()
    finally:
        configure_logging(level=logging.WARNING)
