"""Unit tests for the signal handler module in depexclude CLI."""

import os
import signal
import sys
from unittest.mock import MagicMock, patch

import pytest

from depexclude.cli.signal_handler import SignalHandler, cleanup, setup_signal_handling, signal_handler


@pytest.fixture
def mock_signal():
    """Create a mock for the signal module."""
    with patch("signal.signal", autospec=True) as mock:
        yield mock


@pytest.fixture
def mock_os():
    """Create a mock for os module functions used in signal handling."""
    with patch("depexclude.cli.signal_handler.os", autospec=True) as mock:
        mock.open.return_value = 123  # Mock file descriptor
        mock.dup2 = MagicMock()
        mock.devnull = "/dev/null"
        mock.O_WRONLY = os.O_WRONLY
        yield mock


@pytest.fixture
def fresh_signal_handler():
    """Create a fresh SignalHandler instance for tests.

    This avoids interference with the singleton instance.
    """
    return SignalHandler()


@pytest.fixture
def singleton_flags():
    """Restore the singleton's flags after a test changes them."""
    original_sigpipe = signal_handler.sigpipe_received.is_set()
    original_sigint = signal_handler.sigint_received.is_set()
    yield signal_handler
    for event, was_set in (
        (signal_handler.sigpipe_received, original_sigpipe),
        (signal_handler.sigint_received, original_sigint),
    ):
        if was_set:
            event.set()
        else:
            event.clear()


def test_signal_handler_initialization():
    """Test SignalHandler initialization."""
    with patch("signal.getsignal") as mock_getsignal:
        mock_getsignal.side_effect = [
            lambda sig, frame: None,  # For SIGPIPE
            lambda sig, frame: None,  # For SIGINT
        ]

        handler = SignalHandler()

        assert mock_getsignal.call_count == 2
        mock_getsignal.assert_any_call(signal.SIGPIPE)
        mock_getsignal.assert_any_call(signal.SIGINT)

        assert not handler.sigpipe_received.is_set()
        assert not handler.sigint_received.is_set()
        assert handler.original_sigpipe_handler is not None
        assert handler.original_sigint_handler is not None


def test_handle_sigpipe(fresh_signal_handler, mock_signal):
    """Test the SIGPIPE handler function."""
    fresh_signal_handler.handle_sigpipe(signal.SIGPIPE, MagicMock())

    assert fresh_signal_handler.sigpipe_received.is_set()
    assert not fresh_signal_handler.sigint_received.is_set()
    mock_signal.assert_called_once_with(signal.SIGPIPE, fresh_signal_handler.original_sigpipe_handler)


def test_handle_sigint_sets_cancellation_flag(fresh_signal_handler, mock_signal):
    """Test that SIGINT only sets the flag and restores the original handler for a second Ctrl+C."""
    fresh_signal_handler.handle_sigint(signal.SIGINT, MagicMock())

    assert fresh_signal_handler.sigint_received.is_set()
    assert not fresh_signal_handler.sigpipe_received.is_set()
    mock_signal.assert_called_once_with(signal.SIGINT, fresh_signal_handler.original_sigint_handler)


def test_setup_signal_handling(mock_signal):
    """Test signal handler setup function."""
    setup_signal_handling()

    assert mock_signal.call_count == 2
    mock_signal.assert_any_call(signal.SIGPIPE, signal_handler.handle_sigpipe)
    mock_signal.assert_any_call(signal.SIGINT, signal_handler.handle_sigint)


def test_cleanup_with_no_signals(mock_os, singleton_flags):
    """Test cleanup function when no signals were received."""
    singleton_flags.sigpipe_received.clear()
    singleton_flags.sigint_received.clear()

    cleanup()

    mock_os.open.assert_not_called()
    mock_os.dup2.assert_not_called()


def test_cleanup_with_sigpipe(mock_os, singleton_flags):
    """Test cleanup function when SIGPIPE was received."""
    singleton_flags.sigpipe_received.set()
    singleton_flags.sigint_received.clear()

    with patch.object(sys, "stdout") as mock_stdout:
        mock_stdout.fileno.return_value = 1
        cleanup()

    mock_os.open.assert_called_once_with(os.devnull, os.O_WRONLY)
    mock_os.dup2.assert_called_once_with(123, 1)  # 123 is the mock fd, 1 is stdout


def test_cleanup_with_sigint_keeps_stdout(mock_os, singleton_flags):
    """Test that an interrupted run keeps stdout, since its summary is still printed."""
    singleton_flags.sigpipe_received.clear()
    singleton_flags.sigint_received.set()

    cleanup()

    mock_os.open.assert_not_called()
    mock_os.dup2.assert_not_called()


def test_singleton_instance():
    """Test that the provided singleton instance is properly initialized."""
    assert isinstance(signal_handler, SignalHandler)
    assert signal_handler.sigpipe_received is not None
    assert signal_handler.sigint_received is not None
    assert hasattr(signal_handler, "original_sigpipe_handler")
    assert hasattr(signal_handler, "original_sigint_handler")


def test_cancel_event_is_the_sigint_flag(fresh_signal_handler, mock_signal):
    """Test that the walker's cancel event is set by SIGINT."""
    assert fresh_signal_handler.cancel_event is fresh_signal_handler.sigint_received
    assert not fresh_signal_handler.cancel_event.is_set()

    fresh_signal_handler.handle_sigint(signal.SIGINT, None)

    assert fresh_signal_handler.cancel_event.is_set()


def test_exit_code(fresh_signal_handler):
    """Test the exit code reported for each received signal."""
    assert fresh_signal_handler.exit_code() is None

    fresh_signal_handler.sigint_received.set()
    assert fresh_signal_handler.exit_code() == 130

    fresh_signal_handler.sigpipe_received.set()
    assert fresh_signal_handler.exit_code() == 141
