"""Unit tests for the Time Machine exclusion backend."""

import subprocess
from unittest.mock import patch

import pytest

from depexclude.exceptions import ExclusionApplyError
from depexclude.exclusion.backends import BaseExclusionBackend, TimeMachineBackend

PATH = "/Users/u/app/node_modules"


def completed(returncode=0, stdout="", stderr=""):
    return subprocess.CompletedProcess(args=[], returncode=returncode, stdout=stdout, stderr=stderr)


@pytest.fixture
def mock_run():
    with patch("depexclude.exclusion.backends.subprocess.run") as mock:
        yield mock


def test_base_backend_is_abstract():
    with pytest.raises(TypeError):
        BaseExclusionBackend()


def test_is_available():
    with patch("depexclude.exclusion.backends.shutil.which", return_value="/usr/bin/tmutil") as mock_which:
        assert TimeMachineBackend.is_available() is True
        mock_which.assert_called_once_with("tmutil")

    with patch("depexclude.exclusion.backends.shutil.which", return_value=None):
        assert TimeMachineBackend.is_available() is False


def test_is_excluded(mock_run):
    mock_run.return_value = completed(stdout=f"[Excluded]    {PATH}\n")

    assert TimeMachineBackend().is_excluded(PATH) is True

    command = mock_run.call_args.args[0]
    assert command == ["tmutil", "isexcluded", PATH]
    assert mock_run.call_args.kwargs["check"] is False
    assert mock_run.call_args.kwargs["timeout"] == 30.0


def test_is_not_excluded(mock_run):
    mock_run.return_value = completed(stdout=f"[Included]    {PATH}\n")

    assert TimeMachineBackend().is_excluded(PATH) is False


def test_add_exclusion(mock_run):
    mock_run.return_value = completed()

    TimeMachineBackend(executable="/usr/bin/tmutil").add_exclusion(PATH)

    mock_run.assert_called_once()
    assert mock_run.call_args.args[0] == ["/usr/bin/tmutil", "addexclusion", PATH]


def test_nonzero_exit_reports_stderr(mock_run):
    mock_run.return_value = completed(returncode=1, stderr="Error (100002): Operation not permitted\n")

    with pytest.raises(ExclusionApplyError) as exc_info:
        TimeMachineBackend().add_exclusion(PATH)

    assert exc_info.value.path == PATH
    assert exc_info.value.reason == "tmutil addexclusion exited with status 1: Error (100002): Operation not permitted"


def test_nonzero_exit_without_output(mock_run):
    mock_run.return_value = completed(returncode=2)

    with pytest.raises(ExclusionApplyError) as exc_info:
        TimeMachineBackend().is_excluded(PATH)

    assert exc_info.value.reason == "tmutil isexcluded exited with status 2"


def test_missing_executable(mock_run):
    mock_run.side_effect = FileNotFoundError(2, "No such file or directory")

    with pytest.raises(ExclusionApplyError, match="tmutil not found"):
        TimeMachineBackend().is_excluded(PATH)


def test_timeout(mock_run):
    mock_run.side_effect = subprocess.TimeoutExpired(cmd="tmutil", timeout=5)

    with pytest.raises(ExclusionApplyError, match="timed out after 5s"):
        TimeMachineBackend(timeout=5).add_exclusion(PATH)


def test_other_os_error(mock_run):
    mock_run.side_effect = PermissionError(13, "Permission denied")

    with pytest.raises(ExclusionApplyError, match="cannot run tmutil"):
        TimeMachineBackend().add_exclusion(PATH)
