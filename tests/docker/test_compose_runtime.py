"""Unit tests for compose command detection and daemon checks."""

import subprocess
from unittest.mock import MagicMock, patch

import pytest

from elastic_package.docker import runtime
from elastic_package.docker.runtime import get_compose_command, verify_docker_is_running
from elastic_package.errors import ExecutionError


class TestGetComposeCommand:
    """Tests for get_compose_command function."""

    @patch("shutil.which")
    @patch("subprocess.run")
    def test_prefers_compose_plugin(self, mock_run, mock_which):
        mock_which.return_value = "/usr/bin/docker"
        mock_run.return_value = MagicMock(returncode=0)

        assert get_compose_command() == ["docker", "compose"]
        assert mock_run.call_args_list[0][0][0] == ["docker", "compose", "version"]

    @patch("shutil.which")
    @patch("subprocess.run")
    def test_falls_back_to_standalone_compose(self, mock_run, mock_which):
        mock_which.side_effect = lambda name: f"/usr/bin/{name}"
        mock_run.side_effect = [MagicMock(returncode=1), MagicMock(returncode=0)]

        assert get_compose_command() == ["docker-compose"]
        assert mock_run.call_args_list[1][0][0] == ["docker-compose", "version"]

    @patch("shutil.which")
    @patch("subprocess.run")
    def test_timeout_tries_next_candidate(self, mock_run, mock_which):
        mock_which.side_effect = lambda name: f"/usr/bin/{name}"
        mock_run.side_effect = [
            subprocess.TimeoutExpired(cmd="docker compose version", timeout=5),
            MagicMock(returncode=0),
        ]

        assert get_compose_command() == ["docker-compose"]

    @patch("shutil.which")
    def test_nothing_installed(self, mock_which):
        mock_which.return_value = None

        with pytest.raises(ExecutionError, match="No compose command found"):
            get_compose_command()

    @patch("shutil.which")
    @patch("subprocess.run")
    def test_result_is_cached(self, mock_run, mock_which):
        mock_which.return_value = "/usr/bin/docker"
        mock_run.return_value = MagicMock(returncode=0)

        first = get_compose_command()
        first.append("mutated")
        second = get_compose_command()

        assert second == ["docker", "compose"]
        assert mock_run.call_count == 1
        assert runtime._cached_compose_cmd == ["docker", "compose"]


class TestVerifyDockerIsRunning:
    @patch("shutil.which")
    @patch("subprocess.run")
    def test_running(self, mock_run, mock_which):
        mock_which.return_value = "/usr/bin/docker"
        mock_run.return_value = MagicMock(returncode=0, stderr="")

        assert verify_docker_is_running() == (True, "")

    @patch("shutil.which")
    def test_not_installed(self, mock_which):
        mock_which.return_value = None

        is_running, message = verify_docker_is_running()

        assert not is_running
        assert "Install Docker" in message

    @patch("platform.system", return_value="Linux")
    @patch("shutil.which")
    @patch("subprocess.run")
    def test_daemon_down(self, mock_run, mock_which, mock_system):
        mock_which.return_value = "/usr/bin/docker"
        mock_run.return_value = MagicMock(
            returncode=1, stderr="Cannot connect to the Docker daemon at unix:///var/run/docker.sock"
        )

        is_running, message = verify_docker_is_running()

        assert not is_running
        assert "systemctl start docker" in message
