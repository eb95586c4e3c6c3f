"""Tests for decoding docker inspect output."""

import json

import pytest

from elastic_package.docker.inspect import decode_containers, decode_networks
from elastic_package.errors import DecodeError

CONTAINERS = [
    {
        "Id": "4f2c",
        "Name": "/elastic-package-stack_kibana_1",
        "State": {
            "Status": "running",
            "ExitCode": 0,
            "Health": {
                "Status": "healthy",
                "Log": [
                    {
                        "Start": "2022-03-03T10:00:00.123456789Z",
                        "End": "2022-03-03T10:00:01.1Z",
                        "ExitCode": 0,
                        "Output": "ok",
                    }
                ],
            },
        },
    },
    {"Id": "9a1b", "State": {"Status": "exited", "ExitCode": 137}},
]


class TestDecodeContainers:
    def test_decodes_state_and_health(self):
        containers = decode_containers(json.dumps(CONTAINERS))

        assert [c.id for c in containers] == ["4f2c", "9a1b"]
        kibana = containers[0]
        assert kibana.state.status == "running"
        assert kibana.state.health.status == "healthy"
        assert kibana.state.health.log[0].exit_code == 0
        assert kibana.state.health.log[0].start.microsecond == 123456
        assert kibana.state.health.log[0].output == "ok"

    def test_missing_health_is_none(self):
        containers = decode_containers(json.dumps(CONTAINERS))
        assert containers[1].state.health is None
        assert containers[1].state.exit_code == 137

    def test_null_health_log(self):
        raw = json.dumps([{"Id": "x", "State": {"Health": {"Status": "starting", "Log": None}}}])
        assert decode_containers(raw)[0].state.health.log == []

    def test_string_form_uses_docker_field_names(self):
        container = decode_containers(json.dumps(CONTAINERS))[1]
        assert '"Id":"9a1b"' in str(container)

    @pytest.mark.parametrize("raw", ["{}", "[1]", "not json", '[{"State": []}]'])
    def test_unexpected_shape_raises_decode_error(self, raw):
        with pytest.raises(DecodeError) as exc_info:
            decode_containers(raw, stderr="warning: something")
        assert "warning: something" in str(exc_info.value)


class TestDecodeNetworks:
    def test_decodes_attached_containers(self):
        raw = json.dumps(
            [
                {
                    "Name": "elastic-package-stack_default",
                    "Id": "abc",
                    "Containers": {
                        "4f2c": {"Name": "kibana", "IPv4Address": "172.18.0.2/16"},
                        "9a1b": {"Name": "elasticsearch"},
                    },
                }
            ]
        )

        network = decode_networks(raw)[0]

        assert network.name == "elastic-package-stack_default"
        assert network.container_names() == {"4f2c": "kibana", "9a1b": "elasticsearch"}

    def test_null_containers(self):
        raw = json.dumps([{"Name": "empty", "Id": "1", "Containers": None}])
        assert decode_networks(raw)[0].containers == {}

    def test_empty_list(self):
        assert decode_networks(b"[]") == []

    def test_object_instead_of_list(self):
        with pytest.raises(DecodeError):
            decode_networks(b'{"Name": "x"}')
