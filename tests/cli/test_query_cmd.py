"""Tests for the query manifest command."""

import pytest
from click.testing import CliRunner

from elastic_package.cli.main import cli
from elastic_package.packages import INTEGRATIONS_MODULE


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def integrations_repo(tmp_path, monkeypatch):
    (tmp_path / "go.mod").write_text(f"module {INTEGRATIONS_MODULE}\n\ngo 1.17\n")
    packages = tmp_path / "packages"
    for name, owner in [("aws", "elastic/obs-cloud"), ("nginx", "elastic/obs-service")]:
        (packages / name).mkdir(parents=True)
        (packages / name / "manifest.yml").write_text(f"name: {name}\nowner:\n  github: {owner}\n")
    monkeypatch.chdir(tmp_path)
    return tmp_path


def test_lists_matching_packages(runner, integrations_repo):
    result = runner.invoke(
        cli, ["query", "manifest", "--key", "owner.github", "--value", "elastic/obs-cloud"]
    )

    assert result.exit_code == 0, result.output
    assert "Packages:" in result.output
    assert "aws" in result.output
    assert "nginx" not in result.output


def test_comma_separated_values_use_first(runner, integrations_repo):
    result = runner.invoke(
        cli,
        ["query", "manifest", "-k", "owner.github", "--value", "elastic/obs-service,elastic/obs-cloud"],
    )

    assert result.exit_code == 0, result.output
    assert "nginx" in result.output
    assert "aws" not in result.output


def test_no_match(runner, integrations_repo):
    result = runner.invoke(cli, ["query", "manifest", "--key", "name", "--value", "apache"])

    assert result.exit_code == 0
    assert "key name with value apache not found in any packages" in " ".join(result.output.split())


def test_skipped_packages_are_reported(runner, integrations_repo):
    broken = integrations_repo / "packages" / "broken"
    broken.mkdir()
    (broken / "manifest.yml").write_text("name: [unclosed\n")

    result = runner.invoke(cli, ["query", "manifest", "--key", "name", "--value", "aws"])

    assert result.exit_code == 0, result.output
    assert "Skipped packages:" in result.output
    assert "broken" in result.output
    assert "aws" in result.output


def test_outside_integrations_repository(runner, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)

    result = runner.invoke(cli, ["query", "manifest", "--key", "name", "--value", "aws"])

    assert result.exit_code == 1
    assert "integrations repository" in " ".join(result.output.split())


def test_blank_value_rejected(runner, integrations_repo):
    result = runner.invoke(cli, ["query", "manifest", "--key", "name", "--value", " , "])

    assert result.exit_code == 1
    assert "at least one value is required" in result.output


def test_value_is_required(runner, integrations_repo):
    result = runner.invoke(cli, ["query", "manifest", "--key", "name"])
    assert result.exit_code == 2
