"""Tests for data home resolution."""

from pathlib import Path

from elastic_package.configuration import LocationManager
from elastic_package.utils.config import DATA_HOME_ENV


def test_explicit_root(tmp_path):
    locations = LocationManager(tmp_path)

    assert locations.config_file == tmp_path / "config.yml"
    assert locations.packages_dir == tmp_path / "stack" / "development"
    assert locations.profiles_dir == tmp_path / "profiles"
    assert locations.package_registry_dockerfile == tmp_path / "stack" / "Dockerfile.package-registry"


def test_environment_root(tmp_path, monkeypatch):
    monkeypatch.setenv(DATA_HOME_ENV, str(tmp_path / "custom"))
    assert LocationManager().root_dir == tmp_path / "custom"


def test_home_default(monkeypatch):
    monkeypatch.delenv(DATA_HOME_ENV, raising=False)
    assert LocationManager().root_dir == Path.home() / ".elastic-package"
