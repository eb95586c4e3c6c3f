"""Tests for the manifest query engine."""

import pytest

from elastic_package.errors import ValidationError
from elastic_package.packages.query import (
    INTEGRATIONS_MODULE,
    QueryResult,
    check_integrations_root,
    flatten_keys,
    query_manifest,
)


def write_package(root, name, manifest):
    package_dir = root / name
    package_dir.mkdir(parents=True)
    if manifest is not None:
        (package_dir / "manifest.yml").write_text(manifest)
    return package_dir


@pytest.fixture
def packages_root(tmp_path):
    root = tmp_path / "packages"
    root.mkdir()
    write_package(root, "a", "foo:\n  bar: x\n")
    write_package(root, "b", "foo:\n  bar: y\n")
    return root


class TestQueryManifest:
    def test_matches_single_package(self, packages_root):
        result = query_manifest(packages_root, "foo.bar", ["x"])

        assert result == QueryResult(matched=["a"], skipped=[])

    def test_no_match_is_not_an_error(self, packages_root):
        result = query_manifest(packages_root, "foo.bar", ["z"])

        assert result.matched == []
        assert result.skipped == []

    def test_missing_key(self, packages_root):
        assert query_manifest(packages_root, "foo.baz", ["x"]).matched == []

    def test_unparsable_manifest_is_skipped(self, packages_root):
        write_package(packages_root, "broken", "foo: [unclosed\n")

        result = query_manifest(packages_root, "foo.bar", ["x"])

        assert result.matched == ["a"]
        assert [s.name for s in result.skipped] == ["broken"]
        assert result.skipped[0].reason

    def test_recursive_alias_is_skipped(self, packages_root):
        write_package(packages_root, "loop", "foo: &r\n  - *r\n")

        result = query_manifest(packages_root, "foo.bar", ["x"])

        assert result.matched == ["a"]
        assert [s.name for s in result.skipped] == ["loop"]
        assert "recursive reference" in result.skipped[0].reason

    def test_missing_manifest_is_skipped(self, packages_root):
        write_package(packages_root, "empty_dir", None)

        result = query_manifest(packages_root, "foo.bar", ["y"])

        assert result.matched == ["b"]
        assert result.skipped[0].name == "empty_dir"
        assert "manifest.yml" in result.skipped[0].reason

    def test_non_mapping_manifest_is_skipped(self, packages_root):
        write_package(packages_root, "listy", "- one\n- two\n")

        result = query_manifest(packages_root, "foo.bar", ["x"])

        assert result.skipped[0].name == "listy"
        assert "not a mapping" in result.skipped[0].reason

    def test_files_in_root_are_ignored(self, packages_root):
        (packages_root / "README.md").write_text("# packages\n")

        result = query_manifest(packages_root, "foo.bar", ["x"])

        assert result.matched == ["a"]
        assert result.skipped == []

    def test_matches_in_directory_order(self, packages_root):
        write_package(packages_root, "c", "foo:\n  bar: x\n")
        write_package(packages_root, "0first", "foo:\n  bar: x\n")

        assert query_manifest(packages_root, "foo.bar", ["x"]).matched == ["0first", "a", "c"]

    def test_only_first_value_is_compared(self, packages_root):
        assert query_manifest(packages_root, "foo.bar", ["y", "x"]).matched == ["b"]

    def test_empty_values_rejected(self, packages_root):
        with pytest.raises(ValidationError):
            query_manifest(packages_root, "foo.bar", [])

    def test_scalar_values_compare_as_strings(self, tmp_path):
        write_package(tmp_path, "typed", "release: 1.0\nratio: 1.5\nenabled: true\ncount: 3\n")

        assert query_manifest(tmp_path, "release", ["1"]).matched == ["typed"]
        assert query_manifest(tmp_path, "release", ["1.0"]).matched == []
        assert query_manifest(tmp_path, "ratio", ["1.5"]).matched == ["typed"]
        assert query_manifest(tmp_path, "enabled", ["true"]).matched == ["typed"]
        assert query_manifest(tmp_path, "count", ["3"]).matched == ["typed"]

    def test_missing_root(self, tmp_path):
        with pytest.raises(OSError):
            query_manifest(tmp_path / "nope", "foo.bar", ["x"])


class TestFlattenKeys:
    @pytest.mark.parametrize(
        "value, expected",
        [
            (0.0, "0"),
            (1.0, "1"),
            (-2.5, "-2.5"),
            (100.0, "100"),
            (0.001, "0.001"),
            (0.00001, "1e-05"),
            (2500000.0, "2.5e+06"),
            (float("inf"), "+Inf"),
        ],
    )
    def test_float_rendering(self, value, expected):
        assert flatten_keys({"v": value}) == {"v": expected}

    def test_nested_mappings_and_lists(self):
        manifest = {
            "name": "aws",
            "owner": {"github": "elastic/obs-cloud"},
            "policy_templates": [{"name": "billing", "inputs": [{"type": "aws/metrics"}]}],
            "conditions": {"kibana.version": "^8.0.0"},
        }

        assert flatten_keys(manifest) == {
            "name": "aws",
            "owner.github": "elastic/obs-cloud",
            "policy_templates.0.name": "billing",
            "policy_templates.0.inputs.0.type": "aws/metrics",
            "conditions.kibana.version": "^8.0.0",
        }

    def test_null_and_bool_leaves(self):
        assert flatten_keys({"a": None, "b": False}) == {"a": "", "b": "false"}


class TestCheckIntegrationsRoot:
    def test_integrations_repository(self, tmp_path):
        (tmp_path / "go.mod").write_text(f"module {INTEGRATIONS_MODULE}\n\ngo 1.17\n")
        check_integrations_root(tmp_path)

    def test_other_module(self, tmp_path):
        (tmp_path / "go.mod").write_text("module github.com/elastic/elastic-package\n")
        with pytest.raises(ValidationError, match="root of the integrations repository"):
            check_integrations_root(tmp_path)

    def test_missing_go_mod(self, tmp_path):
        with pytest.raises(ValidationError):
            check_integrations_root(tmp_path)

    def test_defaults_to_working_directory(self, tmp_path, monkeypatch):
        (tmp_path / "go.mod").write_text(f"module {INTEGRATIONS_MODULE}\n")
        monkeypatch.chdir(tmp_path)
        check_integrations_root()
