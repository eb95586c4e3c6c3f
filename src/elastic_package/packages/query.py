"""Manifest query engine.

Every package directory under the packages root holds a ``manifest.yml``.
Manifests are flattened into dot-separated keys (``owner.github``,
``conditions.kibana.version``, ``policy_templates.0.name``) and compared
against the queried key and value as plain strings.

A manifest that fails to load skips its package but never fails the query.

Examples:
    From the root of the integrations repository::

        result = query_manifest("packages", "owner.github", ["elastic/security-external-integrations"])
        result.matched   # ['aws', 'gcp']
        result.skipped   # [SkippedPackage(name='broken', reason='...')]
"""

import math
import re
from dataclasses import dataclass, field
from decimal import Decimal
from pathlib import Path
from typing import Any

import yaml

from elastic_package.errors import PartialLoadError, ValidationError
from elastic_package.utils.logger import get_logger

logger = get_logger("query")

MANIFEST_FILE = "manifest.yml"
GO_MOD_FILE = "go.mod"
INTEGRATIONS_MODULE = "github.com/elastic/integrations"
KEY_SEPARATOR = "."

_MODULE_DIRECTIVE = re.compile(r"^\s*module\s+(\S+)", re.MULTILINE)


@dataclass(frozen=True)
class SkippedPackage:
    name: str
    reason: str


@dataclass
class QueryResult:
    """Outcome of a manifest query.

    Attributes:
        matched: Matching package names, in directory listing order
        skipped: Packages whose manifest could not be loaded
    """

    matched: list[str] = field(default_factory=list)
    skipped: list[SkippedPackage] = field(default_factory=list)


def _format_float(value: float) -> str:
    """Shortest round-trip digits, in exponent form below 1e-4 and from 1e6 on.

    ``1.0`` renders as ``1``, ``1.5`` as ``1.5`` and ``2500000.0`` as ``2.5e+06``.
    """
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "+Inf" if value > 0 else "-Inf"

    sign, digits, exponent = Decimal(repr(value)).normalize().as_tuple()
    mantissa = "".join(map(str, digits))
    point = len(mantissa) + exponent
    text_sign = "-" if sign else ""

    exp10 = point - 1
    if exp10 < -4 or exp10 >= 6:
        fraction = f".{mantissa[1:]}" if len(mantissa) > 1 else ""
        return f"{text_sign}{mantissa[0]}{fraction}e{'-' if exp10 < 0 else '+'}{abs(exp10):02d}"
    if point <= 0:
        return f"{text_sign}0.{'0' * -point}{mantissa}"
    if point >= len(mantissa):
        return f"{text_sign}{mantissa}{'0' * (point - len(mantissa))}"
    return f"{text_sign}{mantissa[:point]}.{mantissa[point:]}"


def _as_plain_string(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return ""
    if isinstance(value, float):
        return _format_float(value)
    return str(value)


def flatten_keys(data: Any, prefix: str = "", _parents: tuple[int, ...] = ()) -> dict[str, str]:
    """Flatten nested mappings and lists into dot-separated keys.

    List items are addressed by index. Leaf values are rendered as plain
    strings.

    Raises:
        ValueError: A container holds itself, e.g. a recursive YAML alias
    """
    flat: dict[str, str] = {}

    if isinstance(data, dict):
        items = ((str(k), v) for k, v in data.items())
    elif isinstance(data, list):
        items = ((str(i), v) for i, v in enumerate(data))
    else:
        flat[prefix] = _as_plain_string(data)
        return flat

    if id(data) in _parents:
        raise ValueError(f"recursive reference at {prefix or 'the top level'}")
    parents = (*_parents, id(data))

    for key, value in items:
        path = f"{prefix}{KEY_SEPARATOR}{key}" if prefix else key
        if isinstance(value, (dict, list)) and value:
            flat.update(flatten_keys(value, path, parents))
        else:
            flat[path] = _as_plain_string(value)
    return flat


def load_manifest(package_dir: Path) -> dict[str, str]:
    """Load and flatten the manifest of one package.

    Raises:
        PartialLoadError: Missing, unreadable or malformed manifest
    """
    manifest_path = package_dir / MANIFEST_FILE
    try:
        with open(manifest_path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except (OSError, UnicodeDecodeError, yaml.YAMLError) as e:
        raise PartialLoadError(package_dir.name, f"reading {MANIFEST_FILE} failed: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise PartialLoadError(
            package_dir.name, f"{MANIFEST_FILE} is not a mapping (got {type(data).__name__})"
        )
    try:
        return flatten_keys(data)
    except ValueError as e:
        raise PartialLoadError(package_dir.name, f"{MANIFEST_FILE} is not a tree: {e}") from e


def query_manifest(root_dir: str | Path, key: str, values: list[str]) -> QueryResult:
    """Find packages whose manifest has ``key`` set to ``values[0]``.

    Only the first value is compared; further values are ignored.

    Args:
        root_dir: Directory holding one subdirectory per package
        key: Flattened manifest key
        values: Accepted values

    Raises:
        ValidationError: No value given
        OSError: The packages root can't be listed
    """
    if not values:
        raise ValidationError("at least one value is required")
    if len(values) > 1:
        logger.warning(f"Only the first value is compared, ignoring: {', '.join(values[1:])}")

    expected = values[0]
    result = QueryResult()

    package_dirs = sorted((p for p in Path(root_dir).iterdir() if p.is_dir()), key=lambda p: p.name)
    for package_dir in package_dirs:
        try:
            manifest = load_manifest(package_dir)
        except PartialLoadError as e:
            logger.debug(f"Skipping {e.package}: {e.reason}")
            result.skipped.append(SkippedPackage(e.package, e.reason))
            continue

        if key in manifest and manifest[key] == expected:
            result.matched.append(package_dir.name)

    return result


def check_integrations_root(directory: str | Path | None = None) -> None:
    """Verify that the directory is the root of the integrations repository.

    Raises:
        ValidationError: No go.mod, or it declares another module
    """
    go_mod = Path(directory or Path.cwd()) / GO_MOD_FILE
    try:
        content = go_mod.read_text(encoding="utf-8")
    except OSError as e:
        raise ValidationError(
            f"command must be run from the root of the integrations repository: {e}"
        ) from e

    match = _MODULE_DIRECTIVE.search(content)
    module = match.group(1) if match else ""
    if module != INTEGRATIONS_MODULE:
        raise ValidationError(
            "command must be run from the root of the integrations repository",
            {"module": module, "expected": INTEGRATIONS_MODULE},
        )
