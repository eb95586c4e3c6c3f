"""Environment assembly for stack commands.

Entries are ``KEY=VALUE`` strings concatenated in the order they are added.
Nothing is deduplicated: callers avoid colliding keys by construction.
"""

import re

_MAJOR_VERSION = re.compile(r"^v?(\d+)\.")


class EnvBuilder:
    def __init__(self):
        self._vars: list[str] = []

    def with_env(self, env: str) -> "EnvBuilder":
        self._vars.append(env)
        return self

    def with_envs(self, envs: list[str]) -> "EnvBuilder":
        self._vars.extend(envs)
        return self

    def build(self) -> list[str]:
        return list(self._vars)


def select_stack_variant(version: str) -> str:
    """Variant marker for a stack version: ``7x``, ``8x`` or ``default``."""
    match = _MAJOR_VERSION.match(version)
    if not match:
        return "default"

    major = int(match.group(1))
    if major == 7:
        return "7x"
    if major == 8:
        return "8x"
    return "default"


def stack_variant_as_env(version: str) -> str:
    return f"STACK_VERSION_VARIANT={select_stack_variant(version)}"
