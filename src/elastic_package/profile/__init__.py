"""Stack profiles.

A profile is a named directory holding the compose file and service
configuration used to boot the stack.
"""

from .profiles import (
    DEFAULT_PROFILE,
    SNAPSHOT_FILE,
    SWARM_PROFILE,
    Profile,
    ProfileOptions,
    create_profile,
    ensure_default_profile,
    list_profiles,
    load_profile,
)

__all__ = [
    "DEFAULT_PROFILE",
    "SWARM_PROFILE",
    "SNAPSHOT_FILE",
    "Profile",
    "ProfileOptions",
    "create_profile",
    "ensure_default_profile",
    "list_profiles",
    "load_profile",
]
