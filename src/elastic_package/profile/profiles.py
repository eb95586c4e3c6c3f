"""Profile creation, loading and listing.

New profiles are rendered from the Jinja2 templates shipped with the
package, or copied from an existing profile. Every profile carries a
``profile.json`` metadata file; a directory without it is not a profile.
"""

import datetime
import getpass
import json
import shutil
from dataclasses import asdict, dataclass
from pathlib import Path

from jinja2 import Environment, PackageLoader, StrictUndefined

from elastic_package import __version__
from elastic_package.configuration import LocationManager
from elastic_package.errors import NotAProfileError, ProfileError
from elastic_package.utils.logger import get_logger

logger = get_logger("profile")

DEFAULT_PROFILE = "default"
SWARM_PROFILE = "swarm"

PROFILE_METADATA_FILE = "profile.json"
SNAPSHOT_FILE = "snapshot.yml"
PACKAGE_REGISTRY_CONFIG_FILE = "package-registry.config.yml"

# Kibana configuration is selected at deploy time by STACK_VERSION_VARIANT
KIBANA_CONFIG_VARIANTS = ["7x", "8x", "default"]

_template_env = Environment(
    loader=PackageLoader("elastic_package.profile", "templates"),
    undefined=StrictUndefined,
    keep_trailing_newline=True,
)


@dataclass
class ProfileMetadata:
    name: str
    date_created: str
    user: str
    version: str
    from_profile: str = ""
    overlay_network_name: str = ""


@dataclass(frozen=True)
class ProfileOptions:
    """Options for create_profile.

    Attributes:
        name: Name of the new profile
        from_profile: Existing profile to copy; empty renders from templates
        overwrite_existing: Replace a profile with the same name
        overlay_network_name: External network the stack services attach to;
            empty keeps the compose file default
    """

    name: str
    from_profile: str = ""
    overwrite_existing: bool = False
    overlay_network_name: str = ""


class Profile:
    """A loaded profile directory."""

    def __init__(self, profile_path: Path, metadata: ProfileMetadata):
        self.profile_path = Path(profile_path)
        self.metadata = metadata

    @property
    def profile_name(self) -> str:
        return self.metadata.name

    def __repr__(self) -> str:
        return f"Profile(name={self.profile_name!r}, path={str(self.profile_path)!r})"

    def fetch_path(self, file_name: str) -> str:
        """Absolute path of a file inside the profile."""
        return str(self.profile_path / file_name)

    def compose_env_vars(self) -> list[str]:
        """Variables referenced by the profile's compose file."""
        env = [
            f"PROFILE_NAME={self.profile_name}",
            f"STACK_PATH={self.profile_path}",
        ]
        if self.metadata.overlay_network_name:
            env.append(f"OVERLAY_NETWORK_NAME={self.metadata.overlay_network_name}")
        return env


def _current_user() -> str:
    try:
        return getpass.getuser()
    except (KeyError, OSError):
        return "unknown"


def _read_metadata(profile_path: Path) -> ProfileMetadata | None:
    metadata_file = profile_path / PROFILE_METADATA_FILE
    if not metadata_file.is_file():
        return None
    try:
        data = json.loads(metadata_file.read_text())
        return ProfileMetadata(**data)
    except (json.JSONDecodeError, TypeError) as e:
        raise ProfileError(
            f"invalid profile metadata in {metadata_file}: {e}", {"path": str(metadata_file)}
        ) from e


def _write_metadata(profile_path: Path, metadata: ProfileMetadata) -> None:
    metadata_file = profile_path / PROFILE_METADATA_FILE
    metadata_file.write_text(json.dumps(asdict(metadata), indent=2) + "\n")


def load_profile(name: str, locations: LocationManager | None = None) -> Profile:
    """Load a profile by name.

    Raises:
        NotAProfileError: The directory is missing or has no metadata
    """
    locations = locations or LocationManager()
    profile_path = locations.profiles_dir / name

    metadata = _read_metadata(profile_path)
    if metadata is None:
        raise NotAProfileError(name)
    return Profile(profile_path, metadata)


def list_profiles(locations: LocationManager | None = None) -> list[str]:
    """Names of all valid profiles, sorted."""
    locations = locations or LocationManager()
    if not locations.profiles_dir.is_dir():
        return []
    return sorted(
        entry.name
        for entry in locations.profiles_dir.iterdir()
        if entry.is_dir() and (entry / PROFILE_METADATA_FILE).is_file()
    )


def _render_profile_files(profile_path: Path, name: str, locations: LocationManager) -> None:
    context = {
        "profile_name": name,
        "profile_path": str(profile_path),
        "stack_dir": str(locations.stack_dir),
        "packages_dir": str(locations.packages_dir),
    }

    profile_path.joinpath(SNAPSHOT_FILE).write_text(
        _template_env.get_template("snapshot.yml.j2").render(context)
    )
    profile_path.joinpath(PACKAGE_REGISTRY_CONFIG_FILE).write_text(
        _template_env.get_template("package-registry.config.yml.j2").render(context)
    )

    kibana_template = _template_env.get_template("kibana.config.yml.j2")
    for variant in KIBANA_CONFIG_VARIANTS:
        profile_path.joinpath(f"kibana.config.{variant}.yml").write_text(
            kibana_template.render(context, variant=variant)
        )


def create_profile(options: ProfileOptions, locations: LocationManager | None = None) -> Profile:
    """Create a profile from templates or from an existing profile.

    Raises:
        ProfileError: The profile exists and overwrite was not requested
        NotAProfileError: ``from_profile`` names a missing profile
    """
    locations = locations or LocationManager()
    profile_path = locations.profiles_dir / options.name

    if profile_path.exists():
        if not options.overwrite_existing:
            raise ProfileError(f"profile {options.name} already exists", {"path": str(profile_path)})
        logger.debug(f"Removing existing profile at {profile_path}")
        shutil.rmtree(profile_path)

    if options.from_profile:
        if options.from_profile == DEFAULT_PROFILE:
            ensure_default_profile(locations)
        source = load_profile(options.from_profile, locations)
        shutil.copytree(
            source.profile_path,
            profile_path,
            ignore=shutil.ignore_patterns(PROFILE_METADATA_FILE),
        )
    else:
        profile_path.mkdir(parents=True)
        _render_profile_files(profile_path, options.name, locations)

    metadata = ProfileMetadata(
        name=options.name,
        date_created=datetime.datetime.now().isoformat(),
        user=_current_user(),
        version=__version__,
        from_profile=options.from_profile,
        overlay_network_name=options.overlay_network_name,
    )
    _write_metadata(profile_path, metadata)

    logger.info(f"Created profile {options.name} at {profile_path}")
    return Profile(profile_path, metadata)


def ensure_default_profile(locations: LocationManager | None = None) -> Profile:
    """Load the default profile, creating it from templates when missing."""
    locations = locations or LocationManager()
    try:
        return load_profile(DEFAULT_PROFILE, locations)
    except NotAProfileError:
        return create_profile(ProfileOptions(name=DEFAULT_PROFILE), locations)
