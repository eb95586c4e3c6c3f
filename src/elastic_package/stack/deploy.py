"""Stack deployment.

Deployment prepares the packages directory served by the package registry,
builds the local package registry image and then deploys the profile's
compose file. Every stage is wrapped in a StackError naming the stage; the
underlying error is chained.
"""

import shutil
from pathlib import Path

from elastic_package.builder import find_build_packages_directory
from elastic_package.configuration import LocationManager
from elastic_package.docker import ProcessRunner, commands
from elastic_package.docker.runtime import get_compose_command
from elastic_package.errors import ElasticPackageError, ExecutionError, StackError
from elastic_package.files import clear_dir, copy_all
from elastic_package.install import ApplicationConfiguration, configuration
from elastic_package.profile import SNAPSHOT_FILE
from elastic_package.stack.env import EnvBuilder, stack_variant_as_env
from elastic_package.stack.options import DeploymentOptions
from elastic_package.utils.config import CONFIG_LOAD_ERRORS
from elastic_package.utils.logger import get_logger

logger = get_logger("stack")

PACKAGE_REGISTRY_SERVICE = "package-registry"


def build_deploy_env(options: DeploymentOptions, app_config: ApplicationConfiguration) -> list[str]:
    """Environment for the compose file.

    Image references come first, then the version variant, then the
    profile's variables.
    """
    return (
        EnvBuilder()
        .with_envs(app_config.stack_image_refs(options.stack_version).as_env())
        .with_env(stack_variant_as_env(options.stack_version))
        .with_envs(options.profile.compose_env_vars())
        .build()
    )


def _prepare_packages(locations: LocationManager) -> None:
    try:
        build_packages_path, found = find_build_packages_directory()
    except OSError as e:
        raise StackError("finding build packages directory failed", e) from e

    stack_packages_dir = locations.packages_dir

    try:
        clear_dir(stack_packages_dir)
    except OSError as e:
        raise StackError("clearing package contents failed", e) from e

    if found:
        logger.debug(f"Custom build packages directory found: {build_packages_path}")
        try:
            copy_all(build_packages_path, stack_packages_dir)
        except (OSError, shutil.Error) as e:
            raise StackError("copying package contents failed", e) from e

    logger.info("Packages from the following directories will be loaded into the package-registry:")
    logger.info("- built-in packages (package-storage:snapshot Docker image)")
    if found:
        logger.info(f"- {build_packages_path}")


def _load_configuration(locations: LocationManager) -> ApplicationConfiguration:
    try:
        return configuration(locations)
    except CONFIG_LOAD_ERRORS as e:
        raise StackError("can't read application configuration", e) from e


def _compose(options: DeploymentOptions, debug: bool) -> tuple[ProcessRunner, list[str]]:
    """Runner for the compose binary and the arguments selecting the project."""
    cmd = get_compose_command()
    runner = ProcessRunner(cmd[0], debug=debug)
    compose_file = options.profile.fetch_path(SNAPSHOT_FILE)
    return runner, [*cmd[1:], "-f", compose_file, "-p", options.stack_name]


def docker_compose_build(options: DeploymentOptions, env: list[str], debug: bool = False) -> None:
    """Build the local package registry image."""
    runner, base_args = _compose(options, debug)
    runner.run(
        [*base_args, "build", PACKAGE_REGISTRY_SERVICE],
        env=env,
        description="building package registry image failed",
        stream=True,
    )


def docker_compose_up(options: DeploymentOptions, env: list[str], debug: bool = False) -> None:
    runner, base_args = _compose(options, debug)
    runner.run(
        [*base_args, "up", "-d"],
        env=env,
        description="running docker compose up failed",
        stream=True,
    )


def deploy(
    options: DeploymentOptions,
    runner: ProcessRunner,
    locations: LocationManager | None = None,
) -> None:
    """Deploy the stack to the swarm.

    Args:
        options: Deployment options
        runner: Docker process runner
        locations: Application directories

    Raises:
        StackError: A stage failed
    """
    locations = locations or LocationManager()

    _prepare_packages(locations)
    env = build_deploy_env(options, _load_configuration(locations))

    try:
        docker_compose_build(options, env, debug=runner.debug)
    except ElasticPackageError as e:
        raise StackError("building docker images failed", e) from e

    compose_file = options.profile.fetch_path(SNAPSHOT_FILE)
    try:
        commands.stack_deploy(runner, compose_file, options.stack_name, env)
    except ExecutionError as e:
        raise StackError("running docker stack deploy failed", e) from e

    logger.success(f"Stack {options.stack_name} deployed from {Path(compose_file).parent}")


def boot_up(
    options: DeploymentOptions,
    runner: ProcessRunner,
    locations: LocationManager | None = None,
) -> None:
    """Boot the stack, as a swarm stack or as a compose project."""
    if options.swarm_mode:
        deploy(options, runner, locations)
        return

    locations = locations or LocationManager()
    _prepare_packages(locations)
    env = build_deploy_env(options, _load_configuration(locations))

    try:
        docker_compose_build(options, env, debug=runner.debug)
    except ElasticPackageError as e:
        raise StackError("building docker images failed", e) from e

    try:
        docker_compose_up(options, env, debug=runner.debug)
    except ElasticPackageError as e:
        raise StackError("running docker compose failed", e) from e

    logger.success(f"Stack {options.stack_name} is up")
