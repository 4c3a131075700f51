"""CLI For Config generation."""

import argparse
import sys
from pathlib import Path

from hlsstitch.core.config import HLSStitchConf
from hlsstitch.utils.logger import get_logger, setup_logger
from hlsstitch.version import __version__

logger = get_logger(__name__)


def _config_path_problems(config_path: Path, *, overwrite: bool = False) -> list[str]:
    """Reasons we can't write a config to the path, empty when it's fine."""
    problems = []

    if config_path.suffix != ".json":
        problems.append(f"Configuration file must have a .json extension, got '{config_path.suffix}'")

    if config_path.is_dir():
        problems.append(f"{config_path} is a directory, not a file")
    elif config_path.is_file() and not overwrite:
        problems.append(f"Configuration file already exists at {config_path}, use --overwrite to replace it")

    return problems


def generate_app_config_file(app_config_path: Path, *, overwrite: bool = False) -> None:
    """Generate a default configuration file, keeping valid values from an existing one."""
    problems = _config_path_problems(app_config_path, overwrite=overwrite)
    if problems:
        for problem in problems:
            logger.error(problem)
        sys.exit(1)

    config = HLSStitchConf()
    if app_config_path.is_file():  # If we are here, we are overwriting
        logger.info("Overwriting existing configuration file at %s", app_config_path)
        try:
            config = HLSStitchConf.force_load_config_file(app_config_path)
        except ValueError:
            logger.error("Failed to load existing configuration")  # noqa: TRY400 Short error for the CLI
            logger.info("Generating a new configuration file instead.")
    else:
        logger.info("Generating configuration file at %s", app_config_path)

    config.write_config(config_path=app_config_path)


def main() -> None:
    """Main CLI for config generation."""
    parser = argparse.ArgumentParser(description=f"hlsstitch CLI {__version__} for generating config.")
    parser.add_argument(
        "--app-config",
        type=Path,
        default=None,
        help="Path to save the generated application configuration file.",
    )
    parser.add_argument(
        "--overwrite",
        action="store_true",
        help="Overwrite existing configuration files if they exist.",
        default=False,
    )
    args = parser.parse_args()

    setup_logger()

    if args.app_config is None:
        logger.error("No application configuration path provided. Use --app-config to specify a path.")
        sys.exit(1)

    generate_app_config_file(app_config_path=args.app_config, overwrite=args.overwrite)
    sys.exit(0)


if __name__ == "__main__":
    main()
