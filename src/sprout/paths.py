"""Path helpers for target directories and Sprout config files."""

import os
from pathlib import Path

from platformdirs import user_config_dir

SPROUT_APP_NAME = "sprout"
CONFIG_FILENAME = "config.json"
CONFIG_PATH_ENV = "SPROUT_CONFIG"
CURRENT_DIRECTORY = "."

GITIGNORE_FILENAME = ".gitignore"
TEMPLATE_GITIGNORE_FILENAME = "gitignore"
PACKAGE_JSON_FILENAME = "package.json"
README_FILENAME = "README.md"
README_OLD_FILENAME = "README.old.md"
NODE_MODULES_DIRNAME = "node_modules"
YARN_LOCK_FILENAME = "yarn.lock"
NPM_LOCK_FILENAME = "package-lock.json"


def sprout_config_dir() -> Path:
    """Return the per-user Sprout config directory.

    Example:
        >>> isinstance(sprout_config_dir(), Path)
        True
    """
    return Path(user_config_dir(SPROUT_APP_NAME))


def config_path() -> Path:
    """Return the config file path, honoring ``SPROUT_CONFIG`` when set.

    Example:
        >>> config_path().suffix
        '.json'
    """
    override = os.environ.get(CONFIG_PATH_ENV, "").strip()
    if override:
        return Path(override).expanduser()
    return sprout_config_dir() / CONFIG_FILENAME


def resolve_target_directory(project_directory: str, cwd: Path) -> Path:
    """Resolve the directory a project should be created in.

    Args:
        project_directory: Name or path from the command line; ``"."`` means
            ``cwd`` itself.
        cwd: Directory the command was invoked from.

    Returns:
        Absolute path of the target directory.

    Example:
        >>> resolve_target_directory("my-app", Path("/work")).name
        'my-app'
        >>> resolve_target_directory(".", Path("/work")).name
        'work'
    """
    value = project_directory.strip()
    if value == CURRENT_DIRECTORY:
        return cwd.resolve()
    candidate = Path(value).expanduser()
    if not candidate.is_absolute():
        candidate = cwd / candidate
    return candidate.resolve()


def ensure_dir(path: Path) -> None:
    """Create ``path`` and any missing parents."""
    path.mkdir(parents=True, exist_ok=True)


def is_dir_empty(path: Path) -> bool:
    """Return True when ``path`` is missing or has no entries."""
    if not path.exists():
        return True
    return next(path.iterdir(), None) is None
