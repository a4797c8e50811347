"""User configuration and ``package.json`` I/O.

The optional user config lives at ``paths.config_path()``. A missing file
means defaults; a malformed one stops the run with an ``error:`` line.

Example:
    >>> from pathlib import Path
    >>> load_config(Path("missing-sprout-config.json")).template.default
    'javascript'
"""

import json
from pathlib import Path

from pydantic import BaseModel, ValidationError

from . import paths
from .io import die
from .models import SproutConfig


def load_json(path: Path) -> dict | None:
    """Return the parsed JSON at ``path``, or ``None`` when it does not exist.

    Example:
        >>> load_json(Path("missing.json")) is None
        True
    """
    if not path.is_file():
        return None
    return json.loads(path.read_text(encoding="utf-8"))


def write_json(path: Path, payload: dict | BaseModel) -> None:
    """Write ``payload`` as two-space indented JSON with a trailing newline.

    Models are dumped without ``None`` fields so optional keys stay out of
    the generated ``package.json``.
    """
    data = payload.model_dump(exclude_none=True) if isinstance(payload, BaseModel) else payload
    path.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")


def parse_config(payload: dict, source: Path | None = None) -> SproutConfig:
    """Validate a raw config mapping.

    Example:
        >>> parse_config({"conflicts": {"ignore": ["notes.txt"]}}).conflicts.ignore
        ['notes.txt']
    """
    try:
        return SproutConfig.model_validate(payload)
    except ValidationError as exc:
        location = f" at {source}" if source else ""
        die(f"invalid config{location}:\n{exc}")


def load_config(path: Path | None = None) -> SproutConfig:
    config_file = path or paths.config_path()
    try:
        payload = load_json(config_file)
    except (OSError, json.JSONDecodeError) as exc:
        die(f"invalid config at {config_file}:\n{exc}")
    if payload is None:
        return SproutConfig()
    if not isinstance(payload, dict):
        die(f"invalid config at {config_file}:\nexpected a JSON object")
    return parse_config(payload, config_file)
