"""Build a SkillerConfig from the settings file and environment.

The settings file is optional JSON at ``~/.config/skiller/config.json`` with
the same keys as :class:`SkillerConfig` (``search``, ``commands``,
``project_root``). A missing or corrupt file is ignored.
"""

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from pydantic import ValidationError

from .schema import SkillerConfig

logger = logging.getLogger(__name__)

HOME_ENV_VAR = "SKILLER_HOME"


def settings_path(home: Path) -> Path:
    return home / ".config" / "skiller" / "config.json"


def _read_settings(path: Path) -> Dict[str, Any]:
    if not path.exists():
        return {}
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        logger.warning(f"Ignoring unreadable settings file {path}: {e}")
        return {}
    if not isinstance(data, dict):
        logger.warning(f"Ignoring settings file {path}: expected a JSON object")
        return {}
    return data


def load_config(
    home: Optional[Path] = None,
    project_root: Optional[Path] = None,
    **overrides: Any,
) -> SkillerConfig:
    """Load configuration: defaults < settings file < explicit arguments"""
    if home is None:
        env_home = os.environ.get(HOME_ENV_VAR)
        home = Path(env_home).expanduser() if env_home else Path.home()

    data = _read_settings(settings_path(home))
    data.pop("home_directory", None)
    data.pop("agents", None)
    data["home_directory"] = home
    if project_root is not None:
        data["project_root"] = project_root
    data.update(overrides)

    valid, errors = ConfigValidator.validate_config(data)
    if not valid:
        for error in errors:
            logger.warning(f"Invalid setting {error}")
        # Fall back to defaults for this home directory
        defaults: Dict[str, Any] = {"home_directory": home}
        if project_root is not None:
            defaults["project_root"] = project_root
        return SkillerConfig(**defaults)
    return SkillerConfig(**data)


class ConfigValidator:
    """Checks settings before they are turned into a SkillerConfig"""

    @staticmethod
    def validate_config(config_dict: Dict) -> Tuple[bool, List[str]]:
        """(True, []) when the settings build a SkillerConfig, else (False, ["search.limit: ...", ...])"""
        try:
            SkillerConfig(**config_dict)
        except ValidationError as e:
            return False, [
                f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}"
                for error in e.errors()
            ]
        return True, []
