"""Load [tool.piranha-analyzers] from pyproject.toml. Infrastructure I/O only."""

import logging
import tomllib
from pathlib import Path
from typing import Optional

from piranha_analyzers.domain.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

SECTION = "piranha-analyzers"


class ConfigFileLoader:
    """Finds the nearest pyproject.toml upward from a start directory."""

    @staticmethod
    def load_config_from_fs(start: Optional[Path] = None) -> dict[str, object]:
        """Return the [tool.piranha-analyzers] table, or {} when there is none."""
        current_path = (start or Path.cwd()).resolve()
        for directory in (current_path, *current_path.parents):
            config_file = directory / "pyproject.toml"
            if not config_file.is_file():
                continue
            try:
                with config_file.open("rb") as f:
                    data = tomllib.load(f)
            except tomllib.TOMLDecodeError as exc:
                raise ConfigurationError(f"{config_file}: {exc}") from exc
            except OSError as exc:
                logger.warning("Cannot read %s: %s", config_file, exc)
                continue
            section = data.get("tool", {}).get(SECTION, {})
            if not isinstance(section, dict):
                raise ConfigurationError(f"{config_file}: [tool.{SECTION}] must be a table")
            logger.debug("Loaded configuration from %s", config_file)
            return section
        return {}
