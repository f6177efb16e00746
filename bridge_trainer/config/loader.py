"""
Settings loader for drills.

Settings come from three layers, later layers winning key by key:

1. ``DefaultConfig`` sections (``trainer``, ``deal``, ``evaluation``, ``logging``)
2. The convention's entry in ``conventions.yaml``::

       conventions:
         gerber:
           deal:
             max_attempts: 50000

3. Overrides passed for a single drill session
"""

from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any, Optional

import structlog
import yaml

from ..errors import ConfigurationError
from .defaults import DefaultConfig, get_default_config

logger = structlog.get_logger(__name__)

CONVENTIONS_FILE = "conventions.yaml"


@dataclass(frozen=True)
class ConfigLoader:
    """Resolves the settings dictionary for one convention."""

    config_dir: Path
    defaults: DefaultConfig

    @classmethod
    def create(cls, config_dir: Optional[Path] = None) -> "ConfigLoader":
        """Loader reading from ``config_dir``, or the repository's ``config/`` directory."""
        if config_dir is None:
            config_dir = Path(__file__).parent.parent.parent / "config"

        return cls(
            config_dir=Path(config_dir),
            defaults=get_default_config(),
        )

    @property
    def conventions_file(self) -> Path:
        return self.config_dir / CONVENTIONS_FILE

    def load_convention_config(self, convention_id: str) -> dict[str, Any]:
        """
        The convention's overrides from ``conventions.yaml``.

        A missing file, a missing entry and an empty entry all mean no overrides.

        Raises:
            ConfigurationError: The file or the entry is not a mapping
        """
        if not self.conventions_file.exists():
            return {}

        with open(self.conventions_file) as f:
            document = yaml.safe_load(f) or {}

        conventions = document.get("conventions") if isinstance(document, dict) else None
        if not isinstance(conventions, dict):
            raise ConfigurationError(
                f"{self.conventions_file}: expected a 'conventions' mapping at the top level",
                context={"file": str(self.conventions_file)}
            )

        entry = conventions.get(convention_id) or {}
        if not isinstance(entry, dict):
            raise ConfigurationError(
                f"{self.conventions_file}: entry for '{convention_id}' must be a mapping",
                context={"file": str(self.conventions_file), "convention_id": convention_id}
            )
        return entry

    def merge_config(
        self,
        convention_id: str,
        session_overrides: Optional[dict[str, Any]] = None
    ) -> dict[str, Any]:
        """
        Settings for ``convention_id``: defaults, then file overrides, then
        session overrides.

        Raises:
            ConfigurationError: An override replaces a section with a non-mapping
        """
        config = asdict(self.defaults)
        config = self._apply_overrides(config, self.load_convention_config(convention_id), convention_id)
        if session_overrides:
            config = self._apply_overrides(config, session_overrides, convention_id)
        return config

    def _apply_overrides(
        self,
        settings: dict[str, Any],
        overrides: dict[str, Any],
        convention_id: str,
    ) -> dict[str, Any]:
        """Merge override sections into a copy of ``settings``; unknown sections are kept but logged."""
        merged = {section: dict(values) for section, values in settings.items()}

        for section, values in overrides.items():
            if section not in merged:
                logger.warning(
                    "Unknown settings section",
                    convention_id=convention_id,
                    section=section
                )
                merged[section] = values
                continue

            if not isinstance(values, dict):
                raise ConfigurationError(
                    f"Settings section '{section}' must be a mapping, got {type(values).__name__}",
                    context={"convention_id": convention_id, "section": section}
                )
            merged[section].update(values)

        return merged
