"""RulesetStore — loads versioned YAML rule tables into typed models.

This is the single source of truth for rule data at runtime.  The store is
loaded once at startup; each sub-directory of the ruleset directory is one
version (``v1/``, ``v2/``, ...) holding one YAML file per instrument.

Usage::

    store = RulesetStore()          # defaults to the packaged rules/ directory
    store.load()                    # parse every version

    table = store.get("v1")
    table.news2.bands
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml

from falls_rulesets.constants import DEFAULT_RULESET_VERSION, RULESET_DIR, RULESET_FILES
from falls_rulesets.models.schema import RuleTable

logger = logging.getLogger(__name__)

# Optional per-version manifest (description etc.)
_MANIFEST = "ruleset.yaml"


def load_yaml(path: Path | str) -> Any:
    """Load a single YAML file and return the parsed contents."""
    if isinstance(path, str):
        path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Missing YAML file: {path}")
    with path.open("r", encoding="utf-8") as f:
        return yaml.safe_load(f)


class RulesetStore:
    """Loads every rule-table version under ``ruleset_dir``.

    Attributes populated after :meth:`load`:

        tables — dict[version, RuleTable]
    """

    def __init__(self, ruleset_dir: str | Path | None = None) -> None:
        self._base = Path(ruleset_dir) if ruleset_dir is not None else RULESET_DIR
        self.tables: dict[str, RuleTable] = {}

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    def load(self) -> None:
        """Parse every version directory into a ``RuleTable``.

        Call this once at startup.  Raises ``FileNotFoundError`` if the
        directory or an expected YAML file is missing, and pydantic's
        ``ValidationError`` if a table is malformed.
        """
        if not self._base.is_dir():
            raise FileNotFoundError(f"Missing ruleset directory: {self._base}")

        for version_dir in sorted(p for p in self._base.iterdir() if p.is_dir()):
            self.tables[version_dir.name] = self._load_version(version_dir)

        if not self.tables:
            raise FileNotFoundError(f"No rule-table versions under {self._base}")
        logger.info(
            "RulesetStore loaded: %d versions (%s) from %s",
            len(self.tables),
            ", ".join(self.tables),
            self._base,
        )

    def _load_version(self, version_dir: Path) -> RuleTable:
        """Load one version directory; every instrument file is required."""
        raw: dict[str, Any] = {"version": version_dir.name}
        for key, filename in RULESET_FILES.items():
            raw[key] = load_yaml(version_dir / filename)

        manifest = version_dir / _MANIFEST
        if manifest.exists():
            raw.update(load_yaml(manifest) or {})
            # the directory name is authoritative
            raw["version"] = version_dir.name

        table = RuleTable(**raw)
        logger.debug(
            "Loaded rule table %s: %d istumble, %d fast, %d frat, %d news2 items",
            table.version,
            len(table.istumble.questions),
            len(table.fast.questions),
            len(table.frat.questions),
            len(table.news2.parameters) + 1,
        )
        return table

    # ------------------------------------------------------------------
    # Lookup helpers
    # ------------------------------------------------------------------

    def versions(self) -> list[str]:
        """Loaded versions in sorted order."""
        return list(self.tables)

    def get(self, version: str | None = None) -> RuleTable:
        """Return the rule table for ``version`` (default version if None).

        Raises:
            KeyError: if the version was not loaded.
        """
        key = version or DEFAULT_RULESET_VERSION
        try:
            return self.tables[key]
        except KeyError:
            raise KeyError(f"Unknown ruleset version: {key}") from None

    def resolve_medication(self, name: str, version: str | None = None) -> dict:
        """Look up a medication by name and return a dict with display fields."""
        for med in self.get(version).medications:
            if med.name == name:
                return {"name": med.name, "brands": list(med.brands), "label": med.label}
        raise KeyError(f"Unknown medication: {name}")
