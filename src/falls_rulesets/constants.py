"""Assessment constants shared across the SDK.

These values are referenced by the engine, validation and ruleset store.

Several constants can be overridden via environment variables so that
deployments can pick a different rule-table variant without code changes.
"""

import os
from pathlib import Path

# Directory holding one sub-directory per rule-table version (v1/, v2/, ...).
# Overridable via FALLS_RULESET_DIR env var.
RULESET_DIR = Path(
    os.getenv("FALLS_RULESET_DIR", str(Path(__file__).resolve().parent / "rules"))
)

# Rule-table version used when the caller does not ask for one.
# Overridable via FALLS_RULESET_VERSION env var.
DEFAULT_RULESET_VERSION = os.getenv("FALLS_RULESET_VERSION", "v1")

# Instrument names, used as ResponseSet.instrument and in error payloads.
ISTUMBLE = "istumble"
FAST = "fast"
FRAT = "frat"
NEWS2 = "news2"

# Files every version directory must contain.
RULESET_FILES: dict[str, str] = {
    ISTUMBLE: "istumble.yaml",
    FAST: "fast.yaml",
    FRAT: "frat.yaml",
    NEWS2: "news2.yaml",
    "medications": "medications.yaml",
}
