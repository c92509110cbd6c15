"""Project-level configuration and scaffolding.

A project directory holds an optional ``formulacalc.yaml``::

    preset: extended          # standard | extended
    functions: [sin, cos]     # optional: overrides the preset's function table
    operators: ["+", "-"]     # optional: overrides the preset's operators
    variables:                # optional: default bindings
      g: 9.81
    logging_enabled: true
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

from formulacalc.formulas.config import PRESETS, FormulaConfig, build_config
from formulacalc.formulas.errors import FormulaConfigError

CONFIG_FILENAME = "formulacalc.yaml"

DEFAULT_PROJECT_CONFIG: dict[str, Any] = {
    "preset": "standard",
    "functions": None,  # default: the preset's function table
    "operators": None,  # default: the preset's operators
    "variables": {},
    "logging_enabled": True,
    "logging_fsync": False,
    "logging_tail_bytes": 2_097_152,  # 2 MB
}

DEMO_CONFIG = """\
# formulacalc project configuration
#
# preset: standard = sin cos tan log10 log exp sqrt abs asin acos atan, + - * / ^
#         extended = standard + sinh cosh tanh asinh acosh atanh cot sec csc, and %
preset: standard

# Function names are tried in order; list longer names before their prefixes.
# functions: [log10, log, sqrt]
# operators: ["+", "-", "*", "/", "^"]

# Default variable bindings (single letters), overridable on the command line.
variables: {}

logging_enabled: true
logging_fsync: false
"""


def load_project_config(project_dir: Path) -> dict[str, Any]:
    """Load project configuration from ``formulacalc.yaml``, with defaults.

    Args:
        project_dir: Root directory of the project.

    Returns:
        Merged configuration dict.  Missing file means all defaults.

    Raises:
        FormulaConfigError: If the file is not valid YAML or not a mapping.
    """
    config = dict(DEFAULT_PROJECT_CONFIG)
    config_path = Path(project_dir) / CONFIG_FILENAME
    if config_path.exists():
        try:
            user_config = yaml.safe_load(config_path.read_text()) or {}
        except yaml.YAMLError as exc:
            raise FormulaConfigError(f"Invalid YAML in {config_path}: {exc}") from exc
        if not isinstance(user_config, dict):
            raise FormulaConfigError(f"{config_path} must contain a mapping")
        config.update(user_config)
    return config


def formula_config_from_project(cfg: dict[str, Any]) -> FormulaConfig:
    """Build the engine configuration described by a project config dict.

    Raises:
        FormulaConfigError: Unknown preset, function name or operator symbol.
    """
    preset = cfg.get("preset") or "standard"
    if preset not in PRESETS:
        raise FormulaConfigError(
            f"Unknown preset: {preset!r}. Available: {sorted(PRESETS)}"
        )
    preset_functions, preset_operators = PRESETS[preset]
    functions = cfg.get("functions")
    operators = cfg.get("operators")
    if functions is not None and not isinstance(functions, list):
        raise FormulaConfigError("'functions' must be a list of names")
    if operators is not None and not isinstance(operators, list):
        raise FormulaConfigError("'operators' must be a list of symbols")
    return build_config(
        [str(f) for f in functions] if functions is not None else preset_functions,
        [str(o) for o in operators] if operators is not None else preset_operators,
    )


def project_variables(cfg: dict[str, Any]) -> dict[str, float]:
    """Default variable bindings declared in the project config.

    Raises:
        FormulaConfigError: If ``variables`` is not a name -> number mapping.
    """
    raw = cfg.get("variables") or {}
    if not isinstance(raw, dict):
        raise FormulaConfigError("'variables' must be a mapping of name to number")
    bindings: dict[str, float] = {}
    for name, value in raw.items():
        try:
            bindings[str(name)] = float(value)
        except (TypeError, ValueError) as exc:
            raise FormulaConfigError(
                f"Variable {name!r} must be a number, got {value!r}"
            ) from exc
    return bindings


def scaffold_project(target_dir: Path) -> Path:
    """Create a project directory with a default ``formulacalc.yaml``.

    Args:
        target_dir: Directory to create (must not already contain a config).

    Returns:
        The project directory.

    Raises:
        FileExistsError: If ``formulacalc.yaml`` already exists.
    """
    target_dir = Path(target_dir)
    config_path = target_dir / CONFIG_FILENAME
    if config_path.exists():
        raise FileExistsError(f"{CONFIG_FILENAME} already exists in {target_dir}")
    target_dir.mkdir(parents=True, exist_ok=True)
    config_path.write_text(DEMO_CONFIG)
    (target_dir / "logs").mkdir(exist_ok=True)
    return target_dir
