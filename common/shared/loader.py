"""
Shared configuration loading and validation helpers.

Provides:
 - `load_config`: basic YAML loader
 - `load_task_config`: validated configuration for a given task
 - `split_names`: comma-separated name list normalisation
 - `cli_main`: command-line entry point exposed as the `folio-config` script
"""

from __future__ import annotations

import argparse
import json
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, Optional

from common.base.file_io import read_yaml


ConfigDict = Dict[str, Any]

DEFAULT_CONFIG_FILENAME = "config.yaml"
LOGGING_SECTION_KEY = "logging"
TASKS_SECTION_KEY = "tasks"
CONFIGS_DIR = Path(__file__).resolve().parents[2] / "configs"


TASK_SCHEMAS: Dict[str, Dict[str, Iterable[str]]] = {
    "file_index": {
        "required": [],
        "optional": ["roots", "index_name", "dry_run", "progress"],
    },
    "project_rename": {
        "required": [],
        "optional": ["roots", "ignore", "dry_run"],
    },
}

FIELD_ALIASES = {
    "root": "roots",
    "ignore_dirs": "ignore",
}

MULTI_PATH_FIELDS = {"roots"}
BOOLEAN_FIELDS = {"dry_run", "progress"}
NAME_LIST_FIELDS = {"ignore"}
NAME_FIELDS = {"index_name"}
LOGGING_ALLOWED_KEYS = {"level", "use_rich", "log_dir", "file_prefix"}

YES_VALUES = {"1", "true", "yes", "y", "on"}
NO_VALUES = {"0", "false", "no", "n", "off"}


def load_config(path: str | Path | None) -> Mapping[str, Any] | Dict[str, Any]:
    if not path:
        return {}

    cfg_path = Path(path).expanduser()
    if not cfg_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {cfg_path}")

    data = read_yaml(cfg_path)
    if data is None:
        return {}
    if not isinstance(data, Mapping):
        raise ValueError(f"Configuration root must be a mapping in {cfg_path}")

    return data or {}


def split_names(value: Any) -> List[str]:
    """Normalise a list or comma-separated string into a list of bare names."""
    if value is None:
        return []
    if isinstance(value, (list, tuple, set)):
        raw = list(value)
    else:
        raw = [value]

    names: List[str] = []
    for item in raw:
        names.extend(token.strip() for token in str(item).split(",") if token.strip())
    return names


def load_task_config(task: str, config_path: str | Path | None = None) -> ConfigDict:
    if task not in TASK_SCHEMAS:
        raise ValueError(f"Unknown task '{task}'. Expected one of: {', '.join(sorted(TASK_SCHEMAS))}")

    resolved_path = _resolve_config_path(config_path)
    root_config = dict(load_config(resolved_path))
    task_config_raw = _extract_task_config(root_config, task, resolved_path)

    task_logging_override: Dict[str, Any] = {}
    if "logging" in task_config_raw:
        logging_payload = task_config_raw.pop("logging")
        if not isinstance(logging_payload, Mapping):
            raise ValueError(
                f"Task '{task}' logging section must be a mapping in {resolved_path}"
            )
        task_logging_override = dict(logging_payload)
        invalid_logging_keys = [
            key for key in task_logging_override if key not in LOGGING_ALLOWED_KEYS
        ]
        if invalid_logging_keys:
            invalid_keys = ", ".join(sorted(invalid_logging_keys))
            raise ValueError(
                f"Task '{task}' logging section contains unsupported keys in {resolved_path}: {invalid_keys}"
            )

    config = _apply_aliases(task_config_raw)

    schema = TASK_SCHEMAS[task]
    required = set(schema.get("required", []))
    optional = set(schema.get("optional", []))
    allowed_keys = required | optional

    missing = [key for key in required if not config.get(key)]
    if missing:
        raise ValueError(
            f"Configuration '{resolved_path}' missing required fields for task '{task}': {', '.join(missing)}"
        )

    unexpected = [key for key in config if key not in allowed_keys]
    if unexpected:
        raise ValueError(
            f"Configuration '{resolved_path}' contains unsupported keys for task '{task}': {', '.join(unexpected)}"
        )

    normalized: ConfigDict = {}
    for key in allowed_keys:
        if key not in config:
            continue
        value = config[key]

        if key in MULTI_PATH_FIELDS:
            normalized[key] = _normalize_multi_path(value)
        elif key in BOOLEAN_FIELDS:
            normalized[key] = _coerce_bool(value, key, resolved_path)
        elif key in NAME_LIST_FIELDS:
            normalized[key] = split_names(value)
        elif key in NAME_FIELDS:
            normalized[key] = _coerce_name(value, key, resolved_path)
        else:
            normalized[key] = value

    normalized["__task__"] = task
    normalized["__config_path__"] = str(resolved_path)

    merged_logging = _extract_logging_settings(root_config)
    if task_logging_override:
        merged_logging.update(task_logging_override)
    merged_logging = _apply_logging_defaults(merged_logging, resolved_path)
    if merged_logging:
        normalized["__logging__"] = merged_logging
    return normalized


def _apply_aliases(config: Mapping[str, Any]) -> ConfigDict:
    result: ConfigDict = {}
    for key, value in config.items():
        canonical = FIELD_ALIASES.get(key, key)
        result[canonical] = value
    return result


def _normalize_multi_path(value: Any) -> list[str]:
    if value is None:
        raise ValueError("Expected a list of paths, received None")
    if isinstance(value, (list, tuple, set)):
        values = value
    else:
        values = [value]
    if not values:
        raise ValueError("Expected at least one path entry")
    return [str(Path(str(item)).expanduser()) for item in values]


def _coerce_bool(value: Any, field: str, config_path: Path) -> bool:
    if isinstance(value, bool):
        return value
    if value is None:
        return False
    text = str(value).strip().lower()
    if text in YES_VALUES:
        return True
    if text in NO_VALUES:
        return False
    raise ValueError(
        f"Configuration '{config_path}' field '{field}' must be a boolean."
    )


def _coerce_name(value: Any, field: str, config_path: Path) -> str:
    text = str(value).strip() if value is not None else ""
    if not text or "/" in text or "\\" in text:
        raise ValueError(
            f"Configuration '{config_path}' field '{field}' must be a plain file name."
        )
    return text


def _resolve_config_path(config_path: str | Path | None) -> Path:
    if config_path:
        return Path(config_path).expanduser()

    candidate = CONFIGS_DIR / DEFAULT_CONFIG_FILENAME
    if not candidate.exists():
        raise FileNotFoundError(
            f"No configuration path provided and default file not found: {candidate}"
        )
    return candidate


def _extract_task_config(root: Mapping[str, Any], task: str, config_path: Path) -> ConfigDict:
    if TASKS_SECTION_KEY in root:
        tasks_section = root.get(TASKS_SECTION_KEY) or {}
        if not isinstance(tasks_section, Mapping):
            raise ValueError(f"'tasks' section must be a mapping in {config_path}")
        task_payload = tasks_section.get(task) or {}
        if not isinstance(task_payload, Mapping):
            raise ValueError(f"Task '{task}' entry must be a mapping in {config_path}")
        return dict(task_payload)

    # Single-task files carry the task keys at the root.
    return {key: value for key, value in root.items() if key != LOGGING_SECTION_KEY}


def _extract_logging_settings(root: Mapping[str, Any]) -> Dict[str, Any]:
    section = root.get(LOGGING_SECTION_KEY, {})
    return dict(section) if isinstance(section, Mapping) else {}


def _apply_logging_defaults(logging_cfg: Dict[str, Any], config_path: Path) -> Dict[str, Any]:
    cfg = dict(logging_cfg)
    log_dir_value = cfg.get("log_dir")
    if log_dir_value:
        path = Path(str(log_dir_value)).expanduser()
        if not path.is_absolute():
            path = config_path.expanduser().resolve().parent / path
        cfg["log_dir"] = str(path.resolve())
    return cfg


def cli_main(argv: Optional[Iterable[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Load and validate Folio Tools YAML configs.")
    parser.add_argument("task", help=f"Task identifier ({', '.join(sorted(TASK_SCHEMAS))})")
    parser.add_argument("config_path", nargs="?", help="Path to YAML file (defaults to configs/config.yaml)")
    args = parser.parse_args(list(argv) if argv is not None else None)

    try:
        config = load_task_config(args.task, args.config_path)
    except (OSError, ValueError) as exc:
        print(f"❌ {exc}")
        return 1

    print(json.dumps(config, indent=2))
    return 0


if __name__ == "__main__":
    raise SystemExit(cli_main())
