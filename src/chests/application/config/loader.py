"""Configuration file loader with structured error reporting.

Every way a chest file can fail to load (missing, unreadable, not JSON,
not a valid chest) surfaces as a single ``ConfigError``. Schema problems
inside a column or drawer row are also tagged with that column's and row's
id, as written in the file or as it will be generated, so the user can
find the drawer in question without counting array indexes.
"""

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from chests.application.config.schema import (
    ChestConfiguration,
    default_column_id,
    default_row_id,
)

logger = logging.getLogger(__name__)

# Prefix pydantic puts on messages raised from model validators
_VALUE_ERROR_PREFIX = "Value error, "


@dataclass(frozen=True)
class ErrorDetail:
    """One problem found while loading a configuration.

    Schema problems carry a JSON ``path``, the offending scalar ``value`` and,
    when they sit inside a column or row, a ``location`` such as
    ``column 'c1', row 'r2'``. JSON syntax problems carry ``line`` and
    ``column`` instead.
    """

    message: str
    path: str = ""
    value: Any = None
    location: str | None = None
    line: int | None = None
    column: int | None = None


class ConfigError(Exception):
    """Exception raised for configuration-related errors.

    Attributes:
        message: The primary error message
        error_type: Category of error (file_not_found, permission_denied,
            file_read_error, json_parse, validation)
        path: Path to the configuration file (if applicable)
        details: One ErrorDetail per problem found
    """

    def __init__(
        self,
        message: str,
        error_type: str = "unknown",
        path: Path | None = None,
        details: list[ErrorDetail] | None = None,
    ) -> None:
        self.message = message
        self.error_type = error_type
        self.path = path
        self.details = details or []
        super().__init__(message)

    def __str__(self) -> str:
        return self.message


def _json_path(loc: tuple[str | int, ...]) -> str:
    """Render a pydantic location as ``chest.columns[0].rows[1].construction``."""
    rendered = "".join(f"[{part}]" if isinstance(part, int) else f".{part}" for part in loc)
    return rendered.removeprefix(".")


def _item(items: Any, index: int) -> Any:
    if isinstance(items, list) and 0 <= index < len(items):
        return items[index]
    return None


def _given_id(node: Any) -> str | None:
    value = node.get("id") if isinstance(node, dict) else None
    return value if isinstance(value, str) and value else None


def _drawer_location(loc: tuple[str | int, ...], data: Any) -> str | None:
    """Name the column (and row) a schema error sits in, or None."""
    if len(loc) < 3 or loc[:2] != ("chest", "columns") or not isinstance(loc[2], int):
        return None

    chest = data.get("chest") if isinstance(data, dict) else None
    column = _item(chest.get("columns") if isinstance(chest, dict) else None, loc[2])
    column_id = _given_id(column) or default_column_id(loc[2])
    if len(loc) < 5 or loc[3] != "rows" or not isinstance(loc[4], int):
        return f"column '{column_id}'"

    row = _item(column.get("rows") if isinstance(column, dict) else None, loc[4])
    row_id = _given_id(row) or default_row_id(column_id, loc[4])
    return f"column '{column_id}', row '{row_id}'"


def _schema_problems(error: PydanticValidationError, data: Any) -> list[ErrorDetail]:
    problems: list[ErrorDetail] = []
    for err in error.errors():
        value = err.get("input")
        problems.append(
            ErrorDetail(
                message=err["msg"].removeprefix(_VALUE_ERROR_PREFIX),
                path=_json_path(err["loc"]),
                # Whole objects echo the input back; only scalars help the user.
                value=None if isinstance(value, (dict, list)) else value,
                location=_drawer_location(err["loc"], data),
            )
        )
    return problems


def _summarize(problems: list[ErrorDetail]) -> str:
    noun = "problem" if len(problems) == 1 else "problems"
    lines = [f"Configuration is not a valid chest ({len(problems)} {noun}):"]
    for problem in problems:
        where = f" [{problem.location}]" if problem.location else ""
        got = f" (got {problem.value!r})" if problem.value is not None else ""
        lines.append(f"  - {problem.path}{where}: {problem.message}{got}")
    return "\n".join(lines)


def _validate(data: Any, path: Path | None = None) -> ChestConfiguration:
    try:
        return ChestConfiguration.model_validate(data)
    except PydanticValidationError as e:
        problems = _schema_problems(e, data)
        raise ConfigError(_summarize(problems), "validation", path, problems) from e


def _read(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except FileNotFoundError as e:
        raise ConfigError(f"Config file not found: {path}", "file_not_found", path) from e
    except PermissionError as e:
        raise ConfigError(
            f"Permission denied reading config file: {path}", "permission_denied", path
        ) from e
    except OSError as e:
        raise ConfigError(f"Error reading config file: {path}: {e}", "file_read_error", path) from e


def _parse(content: str, path: Path) -> Any:
    try:
        return json.loads(content)
    except json.JSONDecodeError as e:
        raise ConfigError(
            f"Invalid JSON in config file: {path} (line {e.lineno}, column {e.colno}): {e.msg}",
            "json_parse",
            path,
            [ErrorDetail(message=e.msg, line=e.lineno, column=e.colno)],
        ) from e


def load_config(path: Path) -> ChestConfiguration:
    """Load and validate a chest configuration from a JSON file.

    Args:
        path: Path to the JSON configuration file

    Returns:
        A validated ChestConfiguration instance

    Raises:
        ConfigError: If the file cannot be read, parsed or validated.
            ``error_type`` is one of "file_not_found", "permission_denied",
            "file_read_error", "json_parse" or "validation".
    """
    config = _validate(_parse(_read(path), path), path)
    logger.debug("Loaded configuration %s (schema %s)", path, config.schema_version)
    return config


def load_config_from_dict(data: dict[str, Any]) -> ChestConfiguration:
    """Validate a chest configuration that is already in memory.

    Raises:
        ConfigError: If the data fails validation.
    """
    return _validate(data)
