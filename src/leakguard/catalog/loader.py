# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Load and validate the detection rule catalog."""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from leakguard.core.exceptions import CatalogError
from leakguard.models.rule import Rule, RuleDefinition

logger = logging.getLogger("leakguard.catalog.loader")

CatalogSource = str | Path | Sequence[Mapping[str, Any]]

_DEFAULT_CATALOG = Path(__file__).with_name("default_rules.yml")


def default_catalog_path() -> Path:
    """Path of the catalog bundled with the package."""
    return _DEFAULT_CATALOG


def load_catalog(source: CatalogSource, *, skip_invalid: bool = False) -> list[Rule]:
    """Validate every rule record in *source* and return compiled rules.

    Parameters
    ----------
    source:
        Path to a ``.json`` / ``.yml`` / ``.yaml`` catalog, or an in-memory
        sequence of rule mappings.
    skip_invalid:
        When ``False`` (the default) the first malformed record raises
        :class:`CatalogError`. When ``True`` malformed records are logged
        and dropped.

    Raises
    ------
    CatalogError
        With the offending record's index (and name, when it has one).
    """
    records = _read_records(source)

    rules: list[Rule] = []
    seen_names: set[str] = set()
    for index, record in enumerate(records):
        try:
            rule = _build_rule(index, record, seen_names)
        except CatalogError as exc:
            if not skip_invalid:
                raise
            logger.warning("Skipping invalid rule: %s", exc)
            continue
        seen_names.add(rule.name)
        rules.append(rule)

    logger.info("Loaded %d rules from %s", len(rules), _describe(source))
    return rules


def _build_rule(index: int, record: object, seen_names: set[str]) -> Rule:
    if not isinstance(record, Mapping):
        raise CatalogError(index, f"expected a mapping, got {type(record).__name__}")

    raw_name = record.get("name")
    name = str(raw_name) if raw_name is not None else None

    try:
        definition = RuleDefinition(**record)
    except ValidationError as exc:
        raise CatalogError(index, _first_error(exc), name=name) from None
    except TypeError as exc:
        raise CatalogError(index, str(exc), name=name) from None

    if definition.name in seen_names:
        raise CatalogError(index, "duplicate rule name", name=definition.name)

    return Rule.from_definition(definition)


def _read_records(source: CatalogSource) -> Sequence[object]:
    if isinstance(source, (str, Path)):
        data = _read_file(Path(source))
    else:
        data = source

    if isinstance(data, Mapping):
        if "patterns" not in data:
            raise CatalogError(None, "expected a list of rules or a mapping with a 'patterns' key")
        data = data["patterns"]

    if not isinstance(data, Sequence) or isinstance(data, (str, bytes)):
        raise CatalogError(None, "rule records must be a list")
    return data


def _read_file(path: Path) -> object:
    if not path.is_file():
        raise CatalogError(None, f"catalog file not found: {path}")

    try:
        raw_text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise CatalogError(None, f"cannot read {path}: {exc}") from None

    if path.suffix.lower() == ".json":
        try:
            return json.loads(raw_text)
        except json.JSONDecodeError as exc:
            raise CatalogError(None, f"invalid JSON in {path.name}: {exc}") from None

    try:
        return yaml.safe_load(raw_text)
    except yaml.YAMLError as exc:
        raise CatalogError(None, f"invalid YAML in {path.name}: {exc}") from None


def _first_error(exc: ValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return str(exc)
    first = errors[0]
    field = ".".join(str(part) for part in first.get("loc", ())) or "record"
    message = str(first.get("msg", "invalid value")).removeprefix("Value error, ")
    return f"{field}: {message}"


def _describe(source: CatalogSource) -> str:
    if isinstance(source, (str, Path)):
        return str(source)
    return "in-memory catalog"
