"""
Rules file loading.

The rules file is YAML. A markdown document holding a fenced ```yaml block
is accepted too; only the first block is read.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

import yaml
from pydantic import ValidationError

from cms_core.rules.models import DomainRules

logger = logging.getLogger(__name__)

RULES_PATH_ENV = "CMS_RULES_PATH"


def _extract_yaml(content: str) -> str:
    yaml_lines: list[str] = []
    in_block = False
    found_block = False

    for line in content.splitlines():
        stripped = line.strip()
        if stripped.startswith("```yaml"):
            in_block = True
            found_block = True
            continue
        if in_block and stripped.startswith("```"):
            break
        if in_block:
            yaml_lines.append(line)

    return "\n".join(yaml_lines) if found_block else content


def load_rules(path: Path | str) -> DomainRules:
    """
    Load and validate a rules file.

    Missing sections and keys take their default values.

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If the YAML is malformed or fails validation
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Rules file not found at: {path}")

    content = path.read_text(encoding="utf-8")

    try:
        data = yaml.safe_load(_extract_yaml(content))
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML syntax in rules file: {e}") from e

    try:
        rules = DomainRules.model_validate(data or {})
    except ValidationError as e:
        raise ValueError(f"Rules validation failed:\n{e}") from e

    logger.debug("Loaded domain rules from %s", path)
    return rules


def load_rules_from_env() -> DomainRules:
    """
    Load rules from the file named by CMS_RULES_PATH.

    Falls back to the built-in defaults when the variable is unset or names
    a file that does not exist. Invalid files still raise ValueError.
    """
    raw_path = os.environ.get(RULES_PATH_ENV)
    if not raw_path:
        logger.debug("%s not set, using default domain rules", RULES_PATH_ENV)
        return DomainRules()

    path = Path(raw_path)
    if not path.exists():
        logger.warning("Rules file %s not found, using default domain rules", path)
        return DomainRules()

    return load_rules(path)
