"""Review YAML parsing for hunkindex review module.

The reviewing agent writes its groups progressively to a YAML file, so the
file is often incomplete when read. Unparseable content is reported as "not
ready" (None) rather than as an error.

Contains:
- parse_review_yaml: Parse review YAML text into a ReviewDocument
- read_review_yaml: Read and parse a review YAML file
- dedent_description: Remove common indentation from a description
"""

import logging
import re
from pathlib import Path
from typing import Optional

import yaml
from pydantic import ValidationError

from hunkindex.review.models import ReviewDocument, ReviewGroup

logger = logging.getLogger(__name__)

_FENCE_OPEN_RE = re.compile(r"^```ya?ml\s*\n?", re.MULTILINE)
_FENCE_CLOSE_RE = re.compile(r"\n?```\s*$", re.MULTILINE)


def dedent_description(text: str) -> str:
    """Remove the smallest leading indentation shared by non-blank lines."""
    lines = text.split("\n")
    indents = [len(line) - len(line.lstrip()) for line in lines if line.strip()]
    if not indents or min(indents) == 0:
        return text.strip()
    min_indent = min(indents)
    return "\n".join(line[min_indent:] for line in lines).strip()


def parse_review_yaml(content: str) -> tuple[Optional[ReviewDocument], list[str]]:
    """Parse review YAML text.

    Accepts a mapping with a ``hunks`` list or a bare list of groups.
    Groups that fail validation are skipped with a warning.

    Args:
        content: Raw YAML, possibly wrapped in markdown code fences

    Returns:
        Tuple of (ReviewDocument or None if not parseable yet, list of warnings)
    """
    warnings: list[str] = []

    # Remove markdown code fences if the agent included them
    content = _FENCE_OPEN_RE.sub("", content)
    content = _FENCE_CLOSE_RE.sub("", content)
    if not content.strip():
        return None, warnings

    try:
        parsed = yaml.safe_load(content)
    except yaml.YAMLError as e:
        logger.debug("Review YAML not parseable yet: %s", e)
        return None, warnings

    if isinstance(parsed, dict):
        items = parsed.get("hunks") or []
    elif isinstance(parsed, list):
        items = parsed
    else:
        return None, warnings

    if not isinstance(items, list):
        warnings.append("Review YAML 'hunks' is not a list")
        return ReviewDocument(), warnings

    groups: list[ReviewGroup] = []
    for index, item in enumerate(items, start=1):
        if not isinstance(item, dict):
            warnings.append(f"Review group {index} is not a mapping, skipped")
            continue
        try:
            group = ReviewGroup.model_validate(item)
        except ValidationError as e:
            warnings.append(f"Review group {index} is invalid, skipped: {e.errors()[0]['msg']}")
            continue
        group.markdown_description = dedent_description(group.markdown_description)
        groups.append(group)

    return ReviewDocument(hunks=groups), warnings


def read_review_yaml(path: Path) -> tuple[Optional[ReviewDocument], list[str]]:
    """Read and parse a review YAML file.

    Args:
        path: Path to the review YAML file

    Returns:
        Tuple of (ReviewDocument or None if missing or not parseable, list of warnings)
    """
    if not path.exists():
        return None, []
    return parse_review_yaml(path.read_text())
