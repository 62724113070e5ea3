"""Helpers to pull a structured result out of a free-form provider reply."""

from __future__ import annotations

import json
import re
from typing import Any, Dict, Optional

from pydantic import ValidationError

from models.analysis_schemas import AnalysisItem
from services.analysis.errors import (
	InvalidResultShapeError,
	ReplyDecodeError,
	UnparsableReplyError,
)

# Greedy: first "{" through last "}", across newlines.
JSON_OBJECT_PATTERN = re.compile(r"\{[\s\S]*\}")


def extract_json_candidate(text: str) -> Optional[str]:
	"""Return the brace-delimited substring of `text`, or None when absent."""
	match = JSON_OBJECT_PATTERN.search(text or "")
	return match.group(0) if match else None


def parse_reply(text: str) -> Dict[str, Any]:
	"""Locate and decode the JSON object embedded in a provider reply.

	Args:
		text: Raw reply text, possibly wrapped in prose or markdown fences.

	Returns:
		The decoded object with key order preserved.

	Raises:
		UnparsableReplyError: If no JSON-shaped substring exists.
		ReplyDecodeError: If the substring is not valid JSON.
	"""
	candidate = extract_json_candidate(text)
	if candidate is None:
		raise UnparsableReplyError(text)
	try:
		return json.loads(candidate)
	except json.JSONDecodeError as exc:
		raise ReplyDecodeError(str(exc)) from exc


def validate_result_shape(parsed: Dict[str, Any], *, strict_items: bool = False) -> None:
	"""Check the top-level shape of a decoded reply.

	`date` must be a non-empty string and `items` a list. Items pass through
	untouched unless `strict_items` is set, in which case every entry must be
	an object with string `name`, `value` and `unit`.
	"""
	date = parsed.get("date")
	if not isinstance(date, str) or not date:
		raise InvalidResultShapeError("missing or empty 'date'")

	items = parsed.get("items")
	if not isinstance(items, list):
		raise InvalidResultShapeError("'items' is not a list")

	if not strict_items:
		return
	for index, item in enumerate(items):
		try:
			AnalysisItem.model_validate(item)
		except ValidationError as exc:
			raise InvalidResultShapeError(f"item {index} is malformed: {exc.error_count()} error(s)") from exc
