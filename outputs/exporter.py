"""
Output Exporter
Encodes stories as an indented JSON document.
"""

from __future__ import annotations

import json
from typing import Any, Dict, List, Sequence

from models import Story


def _normalize_json_obj(obj: Any) -> Any:
    if obj is None:
        return None

    if isinstance(obj, (list, tuple)):
        return [_normalize_json_obj(item) for item in obj]

    # Pydantic v2, aliased field names (commentCount)
    model_dump = getattr(obj, "model_dump", None)
    if callable(model_dump):
        return model_dump(mode="json", by_alias=True)

    return obj


def story_to_dict(story: Story) -> Dict[str, Any]:
    """
    Encoded form of one story.

    Every key is present; values that do not apply (promoted entries) are
    null.
    """
    return _normalize_json_obj(story)


def encode_stories(stories: Sequence[Story], indent: int = 4) -> str:
    """JSON array of stories, in the given order"""
    payload: List[Dict[str, Any]] = [story_to_dict(story) for story in stories]
    return json.dumps(payload, ensure_ascii=False, indent=indent)
