"""Shared pytest fixtures for unit tests."""

from typing import Any
from pathlib import Path
import copy
import json
import sys

import pytest

# Ensure project root is importable when tests run from repository root.
PROJECT_ROOT = Path(__file__).resolve().parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))


_ANALYSIS_PAYLOAD: dict[str, Any] = {
    "base_film": {
        "title": "Inception",
        "year": 2010,
        "plot_available": True,
        "semantic_profile": {
            "emotional_polarity": 0.2,
            "conflict_complexity": 0.9,
            "narrative_pace": 0.75,
            "resolution_type": "ambiguous",
        },
    },
    "twins": [
        {
            "rank": 2,
            "title": "Paprika (2006)",
            "similarity_score": 0.81,
            "similarity_reason": "Dream invasion blurs the line between worlds.",
            "shared_motifs": ["dreams", "identity"],
            "wikipedia_url": "https://en.wikipedia.org/wiki/Paprika_(2006_film)",
        },
        {
            "rank": 1,
            "title": "The Matrix (1999)",
            "similarity_score": 0.88,
            "similarity_reason": "A constructed reality hides the truth.",
            "shared_motifs": ["simulated reality", "heist crew"],
            "wikipedia_url": "https://en.wikipedia.org/wiki/The_Matrix",
        },
    ],
}


@pytest.fixture
def analysis_payload() -> dict[str, Any]:
    """Return a fresh, complete analysis document as the model would send it."""
    return copy.deepcopy(_ANALYSIS_PAYLOAD)


@pytest.fixture
def analysis_json(analysis_payload: dict[str, Any]) -> str:
    """Return the canned analysis document serialized as the model's reply text."""
    return json.dumps(analysis_payload, indent=2)
