import logging

import config
from llm_providers import LLMProvider, get_provider
from models import AnalysisResult
from response_parser import parse_analysis

logger = logging.getLogger(__name__)

EMPTY_TITLE_MESSAGE = "Please enter a film title"

# Example document shown to the model; it is told to follow this shape exactly
OUTPUT_SCHEMA = """{
  "base_film": {
    "title": "Film Title",
    "year": 2020,
    "plot_available": true,
    "semantic_profile": {
      "emotional_polarity": 0.5,
      "conflict_complexity": 0.8,
      "narrative_pace": 0.7,
      "resolution_type": "ambiguous"
    }
  },
  "twins": [
    {
      "rank": 1,
      "title": "Film (Year)",
      "similarity_score": 0.92,
      "similarity_reason": "Brief explanation",
      "shared_motifs": ["motif1", "motif2"],
      "wikipedia_url": "https://en.wikipedia.org/wiki/Film"
    }
  ]
}"""


class PlotTwinAgent:
    def __init__(self, provider: LLMProvider | None = None, twin_count: int = config.TWIN_COUNT):
        self.system_prompt = "You are PlotTwin. Return ONLY valid JSON, no markdown."
        self.twin_count = twin_count
        self._provider = provider

    @property
    def provider(self) -> LLMProvider:
        # Built on first use so importing the API does not require a key
        if self._provider is None:
            self._provider = get_provider()
        return self._provider

    def build_prompt(self, film_title: str) -> str:
        """Prompt asking for the film's semantic profile and its narrative twins."""
        return (
            f'You are PlotTwin, a semantic narrative-matching system analyzing "{film_title}". '
            f"Find {self.twin_count} films with similar narrative DNA. "
            "semantic_profile scores: emotional_polarity from -1 (bleak) to 1 (uplifting); "
            "conflict_complexity, narrative_pace and similarity_score from 0 to 1; "
            "resolution_type is one of tragic, redemptive, cyclical, ambiguous. "
            "If you do not know the film, set plot_available to false and explain in an \"error\" field. "
            f"Return ONLY valid JSON in this exact format:\n{OUTPUT_SCHEMA}"
        )

    def analyze_film(self, film_title: str) -> AnalysisResult:
        """
        Asks the provider for the narrative twins of `film_title`.

        Raises:
            ValueError: the title is empty; no request is made.
            ProviderError: the provider call failed.
            AnalysisParseError: the reply could not be parsed.
        """
        if not film_title or not film_title.strip():
            raise ValueError(EMPTY_TITLE_MESSAGE)

        film_title = film_title.strip()
        logger.info(f"Analyzing '{film_title}' with provider '{self.provider.name}'")
        reply = self.provider.complete(self.build_prompt(film_title), self.system_prompt)
        result = parse_analysis(reply)
        logger.info(f"Analysis of '{film_title}' returned {len(result.twins)} twin(s)")
        return result
