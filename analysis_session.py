import logging
from typing import Callable, Optional

import requests
from pydantic import ValidationError

import config
from models import AnalysisResult

logger = logging.getLogger(__name__)

EMPTY_TITLE_MESSAGE = "Please enter a film title"
DEFAULT_FAILURE_MESSAGE = "Failed to analyze film. Try again."


class AnalysisRequestError(Exception):
    """Raised when the backend could not produce an analysis."""


def _error_detail(response: Optional[requests.Response]) -> Optional[str]:
    """Extracts FastAPI's `detail` message from an error response, if any."""
    if response is None or not response.content:
        return None
    try:
        detail = response.json().get("detail")
    except (ValueError, AttributeError):
        return None
    # Validation errors come back as a list of dicts
    return detail if isinstance(detail, str) else None


def request_analysis(title: str, base_url: Optional[str] = None) -> AnalysisResult:
    """
    Asks the PlotTwin backend to analyze `title`.

    Raises:
        AnalysisRequestError: connection failure, non-2xx status or a
            response body that is not an AnalysisResult.
    """
    url = f"{base_url or config.API_BASE_URL}/analyze"
    try:
        logger.info(f"Calling API: POST {url}")
        response = requests.post(url, json={"title": title})
        response.raise_for_status() # Raise an HTTPError for bad responses (4xx or 5xx)
    except requests.exceptions.RequestException as e:
        status_code = e.response.status_code if e.response is not None else 'Unknown'
        logger.error(f"API Error ({status_code}): {e}")
        detail = _error_detail(e.response)
        raise AnalysisRequestError(detail or DEFAULT_FAILURE_MESSAGE) from e

    try:
        return AnalysisResult.model_validate(response.json())
    except (ValueError, ValidationError) as e:
        logger.error(f"Backend returned an unexpected body: {e}")
        raise AnalysisRequestError(DEFAULT_FAILURE_MESSAGE) from e


def fetch_backend_status(base_url: Optional[str] = None) -> Optional[dict]:
    """Returns the backend's /health payload, or None if it is unreachable."""
    url = f"{base_url or config.API_BASE_URL}/health"
    try:
        response = requests.get(url)
        response.raise_for_status()
        return response.json()
    except (requests.exceptions.RequestException, ValueError) as e:
        logger.warning(f"Backend status unavailable at {url}: {e}")
        return None


class AnalysisSession:
    """Request state for one page view: input, result, loading flag and error."""

    def __init__(self):
        self.film_input = ""
        self.result: Optional[AnalysisResult] = None
        self.loading = False
        self.error = ""

    def begin(self, title: str) -> bool:
        """
        Starts a request for `title`. An empty title only sets `error` and
        returns False; otherwise the previous result is discarded and
        `loading` is set until `run` resolves it.
        """
        self.film_input = title or ""
        if not self.film_input.strip():
            self.error = EMPTY_TITLE_MESSAGE
            return False

        self.loading = True
        self.error = ""
        self.result = None
        return True

    def submit(self, title: str, analyze: Callable[[str], AnalysisResult] = request_analysis) -> Optional[AnalysisResult]:
        """Runs one analysis: `begin` followed by `run`."""
        if not self.begin(title):
            return None
        return self.run(analyze)

    def run(self, analyze: Callable[[str], AnalysisResult] = request_analysis) -> Optional[AnalysisResult]:
        """Performs the pending request and always clears `loading`."""
        try:
            self.result = analyze(self.film_input.strip())
        except AnalysisRequestError as e:
            self.error = str(e) or DEFAULT_FAILURE_MESSAGE
        finally:
            self.loading = False
        return self.result
