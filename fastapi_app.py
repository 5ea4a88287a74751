import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException

import config
# Configure logging for FastAPI and its modules
logging.basicConfig(level=config.LOG_LEVEL, format=config.LOG_FORMAT)
logger = logging.getLogger(__name__) # Logger for this module

# --- Project Imports ---
from agents.plot_twin_agent import PlotTwinAgent, EMPTY_TITLE_MESSAGE
from llm_providers import ProviderError
from models import AnalysisResult, AnalyzeRequest, HealthResponse
from response_parser import AnalysisParseError

ANALYSIS_FAILED_MESSAGE = "Failed to analyze film. Try again."


# --- API Key Check (Startup) ---
@asynccontextmanager
async def lifespan(app: FastAPI):
    provider = plot_twin_agent.provider
    if not provider.is_configured:
        logger.error(f"API key for provider '{provider.name}' not set. Analysis requests will fail.")
    logger.info(f"PlotTwin API started (provider: {provider.name}, model: {provider.model}).")
    yield


# --- FastAPI App Setup ---
app = FastAPI(
    title="PlotTwin API",
    description="Finds films with similar narrative DNA using an LLM provider.",
    version="0.1.0",
    lifespan=lifespan,
)

# --- Instantiate Agents ---
# The agent is stateless apart from its provider client and can be shared
plot_twin_agent = PlotTwinAgent()


# --- Endpoints ---

@app.get("/", summary="Root endpoint", tags=["General"])
async def read_root():
    return {"message": "PlotTwin API"}


@app.get("/health", response_model=HealthResponse, summary="Provider status", tags=["General"])
async def health():
    """Reports which provider is selected and whether its key is configured."""
    provider = plot_twin_agent.provider
    return HealthResponse(
        status="ok" if provider.is_configured else "degraded",
        provider=provider.name,
        model=provider.model,
        api_key_configured=provider.is_configured,
    )


@app.post("/analyze", response_model=AnalysisResult, response_model_exclude_none=True, summary="Find narrative twins", tags=["Analysis"])
def analyze(request: AnalyzeRequest):
    """Analyzes a film and returns its semantic profile and narrative twins."""
    if not request.title.strip():
        raise HTTPException(status_code=400, detail=EMPTY_TITLE_MESSAGE)

    try:
        return plot_twin_agent.analyze_film(request.title)
    except ProviderError as e:
        logger.error(f"Provider call failed for '{request.title}': {e}")
        raise HTTPException(status_code=502, detail=str(e))
    except AnalysisParseError as e:
        logger.error(f"Could not parse analysis for '{request.title}': {e}")
        raise HTTPException(status_code=502, detail=ANALYSIS_FAILED_MESSAGE)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

# --- How to run this API ---
# uvicorn fastapi_app:app --reload
# The API documentation will be available at http://127.0.0.1:8000/docs
