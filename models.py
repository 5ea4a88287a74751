from pydantic import BaseModel, Field, field_validator
from typing import Optional, List, Literal

# Pydantic models for the analysis the LLM returns

ResolutionType = Literal["tragic", "redemptive", "cyclical", "ambiguous"]


class SemanticProfile(BaseModel):
    emotional_polarity: float = Field(..., ge=-1.0, le=1.0, description="-1 (bleak) to 1 (uplifting)")
    conflict_complexity: float = Field(..., ge=0.0, le=1.0)
    narrative_pace: float = Field(..., ge=0.0, le=1.0)
    resolution_type: ResolutionType

    @field_validator('resolution_type', mode='before')
    @classmethod
    def normalize_resolution_type(cls, v):
        # Models are inconsistent about casing ("Redemptive", " tragic")
        if isinstance(v, str):
            return v.strip().lower()
        return v


class BaseFilm(BaseModel):
    title: str
    year: Optional[int] = None
    plot_available: bool = True
    semantic_profile: Optional[SemanticProfile] = None


class Twin(BaseModel):
    rank: int
    title: str
    similarity_score: float = Field(..., ge=0.0, le=1.0)
    similarity_reason: str = ""
    shared_motifs: List[str] = []
    wikipedia_url: str = ""


class AnalysisResult(BaseModel):
    base_film: Optional[BaseFilm] = None
    twins: List[Twin] = []
    error: Optional[str] = None # Set by the model when it cannot analyze the film

# API Request Models

class AnalyzeRequest(BaseModel):
    title: str = Field(..., description="Film title to analyze")

# Response Models

class HealthResponse(BaseModel):
    status: str
    provider: str
    model: str
    api_key_configured: bool
