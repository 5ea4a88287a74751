import os
from dotenv import load_dotenv

load_dotenv() # Load environment variables from a .env file

# Which LLM provider performs the analysis: "groq" or "anthropic"
PROVIDER = os.getenv("PLOTTWIN_PROVIDER", "groq").strip().lower()

GROQ_API_KEY = os.getenv("GROQ_API_KEY")
ANTHROPIC_API_KEY = os.getenv("ANTHROPIC_API_KEY")

GROQ_MODEL = os.getenv("GROQ_MODEL", "llama-3.3-70b-versatile")
ANTHROPIC_MODEL = os.getenv("ANTHROPIC_MODEL", "claude-sonnet-4-6")

# Generation parameters sent with every request
TEMPERATURE = float(os.getenv("PLOTTWIN_TEMPERATURE", "0.7"))
MAX_TOKENS = int(os.getenv("PLOTTWIN_MAX_TOKENS", "4000"))

# Number of narrative twins requested from the model
TWIN_COUNT = int(os.getenv("PLOTTWIN_TWIN_COUNT", "5"))

# URL the Streamlit UI uses to reach the FastAPI backend
API_BASE_URL = os.getenv("PLOTTWIN_API_URL", "http://127.0.0.1:8000").rstrip("/")

LOG_LEVEL = os.getenv("PLOTTWIN_LOG_LEVEL", "INFO").upper()
LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
