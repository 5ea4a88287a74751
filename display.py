from typing import List

from models import AnalysisResult, Twin

# Polarity beyond +/- this threshold reads as clearly uplifting or tragic
POLARITY_THRESHOLD = 0.3


def polarity_label(value: float) -> str:
    if value > POLARITY_THRESHOLD:
        return "Uplifting"
    if value < -POLARITY_THRESHOLD:
        return "Tragic"
    return "Ambiguous"


def as_percent(value: float) -> str:
    """0.834 -> '83%'"""
    return f"{value * 100:.0f}%"


def resolution_label(value: str) -> str:
    return value.capitalize()


def ordered_twins(result: AnalysisResult) -> List[Twin]:
    return sorted(result.twins, key=lambda twin: twin.rank)


def provider_label(name: str | None) -> str:
    labels = {"groq": "Groq", "anthropic": "Anthropic"}
    if not name:
        return "AI"
    return f"{labels.get(name.lower(), name.title())} AI"


# Characters Streamlit's markdown treats as formatting ($ starts LaTeX)
MARKDOWN_SPECIAL = "\\`*_$[]<>~|#"


def escape_markdown(text: str) -> str:
    """Backslash-escapes model-supplied text so it renders literally."""
    return "".join(f"\\{char}" if char in MARKDOWN_SPECIAL else char for char in text)
