from pathlib import Path

from app.analysis.exceptions import AnalysisError
from app.documents.models import DocumentType

_DEFAULT_PROMPT_DIR = Path(__file__).parent / "prompts"


def load_prompt_template(path: Path | None = None) -> str:
    """Load the analysis prompt template from a file.

    Args:
        path: Path to the prompt template file.
              Defaults to the bundled analysis_prompt.txt.

    Returns:
        The raw template string with placeholders.

    Raises:
        AnalysisError: if the file cannot be read.
    """
    if path is None:
        path = _DEFAULT_PROMPT_DIR / "analysis_prompt.txt"
    try:
        return path.read_text(encoding="utf-8")
    except OSError as exc:
        raise AnalysisError(f"Failed to load prompt template: {exc}") from exc


def load_response_structure(path: Path | None = None) -> str:
    """Load the JSON response structure shown to the model."""
    if path is None:
        path = _DEFAULT_PROMPT_DIR / "analysis_structure.json"
    try:
        return path.read_text(encoding="utf-8").strip()
    except OSError as exc:
        raise AnalysisError(f"Failed to load response structure: {exc}") from exc


def load_system_prompt(document_type: DocumentType, prompt_dir: Path | None = None) -> str:
    """Build the system prompt: the shared base plus the category's focus list.

    Categories without a focus file get the base prompt alone.
    """
    system_dir = (prompt_dir or _DEFAULT_PROMPT_DIR) / "system"
    try:
        base = (system_dir / "default.txt").read_text(encoding="utf-8").strip()
    except OSError as exc:
        raise AnalysisError(f"Failed to load system prompt: {exc}") from exc
    focus_path = system_dir / f"{document_type.value}.txt"
    if not focus_path.is_file():
        return base
    try:
        focus = focus_path.read_text(encoding="utf-8").strip()
    except OSError as exc:
        raise AnalysisError(f"Failed to load system prompt: {exc}") from exc
    return f"{base}\n\n{focus}"
