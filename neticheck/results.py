"""Saving and loading analysis results as JSON."""

import json
import logging
from pathlib import Path

from neticheck.hints import AnalysisResult, Hint, HintType

logger = logging.getLogger(__name__)


class ResultsFormatError(ValueError):
    """The document is valid JSON but not a list of analysis results."""


def results_to_json(results: list[AnalysisResult]) -> str:
    return json.dumps([r.to_dict() for r in results], indent=2, ensure_ascii=False)


def results_from_json(text: str) -> list[AnalysisResult]:
    data = json.loads(text)
    if not isinstance(data, list):
        raise ResultsFormatError("Expected a list of results")
    results = []
    for i, entry in enumerate(data):
        if not isinstance(entry, dict) or not isinstance(entry.get("hints"), list):
            raise ResultsFormatError(f"Result #{i} is not an object with a 'hints' list")
        try:
            results.append(AnalysisResult.from_dict(entry))
        except (KeyError, TypeError, AttributeError) as e:
            raise ResultsFormatError(f"Result #{i} is malformed: {e!r}") from e
    return results


def save_results(path: Path, results: list[AnalysisResult]) -> None:
    path.write_text(results_to_json(results), encoding="utf-8")
    logger.debug("Wrote %d result(s) to %s", len(results), path)


def load_results(path: Path) -> list[AnalysisResult]:
    """Load results written by ``save_results``.

    Raises:
        OSError: The file cannot be read.
        ValueError: The file is not valid JSON or not a results document
            (``ResultsFormatError``).
    """
    results = results_from_json(path.read_text(encoding="utf-8"))
    logger.debug("Loaded %d result(s) from %s", len(results), path)
    return results


def import_results(path: Path, meta_hints: list[Hint]) -> list[AnalysisResult]:
    """Load prior results, turning a failure into an error hint."""
    try:
        return load_results(path)
    except (OSError, ValueError) as e:
        logger.warning("Could not import %s: %s", path, e)
        meta_hints.append(HintType.ERROR.with_message(f"Error on import: {e}"))
        return []
