"""Research summary formatting."""

from collections.abc import Sequence

from storyweave.domain.research import SearchResult

NO_RESULTS_SUMMARY = "No relevant research found for this topic."

MAX_RESULTS = 3
MAX_PART_CHARS = 200
MAX_SUMMARY_CHARS = 500
SEPARATOR = " | "


def summarize_results(results: Sequence[SearchResult]) -> str:
    """Join up to three results into one short summary string.

    Each part is ``"<title>: <snippet>"`` cut to 200 characters; the joined
    summary is cut to 500. An empty result set yields a fixed sentinel.
    """
    if not results:
        return NO_RESULTS_SUMMARY

    parts = [
        f"{result.title}: {result.snippet}"[:MAX_PART_CHARS]
        for result in results[:MAX_RESULTS]
    ]
    return SEPARATOR.join(parts)[:MAX_SUMMARY_CHARS]
