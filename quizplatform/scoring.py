"""Scores quiz submissions against an answer key."""

from typing import Any, Mapping, Sequence

from .domain import ScoreResult

UNANSWERED = object()
"""Stands in for a missing answer; never equal to any option index."""


def _matches(selected: Any, correct: int) -> bool:
    # bool is an int subclass; True must not count as option 1.
    if isinstance(selected, bool) or not isinstance(selected, int):
        return False
    return selected == correct


def score(answer_key: Sequence[int], submitted: Mapping[Any, Any],
          passing_score: int) -> ScoreResult:
    """
    Count the submitted answers that match the answer key.

    Parameters
    ----------
    answer_key : sequence of int
        Correct option index for each question, in question order.
    submitted : mapping
        Question index -> selected option index. Questions without an entry
        are scored as incorrect; keys outside the answer key are ignored.
    passing_score : int
        Minimum (inclusive) score required to pass.

    Returns
    -------
    :class:`.ScoreResult`

    """
    correct = 0
    for index, expected in enumerate(answer_key):
        if _matches(submitted.get(index, UNANSWERED), expected):
            correct += 1
    return ScoreResult(score=correct, total=len(answer_key),
                       passed=correct >= passing_score)
