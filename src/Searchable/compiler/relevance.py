"""Relevance expression builder.

Each searchable column contributes weighted CASE terms in three tiers:

- exact      LOWER(col) = ?           weight * 15   binding: word
- prefix     LOWER(col) LIKE ?        weight * 5    binding: word%
- substring  LOWER(col) LIKE ?        weight * 1    binding: %word%

Entire-phrase mode appends two terms matched against the whole phrase:

- exact      LOWER(col) = ?           weight * 50   binding: phrase
- substring  LOWER(col) LIKE ?        weight * 30   binding: %phrase%

Terms are summed, never maxed, so one value matching several tiers or
several words accumulates score.
"""

from __future__ import annotations

from typing import Sequence

from Searchable.core.models import Expression
from Searchable.dialects.base import Dialect

EXACT_MULTIPLIER = 15
PREFIX_MULTIPLIER = 5
SUBSTRING_MULTIPLIER = 1
PHRASE_EXACT_MULTIPLIER = 50
PHRASE_SUBSTRING_MULTIPLIER = 30

_EQUALS = "="


def format_number(value: float) -> str:
    """Render a score literal; integral values drop the decimal part."""
    number = float(value)
    if number.is_integer():
        return str(int(number))
    return format(number, ".15g")


def case_compare(dialect: Dialect, column: str, operator: str, score: float) -> str:
    """Return one ``(case when ... then <score> else 0 end)`` term."""
    field = f"LOWER({dialect.quote_identifier(column)}) {operator} ?"
    return f"(case when {field} then {format_number(score)} else 0 end)"


def build_tier(
    dialect: Dialect,
    column: str,
    weight: float,
    words: Sequence[str],
    multiplier: int,
    *,
    operator: str,
    pre_word: str = "",
    post_word: str = "",
) -> Expression:
    """Build one tier: a summed CASE term per word, one binding each."""
    score = weight * multiplier
    return Expression.sum(
        [
            Expression(case_compare(dialect, column, operator, score), (f"{pre_word}{word}{post_word}",))
            for word in words
        ]
    )


def build_column_expression(
    dialect: Dialect,
    column: str,
    weight: float,
    words: Sequence[str],
    *,
    phrase: str | None = None,
    entire_text: bool = False,
    entire_text_only: bool = False,
) -> Expression | None:
    """Build the summed relevance expression for one column.

    Args:
        dialect: Active dialect policy.
        column: Column reference, possibly ``table.column``.
        weight: Positive column weight.
        words: Tokenized search words.
        phrase: Whole normalized phrase, used by entire-phrase mode.
        entire_text: Add whole-phrase terms when there is more than one word.
        entire_text_only: Use only whole-phrase terms for this column.

    Returns:
        The column expression, or ``None`` when it would have no terms.
    """
    like = dialect.like_operator()
    tiers: list[Expression] = []

    if not entire_text_only and words:
        tiers.append(build_tier(dialect, column, weight, words, EXACT_MULTIPLIER, operator=_EQUALS))
        tiers.append(
            build_tier(dialect, column, weight, words, PREFIX_MULTIPLIER, operator=like, post_word="%")
        )
        tiers.append(
            build_tier(
                dialect, column, weight, words, SUBSTRING_MULTIPLIER, operator=like, pre_word="%", post_word="%"
            )
        )

    if phrase and ((entire_text and len(words) > 1) or entire_text_only):
        tiers.append(build_tier(dialect, column, weight, [phrase], PHRASE_EXACT_MULTIPLIER, operator=_EQUALS))
        tiers.append(
            build_tier(
                dialect,
                column,
                weight,
                [phrase],
                PHRASE_SUBSTRING_MULTIPLIER,
                operator=like,
                pre_word="%",
                post_word="%",
            )
        )

    if not tiers:
        return None
    return Expression.sum(tiers)
