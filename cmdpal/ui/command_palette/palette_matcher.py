"""
Matching and ranking for the command palette.

Pure functions: given a query, a catalog and the recent commands they return
the ordered, bounded list of results the palette shows.
"""

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass

from cmdpal.config.constants import DEFAULT_MAX_RESULTS, MAX_RECENT_RESULTS

from .palette_commands import (
    CategoryInfo,
    CommandDescriptor,
    merge_categories,
    resolve_category,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MatchResult:
    """A single ranked entry in the palette."""

    command: CommandDescriptor
    is_recent: bool
    category_info: CategoryInfo


def fuzzy_match(text: str, query: str) -> bool:
    """
    Check whether query is a case-insensitive subsequence of text.

    Each query character has to appear in text in order, but not
    necessarily next to each other. An empty query matches everything.
    """
    normalized_query = query.lower()
    if not normalized_query:
        return True

    query_index = 0
    for char in text.lower():
        if char == normalized_query[query_index]:
            query_index += 1
            if query_index == len(normalized_query):
                return True
    return False


def matches_command(
    command: CommandDescriptor,
    query: str,
    categories: Mapping[str, CategoryInfo],
) -> bool:
    """Match against the label, the description or the category label."""
    return (
        fuzzy_match(command.label, query)
        or fuzzy_match(command.description or "", query)
        or fuzzy_match(resolve_category(command.category, categories).label, query)
    )


def rank_key(command: CommandDescriptor, query: str) -> tuple[bool, int, str, str]:
    """
    Sort key for a matching command.

    Labels containing the query as a substring come first, earlier
    occurrences before later ones, then alphabetical by label.
    """
    label_lower = command.label.lower()
    position = label_lower.find(query.lower())
    if position < 0:
        return (True, 0, label_lower, command.label)
    return (False, position, label_lower, command.label)


def _usable(commands: Iterable[CommandDescriptor] | None, kind: str) -> list[CommandDescriptor]:
    usable = []
    for command in commands or ():
        if command is None or not command.is_executable:
            logger.debug(f"Skipping malformed {kind} entry: {command!r}")
            continue
        usable.append(command)
    return usable


def recent_block(
    recents: Iterable[CommandDescriptor] | None,
    categories: Mapping[str, CategoryInfo],
) -> list[MatchResult]:
    """Recent commands shown ahead of the catalog, tagged as recent."""
    block = []
    for command in _usable(recents, "recent")[:MAX_RECENT_RESULTS]:
        tagged = command.as_recent()
        block.append(
            MatchResult(
                command=tagged,
                is_recent=True,
                category_info=resolve_category(tagged.category, categories),
            )
        )
    return block


def compute_results(
    query: str,
    catalog: Iterable[CommandDescriptor] | None,
    recents: Iterable[CommandDescriptor] | None = (),
    max_results: int = DEFAULT_MAX_RESULTS,
    categories: Mapping[str, CategoryInfo] | None = None,
) -> list[MatchResult]:
    """
    Compute the ordered results for a query.

    Args:
        query: Text typed by the user
        catalog: All available commands
        recents: Recently executed commands, most recent first
        max_results: Maximum number of entries returned
        categories: Category table; merged over the defaults

    Returns:
        Recent commands (empty query only) followed by the ranked matches,
        truncated to max_results.
    """
    commands = _usable(catalog, "catalog")
    if not commands or max_results <= 0:
        return []

    all_categories = merge_categories(categories)
    results: list[MatchResult] = []

    if query == "" and recents:
        results.extend(recent_block(recents, all_categories))

    filtered = [cmd for cmd in commands if matches_command(cmd, query, all_categories)]
    filtered.sort(key=lambda cmd: rank_key(cmd, query))

    results.extend(
        MatchResult(
            command=cmd,
            is_recent=False,
            category_info=resolve_category(cmd.category, all_categories),
        )
        for cmd in filtered
    )

    return results[:max_results]
