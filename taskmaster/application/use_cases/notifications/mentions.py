"""Resolve ``@mention`` tokens in comment text against the user directory."""

from __future__ import annotations

import re
from collections.abc import Iterable
from dataclasses import dataclass

from taskmaster.domain.entities import User

# An ``@`` not glued to a preceding word (so e-mail addresses are skipped),
# one name word, and optionally the word after it for full-name matches.
_MENTION_PATTERN = re.compile(r"(?<![\w.])@(\w+(?:-\w+)*)(?:[ \t]+(\w+(?:-\w+)*))?")


@dataclass(frozen=True)
class MentionResolution:
    """Outcome of resolving the mentions in one piece of text."""

    user_ids: tuple[str, ...]
    ambiguous: tuple[str, ...] = ()


class MentionResolver:
    """Match mention tokens in three tiers: full name, first name, last name.

    Matching is case-insensitive and the first tier with any match decides the
    token. When that tier matches more than one user the token is reported as
    ambiguous and resolves to nobody rather than to whichever user happens to
    come first in the directory.
    """

    def __init__(self, directory: Iterable[User]) -> None:
        self._users = [user for user in directory if user.id]

    def resolve(self, text: str) -> MentionResolution:
        user_ids: list[str] = []
        ambiguous: list[str] = []
        for match in _MENTION_PATTERN.finditer(text or ""):
            first_word, second_word = match.group(1), match.group(2)
            candidates, token = self._match_token(first_word, second_word)
            if len(candidates) == 1:
                user_id = candidates[0].id
                if user_id not in user_ids:
                    user_ids.append(user_id)
            elif len(candidates) > 1 and token not in ambiguous:
                ambiguous.append(token)
        return MentionResolution(user_ids=tuple(user_ids), ambiguous=tuple(ambiguous))

    def _match_token(
        self, first_word: str, second_word: str | None
    ) -> tuple[list[User], str]:
        if second_word:
            full_name = f"{first_word} {second_word}".lower()
            tier = [user for user in self._users if user.full_name.lower() == full_name]
            if tier:
                return tier, f"{first_word} {second_word}"

        word = first_word.lower()
        for tier in (
            [user for user in self._users if user.first_name.lower() == word],
            [user for user in self._users if user.last_name.lower() == word],
        ):
            if tier:
                return tier, first_word
        return [], first_word


__all__ = ["MentionResolution", "MentionResolver"]
