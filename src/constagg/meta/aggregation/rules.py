"""Immutable criteria filtering constants by name, plus the container expansion toggle."""
from dataclasses import dataclass, field, replace
from typing import Self


@dataclass(frozen=True, slots=True)
class MatchRules:
    """Immutable criteria for filtering constants based on their name.

    By default, the rules match every name and do not expand container-valued constants. Each
    ``with_*`` method returns a new instance (or the same one when nothing changes): a rule set
    is never modified in place. Added substrings cannot be removed again.

    Attributes:
        required: A name must contain all of them ("all").
        optional: A name must contain at least one of them ("any"), when not empty.
        excluded: A name must contain none of them ("not").
        collections: Whether the elements of container-valued constants are aggregated one by
            one instead of testing the container itself.

    Examples:
        >>> rules = MatchRules.of().with_all("WORD").with_not("CURSE")
        >>> rules.matches("GREETING_WORDS"), rules.matches("CURSE_WORDS")
        (True, False)
    """

    required: frozenset[str] = field(default_factory=frozenset)
    optional: frozenset[str] = field(default_factory=frozenset)
    excluded: frozenset[str] = field(default_factory=frozenset)
    collections: bool = False

    @classmethod
    def of(cls) -> "MatchRules":
        """Return the shared default rules: match everything, no container expansion."""
        return DEFAULT_RULES

    def with_all(self, *required: str) -> Self:
        """Also require names to contain all of ``required``."""
        merged = self.required.union(required)
        return self if merged == self.required else replace(self, required=merged)

    def with_any(self, *optional: str) -> Self:
        """Also accept names containing at least one of ``optional``."""
        merged = self.optional.union(optional)
        return self if merged == self.optional else replace(self, optional=merged)

    def with_not(self, *excluded: str) -> Self:
        """Also reject names containing any of ``excluded``."""
        merged = self.excluded.union(excluded)
        return self if merged == self.excluded else replace(self, excluded=merged)

    def with_container_expansion(self, expand: bool = True) -> Self:
        """Set whether the contents of container-valued constants should be aggregated."""
        return self if self.collections == expand else replace(self, collections=expand)

    def matches(self, name: str) -> bool:
        """Check if the provided name matches these rules."""
        return (
            all(s in name for s in self.required)
            and (not self.optional or any(s in name for s in self.optional))
            and not any(s in name for s in self.excluded)
        )

    def should_expand_containers(self) -> bool:
        return self.collections

    def __repr__(self) -> str:
        return (
            f"MatchRules(all={sorted(self.required)}, any={sorted(self.optional)}, "
            f"not={sorted(self.excluded)}, collections={self.collections})"
        )


DEFAULT_RULES = MatchRules()


def matching() -> MatchRules:
    """Return the shared default rules. Shortcut for :meth:`MatchRules.of`."""
    return DEFAULT_RULES
