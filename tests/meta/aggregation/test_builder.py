"""
MIT License

Copyright (c) 2025 Sébastien Gachoud

Permission is hereby granted, free of charge, to any person obtaining a copy
of this software and associated documentation files (the "Software"), to deal
in the Software without restriction, including without limitation the rights
to use, copy, modify, merge, publish, distribute, sublicense, and/or sell
copies of the Software, and to permit persons to whom the Software is
furnished to do so, subject to the following conditions:

The above copyright notice and this permission notice shall be included in all
copies or substantial portions of the Software.

THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND, EXPRESS OR
IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF MERCHANTABILITY,
FITNESS FOR A PARTICULAR PURPOSE AND NONINFRINGEMENT. IN NO EVENT SHALL THE
AUTHORS OR COPYRIGHT HOLDERS BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER
LIABILITY, WHETHER IN AN ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING FROM,
OUT OF OR IN CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER DEALINGS IN THE
SOFTWARE.

-------------------------------------------------------------------------------

Author: Sébastien Gachoud
Created: 2026-10-19
Description: Tests for the fluent aggregation API.
🦙
"""

__author__ = "Sébastien Gachoud"
__license__ = "MIT"

import errno
from typing import Annotated, Any

import pytest

from constagg.aggregates import (
    AggregatedResult,
    Constant,
    IllegalUsageError,
    MatchRules,
    NamespaceSource,
    PendingAggregate,
    TypedAggregate,
    from_module,
    from_source,
    from_this_scope,
)
from constagg.config.settings import ConstaggSettings
from constagg.tokens import capture

MODULE_GREETING = "hello"
MODULE_FAREWELL = "bye"
MODULE_WORDS: Annotated[tuple[str, ...], AggregatedResult] = (
    from_this_scope()
    .constants_of_type(str)
    .matching(MatchRules.of().with_all("MODULE_"))
    .to_list()
)


class Words:
    """Test"""

    HELLO = "hello"
    BYE = "bye"
    COUNT = 2
    GREETINGS = ("hi", "hey")


def scope_of_caller() -> PendingAggregate:
    return from_this_scope(depth=1)


# =============================================================================
# Fluent Chain Tests
# =============================================================================


class TestFluentChain:
    """Test the source -> type -> rules -> materialization chain."""

    def test_to_list(self):
        """Test the shortest chain."""
        assert from_source(Words).constants_of_type(str).to_list() == ("hello", "bye")

    def test_to_set(self):
        """Test materializing into a set."""
        aggregate = from_source(Words).constants_of_type(str)
        rules = MatchRules.of().with_container_expansion()

        assert aggregate.matching(rules).to_set() == frozenset({"hello", "bye", "hi", "hey"})

    def test_to_set_of_lists(self):
        """Test that list constants cannot be collected into a set."""

        class Source:
            """Test"""

            DEFAULTS = [1, 2]

        with pytest.raises(IllegalUsageError, match="not hashable"):
            from_source(Source).constants_of_type(list).to_set()

    def test_to_collection(self):
        """Test materializing into a caller-provided collection."""
        assert from_source(Words).constants_of_type(int).to_collection(list) == [2]

    def test_iteration(self):
        """Test iterating over the matched values."""
        assert list(from_source(Words).constants_of_type(str)) == ["hello", "bye"]

    def test_constants(self):
        """Test iterating over the matched constants."""
        constants = list(from_source(Words).constants_of_type(int).constants())

        assert constants == [Constant(Words, "COUNT", 2, False)]

    def test_visit(self):
        """Test visiting the matched constants."""
        seen: dict[str, str] = {}
        from_source(Words).constants_of_type(str).visit(seen.__setitem__)

        assert seen == {"HELLO": "hello", "BYE": "bye"}

    def test_typed_aggregate_holds_a_token(self):
        """Test that the type is captured once."""
        aggregate = from_source(Words).constants_of_type(list[str])

        assert isinstance(aggregate, TypedAggregate)
        assert aggregate.type == capture(list[str])

    def test_fresh_scan_each_time(self):
        """Test that every materialization scans the source again."""

        class Source:
            """Test"""

            VALUE = 1

        aggregate = from_source(Source).constants_of_type(int)
        assert aggregate.to_list() == (1,)

        Source.OTHER = 2
        assert aggregate.to_list() == (1, 2)

    def test_settings(self):
        """Test that settings are forwarded to the scan."""
        settings = ConstaggSettings(uppercase_constants=False)

        assert from_source(Words, settings=settings).constants_of_type(str).to_list() == ()


# =============================================================================
# Rules Tests
# =============================================================================


class TestMatching:
    """Test choosing the rules of an aggregation."""

    def test_matching_replaces_rules(self):
        """Test that successive matching calls do not combine."""
        aggregate = (
            from_source(Words)
            .constants_of_type(str)
            .matching(MatchRules.of().with_all("HELLO"))
            .matching(MatchRules.of().with_all("BYE"))
        )

        assert aggregate.to_list() == ("bye",)

    def test_matching_before_type(self):
        """Test that rules chosen before the type are kept."""
        aggregate = (
            from_source(Words)
            .matching(MatchRules.of().with_not("HELLO"))
            .constants_of_type(str)
        )

        assert aggregate.to_list() == ("bye",)

    def test_aggregates_are_immutable(self):
        """Test that matching returns a new aggregate."""
        aggregate = from_source(Words).constants_of_type(str)
        filtered = aggregate.matching(MatchRules.of().with_all("HELLO"))

        assert aggregate.rules is MatchRules.of()
        assert filtered.to_list() == ("hello",)


# =============================================================================
# Usage Error Tests
# =============================================================================


class TestPendingAggregate:
    """Test materializing before choosing a type."""

    @pytest.mark.parametrize(
        "materialize",
        [
            lambda pending: pending.to_list(),
            lambda pending: pending.to_set(),
            lambda pending: pending.to_collection(list),
            lambda pending: pending.constants(),
            lambda pending: pending.visit(print),
            lambda pending: iter(pending),
        ],
    )
    def test_materialization_requires_a_type(self, materialize):
        """Test that every materialization raises IllegalUsageError."""
        with pytest.raises(IllegalUsageError, match="constants_of_type"):
            materialize(from_source(Words))

    def test_invalid_source(self):
        """Test that the source is checked when the aggregation starts."""
        with pytest.raises(IllegalUsageError):
            from_source(42)


# =============================================================================
# Sources Tests
# =============================================================================


class TestModuleSources:
    """Test aggregating over modules."""

    def test_from_module_by_name(self):
        """Test importing a module by name."""
        codes = from_module("errno").constants_of_type(int).to_list()

        assert errno.ENOENT in codes
        assert errno.EACCES in codes

    def test_from_module_object(self):
        """Test passing a module object."""
        rules = MatchRules.of().with_all("ENOENT")

        assert from_module(errno).constants_of_type(int).matching(rules).to_list() == (
            errno.ENOENT,
        )

    def test_unknown_module(self):
        """Test that unknown modules cannot be imported."""
        with pytest.raises(ModuleNotFoundError):
            from_module("constagg_no_such_module")


# =============================================================================
# Scope Tests
# =============================================================================


class TestFromThisScope:
    """Test aggregating the namespace of the running class or module body."""

    def test_module_scope(self):
        """Test aggregating from a module body."""
        assert MODULE_WORDS == ("hello", "bye")

    def test_class_scope(self):
        """Test that only members declared before the call are visible."""

        class Scoped:
            """Test"""

            FIRST = "a"
            SECOND = "b"
            ALL = from_this_scope().constants_of_type(str).to_list()
            THIRD = "c"

        assert Scoped.ALL == ("a", "b")

    def test_scope_is_named_after_the_class(self):
        """Test the source of a class body."""

        class Scoped:
            """Test"""

            SOURCE = from_this_scope().source

        assert isinstance(Scoped.SOURCE, NamespaceSource)
        assert Scoped.SOURCE.name.endswith("test_scope_is_named_after_the_class.<locals>.Scoped")

    def test_result_marked_with_annotation(self):
        """Test that an annotated result is left out of later aggregations."""

        class Scoped:
            """Test"""

            FIRST = "a"
            SECOND = "b"
            ALL: Annotated[tuple[str, ...], AggregatedResult] = (
                from_this_scope().constants_of_type(str).to_list()
            )

        rules = MatchRules.of().with_container_expansion()

        assert Scoped.ALL == ("a", "b")
        assert from_source(Scoped).constants_of_type(str).matching(rules).to_list() == ("a", "b")

    def test_result_marked_with_side_table(self):
        """Test that the side table marks results inside the class body itself."""

        class Scoped:
            """Test"""

            __aggregation_markers__ = {"ALL": AggregatedResult, "NAMES": AggregatedResult}
            FIRST = "a"
            ALL = from_this_scope().constants_of_type(Any).to_list()
            NAMES = (
                from_this_scope()
                .constants_of_type(str)
                .matching(MatchRules.of().with_container_expansion())
                .to_list()
            )

        assert Scoped.ALL == ("a",)
        assert Scoped.NAMES == ("a",)

    def test_function_scope(self):
        """Test aggregating the local variables of a function."""

        def collect() -> tuple[int, ...]:
            LOW = 1  # noqa: N806
            HIGH = 10  # noqa: N806
            assert LOW < HIGH
            return from_this_scope().constants_of_type(int).to_list()

        assert collect() == (1, 10)

    def test_depth(self):
        """Test skipping frames for helpers."""

        class Scoped:
            """Test"""

            VALUE = 1
            VALUES = scope_of_caller().constants_of_type(int).to_list()

        assert Scoped.VALUES == (1,)
