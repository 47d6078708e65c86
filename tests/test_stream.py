"""Tests for the fluent `Stream` wrapper."""

from typing import Any

import pytest

import pyostream as ps


class TestConstruction:
    """Test the constructors."""

    def test_empty(self) -> None:
        """Test a stream without source."""
        assert ps.Stream().collect() == []

    def test_from_values(self) -> None:
        """Test unpacked values and single values."""
        assert ps.Stream.from_(1, 2, 3).collect() == [1, 2, 3]
        assert ps.Stream.from_(7).collect() == [7]
        assert ps.Stream.from_("ab").collect() == ["a", "b"]

    def test_stream_alias(self) -> None:
        """Test the functional entry point."""
        assert ps.fn.stream([1, 2]).map(str).collect() == ["1", "2"]

    def test_concat(self) -> None:
        """Test concatenation of mixed sources."""
        result = ps.Stream.concat([1], ps.Stream.from_([2, 3]), ps.fn.iter(), ps.Stream.from_([5])).collect()
        assert result == [1, 2, 3, 5]

    def test_mapping_constructors(self) -> None:
        """Test keys, values and items as sets."""
        data = {"a": 1, "b": 2}
        assert ps.Stream.keys(data).collect(ps.collectors.to_set) == {"a", "b"}
        assert ps.Stream.values(data).collect(ps.collectors.to_set) == {1, 2}
        assert ps.Stream.items(data).collect(ps.collectors.to_set) == {("a", 1), ("b", 2)}

    def test_unsupported_source(self) -> None:
        """Test that a bad source fails at construction."""
        with pytest.raises(ps.UnsupportedSourceKindError):
            ps.Stream(3)  # type: ignore[arg-type]


class TestChaining:
    """Test transitions."""

    def test_transitions_return_self(self) -> None:
        """Test that transitions mutate and return the same stream."""
        stream = ps.Stream([1, 2, 3])
        assert stream.map(str) is stream
        assert stream.filter() is stream

    def test_laziness(self) -> None:
        """Test that building a chain calls no user function."""
        calls: list[str] = []
        stream = (
            ps.Stream.from_([1, 2, 3])
            .filter(lambda x: calls.append("filter") or True)
            .map(lambda x: calls.append("map") or x)
        )
        assert calls == []
        assert stream.first() == ps.Some(1)
        assert calls == ["filter", "map"]

    def test_pipeline(self) -> None:
        """Test a long pipeline over an inclusive range."""
        result = (
            ps.Stream.range(10, 100, 4)
            .map(lambda x: x * 2 + 1)
            .filter(lambda x: x % 3 == 0 or x > 100)
            .limit(8)
            .collect()
        )
        assert result == [21, 45, 69, 93, 101, 109, 117, 125]

    def test_repr(self) -> None:
        """Test that the repr describes the pipeline without consuming it."""
        stream = ps.Stream([1, 2, 3]).filter().map(str)
        assert repr(stream) == "Stream(Map(Filter(SequenceSource([1, 2, 3]))))"
        assert stream.collect() == ["1", "2", "3"]

    def test_repr_multi_sources(self) -> None:
        """Test the repr of adapters with several sources."""
        stream = ps.Stream("ab").zip(range(2))
        assert repr(stream) == "Stream(Zip(TextSource('ab'), SequenceSource(range(0, 2))))"

    def test_zip_chain_enumerate(self) -> None:
        """Test multi-source transitions."""
        assert ps.Stream([1, 2]).zip("ab").collect() == [(1, "a"), (2, "b")]
        assert ps.Stream([1]).chain(None, [2]).collect() == [1, 2]
        assert ps.Stream("ab").enumerate().collect() == [(0, "a"), (1, "b")]

    def test_zip_multicollect(self) -> None:
        """Test multicollect after zip."""
        assert ps.Stream([1, 2, 3]).zip([3, 5, 7]).multicollect().collect() == [(1, 3), (2, 5), (3, 7)]

    def test_cycle_reversed(self) -> None:
        """Test the eager transitions."""
        assert ps.Stream([1, 2, 3]).reversed().collect() == [3, 2, 1]
        assert ps.Stream([1, 2, 3]).cycle().limit(10).collect() == [1, 2, 3, 1, 2, 3, 1, 2, 3, 1]

    def test_flat(self) -> None:
        """Test flat_map and flatten."""
        assert ps.Stream(["ab", "c"]).flat_map(lambda s: s.upper()).collect() == ["A", "B", "C"]
        assert ps.Stream([[1], [2, 3]]).flatten().collect() == [1, 2, 3]

    def test_while_distinct_peek(self) -> None:
        """Test the remaining single-source transitions."""
        seen: list[int] = []
        result = (
            ps.Stream([1, 1, 2, 3, 1, 4])
            .drop_while(lambda x: x < 2)
            .take_while(lambda x: x < 4)
            .distinct()
            .peek(seen.append)
            .filter_false(lambda x: x == 3)
            .collect()
        )
        assert result == [2, 1]
        assert seen == [2, 3, 1]

    def test_batch_window(self) -> None:
        """Test the gatherer shorthands."""
        assert ps.Stream.range(1, 7).batch(3).collect() == [(1, 2, 3), (4, 5, 6), (7,)]
        assert ps.Stream.range(1, 4).window(3).collect() == [(1,), (1, 2), (1, 2, 3), (2, 3, 4)]

    def test_apply_generator(self) -> None:
        """Test that apply accepts a function returning a generator."""

        def squares(puller: ps.traits.Puller[int]) -> Any:
            return (x * x for x in puller)

        assert ps.Stream([1, 2, 3]).apply(squares).collect() == [1, 4, 9]

    def test_apply_args(self) -> None:
        """Test that extra arguments are forwarded."""
        assert ps.Stream([1, 2, 3]).apply(ps.fn.limit, 2).collect() == [1, 2]

    def test_third_party_transitions(self) -> None:
        """Test interpose, accumulate and pairwise."""
        assert ps.Stream("abc").interpose("-").join() == "a-b-c"
        assert ps.Stream([1, 2, 3]).accumulate(lambda a, b: a * b).collect() == [1, 2, 6]
        assert ps.Stream([1, 2, 3]).pairwise().collect() == [(1, 2), (2, 3)]

    @pytest.mark.parametrize(
        "transition",
        [
            lambda s: s.interpose(0),
            lambda s: s.accumulate(lambda a, b: a + b),
            lambda s: s.pairwise(),
            lambda s: s.batch(2),
            lambda s: s.window(2),
        ],
    )
    def test_third_party_and_gatherer_laziness(self, counting: Any, transition: Any) -> None:
        """Test that these transitions do not pull when the chain is built."""
        source = counting(5)
        transition(ps.Stream(source))
        assert source.pulls == 0

    def test_interpose_calls_no_mapper(self) -> None:
        """Test that interpose after map calls the mapper only on pull."""
        calls: list[int] = []
        stream = ps.Stream([1, 2]).map(lambda x: calls.append(x) or x).interpose(0)
        assert calls == []
        assert stream.collect() == [1, 0, 2]
        assert calls == [1, 2]

    def test_interpose_edges(self) -> None:
        """Test interpose on empty and single element streams."""
        assert ps.Stream().interpose(0).collect() == []
        assert ps.Stream([None]).interpose(0).collect() == [None]

    def test_nested_streams(self) -> None:
        """Test a stream as the source of another one."""
        inner = ps.Stream([1, 2, 3]).map(lambda x: x * 2)
        assert ps.Stream(inner).filter(lambda x: x > 2).collect() == [4, 6]


class TestPulling:
    """Test the pull interface."""

    def test_call(self) -> None:
        """Test pulling by calling the stream."""
        stream = ps.Stream.from_([1, 2])
        assert stream() == ps.Some(1)
        assert stream() == ps.Some(2)
        assert stream() is ps.NONE

    def test_next(self) -> None:
        """Test the `next` alias."""
        stream = ps.Stream([False])
        assert stream.next() == ps.Some(False)
        assert stream.next() is ps.NONE

    def test_iterator_protocol(self) -> None:
        """Test `for` loops and builtins."""
        stream = ps.Stream.range(1, 3)
        assert next(stream) == 1
        assert list(stream) == [2, 3]
        with pytest.raises(StopIteration):
            next(stream)

    def test_pull_through_current_chain(self) -> None:
        """Test that a stream used as a source follows later transitions."""
        stream = ps.Stream([1, 2, 3])
        outer = ps.fn.map(stream, str)
        stream.limit(1)
        assert ps.fn.collect(outer) == ["1"]

    def test_transition_after_terminal(self) -> None:
        """Test that a transition after a terminal continues from the consumed position."""
        stream = ps.Stream([1, 2, 3, 4])
        assert stream.first() == ps.Some(1)
        assert stream.map(str) is stream
        assert stream.collect() == ["2", "3", "4"]

    def test_transition_after_short_circuit(self) -> None:
        """Test that a transition after any sees only the unconsumed elements."""
        stream = ps.Stream.range(1, 6)
        assert stream.any(lambda x: x == 2) is True
        assert stream.filter(lambda x: x % 2).collect() == [3, 5]


class TestTerminals:
    """Test terminal operations."""

    def test_aggregates(self) -> None:
        """Test the aggregate shorthands."""
        assert ps.Stream.range(1, 4).sum() == 10
        assert ps.Stream([2, 9, 4]).max() == ps.Some(9)
        assert ps.Stream([2, 9, 4]).min() == ps.Some(2)
        assert ps.Stream([2, 9, 4]).last() == ps.Some(4)
        assert ps.Stream([2, 4]).average() == ps.Some(3.0)
        assert ps.Stream([]).average() is ps.NONE
        assert ps.Stream("ab").join(", ") == "a, b"
        assert ps.Stream("abc").count() == 3

    def test_reduce_each(self) -> None:
        """Test reduce and each."""
        assert ps.Stream([1, 2, 3]).reduce(0, lambda acc, x: acc + x) == 6
        seen: list[int] = []
        ps.Stream([1, 2]).each(seen.append)
        assert seen == [1, 2]

    def test_any_all_leave_rest(self) -> None:
        """Test that short-circuiting terminals leave the rest unconsumed."""
        stream = ps.Stream([1, 2, 3, 4])
        assert stream.all(lambda x: x < 2) is False
        assert stream.collect() == [3, 4]

    def test_collect_with_collector(self) -> None:
        """Test collect with an explicit collector."""
        assert ps.Stream([1, 2, 2]).collect(ps.collectors.to_tuple) == (1, 2, 2)

    def test_pipeable(self) -> None:
        """Test into and inspect."""
        seen: list[str] = []
        result = ps.Stream([3, 1, 2]).inspect(lambda s: seen.append(repr(s))).into(sorted)
        assert result == [1, 2, 3]
        assert seen == ["Stream(SequenceSource([3, 1, 2]))"]
