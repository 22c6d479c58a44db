"""Priority registry: ordering, membership, lookup and write fan-out."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

import pytest

from confstack.adapters.memory import MemoryConfigurationSource
from confstack.domain.enums import WriteStrategy
from confstack.domain.errors import BlankKeyError, PartialWriteError
from confstack.domain.prioritized import PrioritizedSource
from confstack.domain.registry import PrioritizedSources
from confstack.domain.sources import ThreadSafeConfigurationSource


def _priorities(registry: PrioritizedSources) -> list[int]:
    return [entry.priority for entry in registry.sources]


# ---------------------------------------------------------------------------
# Construction and membership
# ---------------------------------------------------------------------------


@pytest.mark.os_agnostic
def test_constructor_assigns_list_position_as_priority() -> None:
    a, b, c = MemoryConfigurationSource(), MemoryConfigurationSource(), MemoryConfigurationSource()

    registry = PrioritizedSources(a, b, c)

    assert [(entry.source, entry.priority) for entry in registry.sources] == [(a, 0), (b, 1), (c, 2)]
    assert registry.write_strategy is WriteStrategy.ALL


@pytest.mark.os_agnostic
def test_empty_registry_resolves_nothing() -> None:
    registry = PrioritizedSources()

    assert len(registry) == 0
    assert registry.retrieve("anything") is None


@pytest.mark.os_agnostic
def test_added_sources_are_kept_in_ascending_priority_order() -> None:
    registry = PrioritizedSources()
    for priority in (5, -1, 3, 0):
        registry.add_source(MemoryConfigurationSource(), priority)

    assert _priorities(registry) == [-1, 0, 3, 5]


@pytest.mark.os_agnostic
def test_equal_priorities_resolve_in_registration_order() -> None:
    first = MemoryConfigurationSource({"k": "first"})
    second = MemoryConfigurationSource({"k": "second"})
    registry = PrioritizedSources()

    registry.add_source(first, 1)
    registry.add_source(second, 1)

    assert [entry.source for entry in registry.sources] == [first, second]
    assert registry.retrieve("k") == "first"


@pytest.mark.os_agnostic
def test_adding_the_same_source_at_the_same_priority_is_a_no_op() -> None:
    source = MemoryConfigurationSource()
    registry = PrioritizedSources()

    registry.add_source(source, 2)
    registry.add_source(source, 2)
    registry.add_source(ThreadSafeConfigurationSource(source), 2)

    assert len(registry) == 1


@pytest.mark.os_agnostic
def test_same_source_at_different_priorities_is_kept_twice() -> None:
    source = MemoryConfigurationSource()
    registry = PrioritizedSources()

    registry.add_source(source, 0)
    registry.add_source(source, 4)

    assert _priorities(registry) == [0, 4]


@pytest.mark.os_agnostic
def test_remove_source_drops_the_first_matching_entry_only() -> None:
    source = MemoryConfigurationSource()
    other = MemoryConfigurationSource()
    registry = PrioritizedSources()
    registry.add_source(source, 0)
    registry.add_source(other, 1)
    registry.add_source(source, 2)

    registry.remove_source(source)

    assert [(entry.source, entry.priority) for entry in registry.sources] == [(other, 1), (source, 2)]


@pytest.mark.os_agnostic
def test_remove_source_accepts_a_prioritized_wrapper() -> None:
    source = MemoryConfigurationSource()
    registry = PrioritizedSources(source)

    registry.remove_source(PrioritizedSource(source, priority=99))

    assert len(registry) == 0


@pytest.mark.os_agnostic
def test_removing_an_unknown_source_changes_nothing() -> None:
    registry = PrioritizedSources(MemoryConfigurationSource())

    registry.remove_source(MemoryConfigurationSource())

    assert len(registry) == 1


@pytest.mark.os_agnostic
def test_remove_all_sources_empties_the_registry() -> None:
    registry = PrioritizedSources(MemoryConfigurationSource({"k": "v"}), MemoryConfigurationSource())

    registry.remove_all_sources()

    assert len(registry) == 0
    assert registry.retrieve("k") is None


@pytest.mark.os_agnostic
def test_sources_returns_a_snapshot() -> None:
    registry = PrioritizedSources(MemoryConfigurationSource())
    snapshot = registry.sources

    registry.add_source(MemoryConfigurationSource(), 1)

    assert len(snapshot) == 1
    assert len(list(registry)) == 2


# ---------------------------------------------------------------------------
# Lookup
# ---------------------------------------------------------------------------


@pytest.mark.os_agnostic
def test_lookup_returns_the_highest_precedence_value() -> None:
    registry = PrioritizedSources()
    registry.add_source(MemoryConfigurationSource({"k": "low"}), 10)
    registry.add_source(MemoryConfigurationSource({"k": "high"}), 1)

    assert registry.retrieve("k") == "high"


@pytest.mark.os_agnostic
@pytest.mark.parametrize("blank", ["", "   "])
def test_lookup_skips_blank_values(blank: str) -> None:
    registry = PrioritizedSources(
        MemoryConfigurationSource({"k": blank}),
        MemoryConfigurationSource({"k": "fallback"}),
    )

    assert registry.retrieve("k") == "fallback"


@pytest.mark.os_agnostic
def test_lookup_returns_none_when_only_blank_values_exist() -> None:
    registry = PrioritizedSources(MemoryConfigurationSource({"k": " "}))

    assert registry.retrieve("k") is None


@pytest.mark.os_agnostic
def test_lookup_consults_readable_only_sources(read_only_source: Callable[..., Any]) -> None:
    registry = PrioritizedSources(MemoryConfigurationSource(), read_only_source({"k": "ro"}))

    assert registry.retrieve("k") == "ro"


@pytest.mark.os_agnostic
def test_registry_nests_inside_another_registry() -> None:
    inner = PrioritizedSources(MemoryConfigurationSource({"k": "inner"}))
    outer = PrioritizedSources(MemoryConfigurationSource(), inner)

    assert outer.retrieve("k") == "inner"


# ---------------------------------------------------------------------------
# Store
# ---------------------------------------------------------------------------


@pytest.mark.os_agnostic
def test_all_strategy_writes_every_writable_source(
    counting_source: Callable[..., Any],
    read_only_source: Callable[..., Any],
) -> None:
    a, b = counting_source(), counting_source()
    registry = PrioritizedSources(a, read_only_source(), b, write_strategy=WriteStrategy.ALL)

    registry.store("k", "v")

    assert a.store_calls == [("k", "v")]
    assert b.store_calls == [("k", "v")]


@pytest.mark.os_agnostic
def test_highest_strategy_writes_the_first_writable_source(
    counting_source: Callable[..., Any],
    read_only_source: Callable[..., Any],
) -> None:
    a, b = counting_source(), counting_source()
    registry = PrioritizedSources(read_only_source(), a, b, write_strategy="highest")

    registry.store("k", "v")

    assert a.store_calls == [("k", "v")]
    assert b.store_calls == []


@pytest.mark.os_agnostic
def test_lowest_strategy_writes_the_last_writable_source(
    counting_source: Callable[..., Any],
    read_only_source: Callable[..., Any],
) -> None:
    a, b = counting_source(), counting_source()
    registry = PrioritizedSources(a, b, read_only_source(), write_strategy=WriteStrategy.LOWEST)

    registry.store("k", "v")

    assert a.store_calls == []
    assert b.store_calls == [("k", "v")]


@pytest.mark.os_agnostic
@pytest.mark.parametrize("strategy", list(WriteStrategy))
def test_store_without_writable_sources_is_a_no_op(
    strategy: WriteStrategy,
    read_only_source: Callable[..., Any],
) -> None:
    registry = PrioritizedSources(read_only_source({"k": "v"}), write_strategy=strategy)

    registry.store("k", "new")

    assert registry.retrieve("k") == "v"


@pytest.mark.os_agnostic
@pytest.mark.parametrize("key", ["", "  "])
def test_store_rejects_blank_keys_before_writing(key: str, counting_source: Callable[..., Any]) -> None:
    target = counting_source()
    registry = PrioritizedSources(target)

    with pytest.raises(BlankKeyError):
        registry.store(key, "v")

    assert target.store_calls == []


@pytest.mark.os_agnostic
def test_store_makes_the_value_visible_to_lookups() -> None:
    registry = PrioritizedSources(MemoryConfigurationSource(), write_strategy=WriteStrategy.HIGHEST)

    registry.store("k", "v")

    assert registry.retrieve("k") == "v"


@pytest.mark.os_agnostic
def test_all_strategy_attempts_every_source_and_aggregates_failures(
    counting_source: Callable[..., Any],
    failing_source: Callable[..., Any],
) -> None:
    broken = failing_source(OSError("read-only file system"))
    healthy = counting_source()
    registry = PrioritizedSources(broken, healthy)

    with pytest.raises(PartialWriteError) as excinfo:
        registry.store("k", "v")

    assert healthy.store_calls == [("k", "v")]
    assert excinfo.value.key == "k"
    assert [source for source, _ in excinfo.value.failures] == [broken]
    assert isinstance(excinfo.value.__cause__, OSError)


@pytest.mark.os_agnostic
def test_registry_repr_names_its_identity() -> None:
    registry = PrioritizedSources()

    assert str(registry.uuid) in repr(registry)


@pytest.mark.os_agnostic
@pytest.mark.parametrize("strategy", list(WriteStrategy))
def test_entries_moved_between_registries_stay_writable(strategy: WriteStrategy) -> None:
    writable = MemoryConfigurationSource()
    first = PrioritizedSources(writable)
    second = PrioritizedSources(write_strategy=strategy)

    for entry in first.sources:
        second.add_source(entry, entry.priority)
    second.store("k", "v")

    assert writable.retrieve("k") == "v"
    assert [entry.source for entry in second.sources] == [writable]
    assert second.sources[0].is_writable


@pytest.mark.os_agnostic
def test_adding_an_entry_next_to_its_source_is_a_no_op() -> None:
    source = MemoryConfigurationSource()
    registry = PrioritizedSources(source)

    registry.add_source(PrioritizedSource(source, priority=0), 0)

    assert len(registry) == 1
