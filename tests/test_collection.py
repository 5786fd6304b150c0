"""Tests for ArrayCollection eager transformations."""

from collections import namedtuple
from types import SimpleNamespace

import pytest
from hypothesis import given
from hypothesis import strategies as st
from klaw_collections import ArrayCollection, Collection, MissingMemberError, NotACollectionError
from strategies import keyed_collections, number_collections, predicates


Point = namedtuple('Point', ['x', 'y'])


class TaggedCollection(ArrayCollection):
    """Subclass used to check that transformations keep the concrete type."""

    __slots__ = ()


class TestCreate:
    """Tests for the construction contract."""

    def test_create_from_list(self):
        """Lists are keyed 0..n-1."""
        assert ArrayCollection.create([1, 2, 3]).to_array() == {0: 1, 1: 2, 2: 3}

    def test_create_from_mapping(self):
        """Mappings keep their keys and order."""
        collection = ArrayCollection.create({'b': 1, 0: 2})
        assert list(collection.items()) == [('b', 1), (0, 2)]

    def test_create_from_pair_iterator(self):
        """Iterators are read as (key, value) pairs."""
        collection = ArrayCollection.create(iter([('a', 1), ('b', 2)]))
        assert collection.to_array() == {'a': 1, 'b': 2}

    def test_create_from_value_generator(self):
        """Generators of plain values are keyed 0..n-1."""
        assert ArrayCollection.create(x * 2 for x in range(3)).to_array() == {0: 0, 1: 2, 2: 4}

    def test_create_from_iterator_of_strings(self):
        """Two-character strings are values, not pairs."""
        assert ArrayCollection.create(iter(['ab', 'cd'])).to_array() == {0: 'ab', 1: 'cd'}

    def test_create_from_empty_iterator(self):
        """An exhausted iterator gives an empty collection."""
        assert ArrayCollection.create(iter([])).is_empty()

    def test_create_rejects_broken_pair_iterator(self):
        """A pair iterator that later yields a non-pair is a type mismatch."""
        with pytest.raises(NotACollectionError):
            ArrayCollection.create(iter([('a', 1), 'b']))

    def test_create_from_items_view(self):
        """Dict items views are read as pairs."""
        assert ArrayCollection.create({'a': 1}.items()).to_array() == {'a': 1}

    def test_create_from_collection(self):
        """Another collection is copied by entries."""
        source = ArrayCollection.create({'k': 'v'})
        assert ArrayCollection.create(source).to_array() == {'k': 'v'}

    def test_create_from_none(self):
        """None gives an empty collection."""
        assert ArrayCollection.create(None).is_empty()

    def test_create_rejects_scalars(self):
        """Non-iterable input is a type mismatch."""
        with pytest.raises(NotACollectionError):
            ArrayCollection.create(42)

    def test_create_rejects_text(self):
        """Strings are not split into characters."""
        with pytest.raises(NotACollectionError):
            ArrayCollection.create('abc')

    def test_get_creator_builds_subclass(self):
        """get_creator() builds instances of the class it was called on."""
        creator = TaggedCollection.get_creator()
        assert isinstance(creator([1]), TaggedCollection)

    def test_is_collection(self):
        """ArrayCollection satisfies the Collection contract."""
        assert isinstance(ArrayCollection.create([]), Collection)

    def test_to_array_is_a_copy(self):
        """Mutating a snapshot does not touch the collection."""
        collection = ArrayCollection.create([1])
        snapshot = collection.to_array()
        snapshot[0] = 99
        assert collection.to_array() == {0: 1}

    def test_input_is_copied(self):
        """Mutating the source dict does not touch the collection."""
        source = {'a': 1}
        collection = ArrayCollection.create(source)
        source['a'] = 2
        assert collection.to_array() == {'a': 1}


class TestTakeAndRest:
    """Tests for take() and rest()."""

    def test_take_keeps_keys(self):
        """take(n) keeps the first n entries with their keys."""
        collection = ArrayCollection.create({'a': 1, 'b': 2, 'c': 3})
        assert collection.take(2).to_array() == {'a': 1, 'b': 2}

    @pytest.mark.parametrize('number', [0, -1, -10])
    def test_take_non_positive_is_empty(self, number):
        """take(n <= 0) gives an empty collection."""
        assert ArrayCollection.create([1, 2]).take(number).is_empty()

    def test_take_more_than_size(self):
        """take(n) beyond the size keeps everything."""
        assert ArrayCollection.create([1, 2]).take(10).to_array() == {0: 1, 1: 2}

    def test_rest_reindexes(self):
        """rest() drops the first entry and reindexes."""
        collection = ArrayCollection.create({'a': 1, 'b': 2, 'c': 3})
        assert collection.rest().to_array() == {0: 2, 1: 3}

    def test_rest_of_empty(self):
        """rest() of an empty collection is empty."""
        assert ArrayCollection.create([]).rest().is_empty()

    @given(keyed_collections, st.integers(min_value=-5, max_value=20))
    def test_take_count(self, collection, number):
        """count(take(n)) == max(0, min(n, k))."""
        assert collection.take(number).count() == max(0, min(number, collection.count()))


class TestFilter:
    """Tests for filter(), filter_not() and partition()."""

    values = [0, 1, '', None, 'x', [], [0], False, True, {}, 0.0, '0']

    def test_filter_default_drops_empty_like(self):
        """filter() without a predicate keeps non-empty values."""
        result = ArrayCollection.create(self.values).filter()
        assert result.to_array() == {1: 1, 4: 'x', 6: [0], 8: True, 11: '0'}

    def test_filter_not_default_keeps_empty_like(self):
        """filter_not() without a predicate keeps exactly the empty values."""
        result = ArrayCollection.create(self.values).filter_not()
        assert result.to_array() == {0: 0, 2: '', 3: None, 5: [], 7: False, 9: {}, 10: 0.0}

    def test_filter_empty_collection_value(self):
        """An empty collection value counts as empty."""
        nested = ArrayCollection.create([ArrayCollection.create([]), ArrayCollection.create([1])])
        assert list(nested.filter().to_array()) == [1]

    def test_filter_with_value_predicate(self):
        """One-argument predicates receive the value."""
        result = ArrayCollection.create([1, 2, 3, 4]).filter(lambda value: value % 2 == 0)
        assert result.to_array() == {1: 2, 3: 4}

    def test_filter_with_key_predicate(self):
        """Two-argument predicates receive the key too."""
        collection = ArrayCollection.create({'x': 1, 'y': 2})
        assert collection.filter(lambda value, key: key == 'x').to_array() == {'x': 1}

    def test_filter_not_with_predicate(self):
        """filter_not(p) keeps entries where p fails."""
        result = ArrayCollection.create([1, 2, 3, 4]).filter_not(lambda value: value % 2 == 0)
        assert result.to_array() == {0: 1, 2: 3}

    def test_partition(self):
        """partition(p) is [filter(p), filter_not(p)]."""
        parts = ArrayCollection.create([1, 2, 3]).partition(lambda value: value > 1)
        assert parts.count() == 2
        assert parts.first().to_array() == {1: 2, 2: 3}
        assert parts.last().to_array() == {0: 1}

    @given(keyed_collections, predicates)
    def test_filter_and_filter_not_partition_entries(self, collection, predicate):
        """filter(p) and filter_not(p) are disjoint and cover every entry."""
        kept = collection.filter(predicate).to_array()
        dropped = collection.filter_not(predicate).to_array()
        assert not set(kept) & set(dropped)
        assert {**kept, **dropped} == collection.to_array()

    @given(keyed_collections)
    def test_default_predicates_are_complements(self, collection):
        """filter() and filter_not() split the entries between them."""
        kept = collection.filter().to_array()
        dropped = collection.filter_not().to_array()
        assert not set(kept) & set(dropped)
        assert len(kept) + len(dropped) == collection.count()


class TestMap:
    """Tests for map(), pick() and invoke()."""

    def test_map_with_key(self):
        """Callbacks can use the key."""
        collection = ArrayCollection.create({'a': 1, 'b': 2})
        assert collection.map(lambda value, key: f'{key}{value}').to_array() == {'a': 'a1', 'b': 'b2'}

    def test_map_value_only(self):
        """One-argument callbacks receive the value."""
        assert ArrayCollection.create({'a': 1}).map(lambda value: value * 10).to_array() == {'a': 10}

    def test_map_builtin(self):
        """Builtins without an inspectable signature receive the value."""
        assert ArrayCollection.create([1, 2]).map(str).to_array() == {0: '1', 1: '2'}

    def test_map_does_not_mutate(self):
        """The receiver is left untouched."""
        collection = ArrayCollection.create([1, 2])
        collection.map(lambda value: value + 1)
        assert collection.to_array() == {0: 1, 1: 2}

    @given(keyed_collections)
    def test_map_preserves_keys(self, collection):
        """keys(map(C, f)) == keys(C)."""
        assert list(collection.map(lambda value, key: (key, value)).to_array()) == list(collection.to_array())

    def test_pick_from_mappings(self):
        """pick() reads keys out of mappings."""
        people = ArrayCollection.create([{'name': 'ada'}, {'name': 'bob'}])
        assert people.pick('name').to_array() == {0: 'ada', 1: 'bob'}

    def test_pick_from_objects(self):
        """pick() reads attributes off objects."""
        people = ArrayCollection.create({'p': SimpleNamespace(name='ada')})
        assert people.pick('name').to_array() == {'p': 'ada'}

    def test_pick_named_fields(self):
        """pick() reads named fields off namedtuples and positions off the same values."""
        points = ArrayCollection.create([Point(1, 2), Point(3, 4)])
        assert points.pick('x').to_array() == {0: 1, 1: 3}
        assert points.pick(1).to_array() == {0: 2, 1: 4}

    def test_pick_from_sequences_and_collections(self):
        """pick() indexes sequences and collections."""
        rows = ArrayCollection.create([[1, 2], ArrayCollection.create({1: 'b'})])
        assert rows.pick(1).to_array() == {0: 2, 1: 'b'}

    def test_pick_missing_raises(self):
        """A value without the key aborts the whole pick."""
        people = ArrayCollection.create([{'name': 'ada'}, {'age': 3}])
        with pytest.raises(MissingMemberError) as exc_info:
            people.pick('name')
        assert exc_info.value.member == 'name'
        assert exc_info.value.type_name == 'dict'

    def test_invoke(self):
        """invoke() calls the named method on each value."""
        assert ArrayCollection.create(['a', 'b']).invoke('upper').to_array() == {0: 'A', 1: 'B'}

    def test_invoke_missing_raises(self):
        """A value without the method raises MissingMemberError."""
        with pytest.raises(MissingMemberError):
            ArrayCollection.create(['a', 1]).invoke('upper')

    def test_invoke_non_callable_raises(self):
        """A non-callable attribute is not invocable."""
        with pytest.raises(MissingMemberError):
            ArrayCollection.create([1]).invoke('real')


class TestReindexing:
    """Tests for reverse(), values(), keys() and concatenate()."""

    def test_reverse_is_involution_with_reindex(self):
        """Reversing twice restores the sequence."""
        collection = ArrayCollection.create({0: 'a', 1: 'b', 2: 'c'})
        reversed_once = collection.reverse()
        assert reversed_once.to_array() == {0: 'c', 1: 'b', 2: 'a'}
        assert reversed_once.reverse().to_array() == {0: 'a', 1: 'b', 2: 'c'}

    def test_reverse_drops_string_keys(self):
        """reverse() reindexes every key."""
        assert ArrayCollection.create({'x': 1, 'y': 2}).reverse().to_array() == {0: 2, 1: 1}

    def test_values_and_keys(self):
        """values() and keys() reindex."""
        collection = ArrayCollection.create({'x': 1, 'y': 2})
        assert collection.values().to_array() == {0: 1, 1: 2}
        assert collection.keys().to_array() == {0: 'x', 1: 'y'}

    def test_concatenate(self, mixed, other_mixed):
        """concatenate() drops keys on both sides."""
        assert mixed.concatenate(other_mixed).to_array() == {0: 'a', 1: 'b', 2: 'c', 3: 'd'}

    def test_concatenate_rejects_non_collection(self, mixed):
        """A plain dict operand is a type mismatch."""
        with pytest.raises(NotACollectionError):
            mixed.concatenate({0: 'c'})


class TestUnionMergeAdd:
    """Tests for the key rules of union(), merge() and add()."""

    def test_union_other_overrides(self, mixed, other_mixed):
        """union() keeps keys and lets other win collisions."""
        assert mixed.union(other_mixed).to_array() == {0: 'c', 'x': 'd'}

    def test_union_order(self):
        """Other's entries come first, then self's missing keys."""
        left = ArrayCollection.create({'a': 1, 'b': 2})
        right = ArrayCollection.create({'b': 3, 'c': 4})
        assert list(left.union(right).items()) == [('b', 3), ('c', 4), ('a', 1)]

    def test_merge_renumbers_ints(self, mixed, other_mixed):
        """merge() renumbers int keys and overrides string keys."""
        merged = mixed.merge(other_mixed)
        assert merged.to_array() == {0: 'a', 1: 'c', 'x': 'd'}
        assert list(merged.items()) == [(0, 'a'), ('x', 'd'), (1, 'c')]

    def test_merge_int_keys_never_collide(self):
        """Sparse int keys are renumbered from zero."""
        left = ArrayCollection.create({5: 'a'})
        right = ArrayCollection.create({5: 'b', 9: 'c'})
        assert left.merge(right).to_array() == {0: 'a', 1: 'b', 2: 'c'}

    def test_union_and_merge_reject_non_collection(self, mixed):
        """Combination operands must be collections."""
        with pytest.raises(NotACollectionError):
            mixed.union([1])
        with pytest.raises(NotACollectionError):
            mixed.merge(None)

    def test_add_appends_next_index(self):
        """add() without a key uses the next integer key."""
        assert ArrayCollection.create([1, 2]).add(3).to_array() == {0: 1, 1: 2, 2: 3}

    def test_add_next_index_skips_to_max(self):
        """The next key follows the largest int key."""
        collection = ArrayCollection.create({5: 'x', 'a': 'y'})
        assert collection.add('z').to_array() == {5: 'x', 'a': 'y', 6: 'z'}

    def test_add_to_empty_and_negative(self):
        """Empty or negative-only collections start at 0."""
        assert ArrayCollection.create([]).add('a').to_array() == {0: 'a'}
        assert ArrayCollection.create({-3: 'x'}).add('a').to_array() == {-3: 'x', 0: 'a'}

    def test_add_with_key(self):
        """add() with a new key appends it."""
        assert ArrayCollection.create([1]).add('v', 'k').to_array() == {0: 1, 'k': 'v'}

    def test_add_existing_key_keeps_position(self):
        """Overwriting a key keeps its position."""
        collection = ArrayCollection.create({'a': 1, 'b': 2}).add(9, 'a')
        assert list(collection.items()) == [('a', 9), ('b', 2)]


class TestDerived:
    """Tests for operations built with apply()."""

    def test_apply_rewraps(self):
        """apply() wraps the callback result with create()."""
        result = TaggedCollection.create([1, 2]).apply(lambda collection: [collection.count()])
        assert isinstance(result, TaggedCollection)
        assert result.to_array() == {0: 2}

    def test_flat_map(self):
        """flat_map() splices each result."""
        result = ArrayCollection.create([1, 2]).flat_map(lambda value: [value, value * 10])
        assert result.to_array() == {0: 1, 1: 10, 2: 2, 3: 20}

    def test_flat_map_scalar_results(self):
        """Non-iterable results pass through."""
        assert ArrayCollection.create([1, 2]).flat_map(lambda value: value).to_array() == {0: 1, 1: 2}

    def test_index_by_last_wins(self):
        """Later values win key collisions."""
        rows = ArrayCollection.create([{'id': 'a', 'n': 1}, {'id': 'b', 'n': 2}, {'id': 'a', 'n': 3}])
        assert rows.index_by(lambda row: row['id']).to_array() == {
            'a': {'id': 'a', 'n': 3},
            'b': {'id': 'b', 'n': 2},
        }

    def test_group_by(self):
        """Buckets keep the original keys and the concrete type."""
        groups = TaggedCollection.create({'a': 1, 'b': 2, 'c': 3}).group_by(lambda value: value % 2)
        assert isinstance(groups, TaggedCollection)
        assert list(groups.to_array()) == [1, 0]
        odd = groups.to_array()[1]
        assert isinstance(odd, TaggedCollection)
        assert odd.to_array() == {'a': 1, 'c': 3}
        assert groups.to_array()[0].to_array() == {'b': 2}

    def test_flatten_one_level(self):
        """Nested containers are spliced one level deep."""
        nested = ArrayCollection.create([[1, 2], 3, (4,), {'k': 5}, 'ab', ArrayCollection.create([6])])
        assert nested.flatten().to_array() == {0: 1, 1: 2, 2: 3, 3: 4, 4: 5, 5: 'ab', 6: 6}

    def test_flatten_is_not_recursive(self):
        """Deeper levels are left as they are."""
        assert ArrayCollection.create([[1, [2]]]).flatten().to_array() == {0: 1, 1: [2]}

    def test_unique_strict_keeps_keys(self):
        """Strict unique keeps first occurrences and their keys."""
        assert ArrayCollection.create([1, '1', 1, 2]).unique(strict=True).to_array() == {0: 1, 1: '1', 3: 2}

    def test_unique_strict_distinguishes_bool(self):
        """True and 1 differ in type."""
        assert ArrayCollection.create([1, True, 1]).unique().to_array() == {0: 1, 1: True}

    def test_unique_strict_unhashable(self):
        """Unhashable values are compared by value."""
        assert ArrayCollection.create([[1], [1], [2]]).unique().to_array() == {0: [1], 2: [2]}

    def test_unique_loose_reindexes(self):
        """Loose unique coerces numeric strings and reindexes."""
        result = ArrayCollection.create({'a': 1, 'b': '1', 'c': 2, 'd': '2.0', 'e': 'x'}).unique(strict=False)
        assert result.to_array() == {0: 1, 1: 2, 2: 'x'}

    def test_sort_with_keeps_keys(self):
        """sort_with() orders by comparator and keeps keys."""
        collection = ArrayCollection.create({'a': 3, 'b': 1, 'c': 2})
        assert list(collection.sort_with(lambda left, right: left - right).items()) == [('b', 1), ('c', 2), ('a', 3)]

    def test_sort_by_keeps_keys(self):
        """sort_by() orders ascending by metric."""
        collection = ArrayCollection.create({'a': -3, 'b': 1, 'c': 2})
        assert list(collection.sort_by(abs).items()) == [('b', 1), ('c', 2), ('a', -3)]

    def test_sort_by_is_stable(self):
        """Equal metrics keep their original order."""
        words = ArrayCollection.create(['bb', 'a', 'cc', 'd'])
        assert list(words.sort_by(len)) == ['a', 'd', 'bb', 'cc']


class TestAggregates:
    """Tests for min(), max(), sum(), product() and is_empty()."""

    def test_aggregates(self):
        """Aggregates over [3, 1, 2]."""
        collection = ArrayCollection.create([3, 1, 2])
        assert collection.min() == 1
        assert collection.max() == 3
        assert collection.sum() == 6
        assert collection.product() == 6

    def test_aggregates_of_empty_are_none(self):
        """Aggregates of an empty collection are None."""
        empty = ArrayCollection.create([])
        assert empty.min() is None
        assert empty.max() is None
        assert empty.sum() is None
        assert empty.product() is None

    def test_is_empty(self):
        """is_empty() is count() == 0."""
        assert ArrayCollection.create([]).is_empty()
        assert not ArrayCollection.create([0]).is_empty()

    @given(number_collections)
    def test_sum_matches_values(self, collection):
        """sum() is the sum of the values, or None when empty."""
        expected = sum(collection.to_array().values()) if collection.count() else None
        assert collection.sum() == expected


class TestSubclassClosure:
    """Transformations keep the concrete subtype."""

    @pytest.mark.parametrize(
        'transform',
        [
            lambda c: c.take(1),
            lambda c: c.rest(),
            lambda c: c.filter(),
            lambda c: c.filter_not(),
            lambda c: c.partition(bool),
            lambda c: c.map(lambda value: value),
            lambda c: c.flat_map(lambda value: [value]),
            lambda c: c.index_by(lambda value: value),
            lambda c: c.flatten(),
            lambda c: c.unique(),
            lambda c: c.unique(strict=False),
            lambda c: c.sort_with(lambda left, right: 0),
            lambda c: c.sort_by(lambda value: value),
            lambda c: c.reverse(),
            lambda c: c.concatenate(ArrayCollection.create([9])),
            lambda c: c.union(ArrayCollection.create([9])),
            lambda c: c.merge(ArrayCollection.create([9])),
            lambda c: c.add(9),
            lambda c: c.values(),
            lambda c: c.keys(),
        ],
    )
    def test_transform_keeps_type(self, transform):
        """Every transformation returns the receiver's class."""
        assert isinstance(transform(TaggedCollection.create([1, 2, 3])), TaggedCollection)
