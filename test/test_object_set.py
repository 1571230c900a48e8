from unittest import TestCase

from deepcontainers import DeepEqualSet, EqualityOptions
from deepcontainers.object_set import IdentityHash

OBJECT = {"name": "Leandro", "age": 29}
DEEP_EQUAL_OBJECT = {"name": "Leandro", "age": 29}
OTHER_OBJECT = {"name": "John", "age": 35}
DEEP_EQUAL_OTHER_OBJECT = {"name": "John", "age": 35}


class UnhashableWithBrokenEquality:
    def __init__(self, value):
        self.value = value

    def __eq__(self, other):
        raise ValueError()


class Unhashable(UnhashableWithBrokenEquality):
    def __eq__(self, other):
        return isinstance(other, Unhashable) and self.value == other.value


class TestIdentityHash(TestCase):
    def test_identity(self):
        a = [1]
        b = [1]
        self.assertEqual(IdentityHash(a), IdentityHash(a))
        self.assertNotEqual(IdentityHash(a), IdentityHash(b))
        self.assertEqual(hash(IdentityHash(a)), id(a))
        self.assertNotEqual(IdentityHash(a), a)


class TestDeepEqualSet(TestCase):
    def setUp(self):
        self.set = DeepEqualSet([OBJECT, DEEP_EQUAL_OBJECT])

    def test_unhashability(self):
        self.assertRaises(TypeError, lambda: hash(Unhashable(10)))
        self.assertRaises(TypeError, lambda: hash(self.set))

    def test_unhashable_elements(self):
        u = Unhashable(10)
        u2 = Unhashable(11)
        objs = DeepEqualSet((10, u, u2, Unhashable(10)))
        self.assertIn(10, objs)
        self.assertIn(u, objs)
        self.assertIn(Unhashable(11), objs)
        self.assertEqual(3, len(objs))
        objs.remove(Unhashable(10))
        self.assertIn(10, objs)
        self.assertNotIn(u, objs)
        self.assertIn(u2, objs)
        self.assertEqual(2, len(objs))

    def test_broken_equality(self):
        u = UnhashableWithBrokenEquality(10)
        objs = DeepEqualSet((u,))
        self.assertIn(u, objs)
        # the element's own equality is the one being used, so its errors propagate
        self.assertRaises(ValueError, lambda: objs.add(UnhashableWithBrokenEquality(10)))

    def test_new(self):
        self.assertEqual(1, len(self.set))
        other_set = DeepEqualSet(self.set)
        self.assertEqual(1, len(self.set))
        self.assertEqual(1, len(other_set))
        other_set.add(OTHER_OBJECT)
        self.assertEqual(1, len(self.set))
        self.assertEqual(2, len(other_set))

    def test_first_representative_is_kept(self):
        self.assertIs(OBJECT, next(iter(self.set)))

    def test_add(self):
        other_set = DeepEqualSet(self.set)
        self.assertIs(other_set, other_set.add(OBJECT))
        self.assertEqual(1, len(other_set))
        self.assertIs(other_set, other_set.add(OTHER_OBJECT))
        self.assertEqual(2, len(other_set))

    def test_delete(self):
        other_set = DeepEqualSet(self.set)
        self.assertEqual(1, len(other_set))
        self.assertTrue(other_set.delete(OBJECT))
        self.assertFalse(other_set.delete(OBJECT))
        self.assertEqual(1, len(self.set))
        self.assertEqual(0, len(other_set))

    def test_discard_and_remove(self):
        other_set = self.set.copy()
        other_set.discard(OTHER_OBJECT)
        self.assertEqual(1, len(other_set))
        with self.assertRaises(KeyError):
            other_set.remove(OTHER_OBJECT)
        other_set.remove(DEEP_EQUAL_OBJECT)
        self.assertEqual(0, len(other_set))

    def test_has(self):
        self.assertTrue(self.set.has(OBJECT))
        self.assertTrue(self.set.has(DEEP_EQUAL_OBJECT))
        self.assertFalse(self.set.has(OTHER_OBJECT))

    def test_merge(self):
        other_set = DeepEqualSet(self.set)
        self.assertIs(other_set, other_set.merge(DeepEqualSet([DEEP_EQUAL_OBJECT, OTHER_OBJECT])))
        self.assertEqual(DeepEqualSet([OBJECT, DEEP_EQUAL_OTHER_OBJECT]), other_set)
        self.assertEqual([OBJECT, OTHER_OBJECT], list(other_set))
        self.assertEqual(1, len(self.set))

    def test_merge_plain_iterable(self):
        s = DeepEqualSet([[1]]).merge([[1], [2], (2,)])
        self.assertEqual([[1], [2]], list(s))

    def test_merge_with_itself(self):
        s = DeepEqualSet([[1], [2]])
        self.assertIs(s, s.merge(s))
        self.assertEqual(2, len(s))

    def test_to_json(self):
        self.assertEqual([OBJECT], self.set.to_json())

    def test_mutating_an_element(self):
        obj = {"name": "Leandro", "age": 29}
        deep_equal_obj = {"name": "Leandro", "age": 29}
        s = DeepEqualSet([obj])
        self.assertTrue(s.has(deep_equal_obj))
        obj["age"] = 30
        self.assertTrue(s.has(obj))
        self.assertFalse(s.has(deep_equal_obj))
        deep_equal_obj["age"] = 30
        self.assertTrue(s.has(obj))
        self.assertTrue(s.has(deep_equal_obj))

    def test_set_operators(self):
        a = DeepEqualSet([{"a": 1}, {"b": 2}])
        b = DeepEqualSet([{"b": 2}, {"c": 3}])
        union = a | b
        self.assertIsInstance(union, DeepEqualSet)
        self.assertEqual(DeepEqualSet([{"a": 1}, {"b": 2}, {"c": 3}]), union)
        self.assertEqual(DeepEqualSet([{"b": 2}]), a & b)
        self.assertEqual(DeepEqualSet([{"a": 1}]), a - b)
        self.assertEqual(DeepEqualSet([{"a": 1}, {"c": 3}]), a ^ b)
        self.assertTrue(DeepEqualSet([{"b": 2}]) <= a)
        self.assertFalse(a.isdisjoint(b))

    def test_set_operators_keep_options(self):
        strict = DeepEqualSet([1], options=EqualityOptions(strict=True))
        union = strict | DeepEqualSet([1.0])
        self.assertIs(strict.options, union.options)
        self.assertEqual(2, len(union))

    def test_equality(self):
        self.assertEqual(DeepEqualSet([1, 2]), {2, 1})
        self.assertEqual({2, 1}, DeepEqualSet([1, 2]))
        self.assertNotEqual(DeepEqualSet([1, 2]), DeepEqualSet([1, 3]))
        self.assertNotEqual(DeepEqualSet([1, 2]), [1, 2])

    def test_pop_and_clear(self):
        s = DeepEqualSet([[1], [2]])
        self.assertEqual([1], s.pop())
        self.assertEqual(1, len(s))
        s.clear()
        self.assertEqual(0, len(s))

    def test_repr(self):
        self.assertEqual("DeepEqualSet([{'name': 'Leandro', 'age': 29}])", repr(self.set))
