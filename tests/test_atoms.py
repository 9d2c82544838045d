import itertools
import unittest

from game import (
    ATOM_ORDER,
    METAL_ORDER,
    Atom,
    MaterialClass,
    atom_from_index,
    can_match,
    material_class,
    metal_rank,
)


class TestMatchingRules(unittest.TestCase):
    def test_given_every_atom_pair_when_matching_then_relation_is_symmetric(self):
        for a, b in itertools.product(ATOM_ORDER, repeat=2):
            self.assertEqual(can_match(a, b), can_match(b, a), f'{a.value}/{b.value}')

    def test_given_gold_when_matching_anything_then_false(self):
        for other in ATOM_ORDER:
            self.assertFalse(can_match(Atom.GOLD, other))

    def test_given_metals_when_matching_then_only_neighbours_or_quicksilver(self):
        metals = [a for a in ATOM_ORDER if material_class(a) is MaterialClass.METAL and a != Atom.GOLD]
        for a, b in itertools.product(metals, repeat=2):
            ra, rb = metal_rank(a), metal_rank(b)
            expected = (
                a == Atom.QUICKSILVER or b == Atom.QUICKSILVER
                or (ra is not None and rb is not None and abs(ra - rb) == 1)
            )
            self.assertEqual(can_match(a, b), expected, f'{a.value}/{b.value}')
        self.assertTrue(can_match(Atom.LEAD, Atom.TIN))
        self.assertTrue(can_match(Atom.COPPER, Atom.SILVER))
        self.assertFalse(can_match(Atom.LEAD, Atom.IRON))
        self.assertFalse(can_match(Atom.TIN, Atom.TIN))
        self.assertTrue(can_match(Atom.QUICKSILVER, Atom.QUICKSILVER))
        self.assertFalse(can_match(Atom.SILVER, Atom.GOLD))
        self.assertFalse(can_match(Atom.QUICKSILVER, Atom.GOLD))

    def test_given_cardinals_when_matching_then_same_kind_or_salt(self):
        self.assertTrue(can_match(Atom.WATER, Atom.WATER))
        self.assertFalse(can_match(Atom.WATER, Atom.FIRE))
        self.assertTrue(can_match(Atom.SALT, Atom.FIRE))
        self.assertTrue(can_match(Atom.EARTH, Atom.SALT))
        self.assertTrue(can_match(Atom.SALT, Atom.SALT))
        self.assertTrue(can_match(Atom.QUINTESSENCE, Atom.QUINTESSENCE))
        self.assertTrue(can_match(Atom.SALT, Atom.QUINTESSENCE))
        self.assertFalse(can_match(Atom.AIR, Atom.QUINTESSENCE))

    def test_given_life_and_death_when_matching_then_only_each_other(self):
        self.assertTrue(can_match(Atom.MORS, Atom.VITAE))
        self.assertFalse(can_match(Atom.MORS, Atom.MORS))
        self.assertFalse(can_match(Atom.VITAE, Atom.VITAE))

    def test_given_different_classes_when_matching_then_false(self):
        self.assertFalse(can_match(Atom.WATER, Atom.LEAD))
        self.assertFalse(can_match(Atom.SALT, Atom.MORS))
        self.assertFalse(can_match(Atom.SALT, Atom.QUICKSILVER))
        self.assertFalse(can_match(Atom.QUICKSILVER, Atom.VITAE))

    def test_given_taxonomy_when_classifying_then_total_and_partitioned(self):
        self.assertEqual(len(ATOM_ORDER), 15)
        by_class = {}
        for atom in ATOM_ORDER:
            by_class.setdefault(material_class(atom), []).append(atom)
        self.assertEqual(len(by_class[MaterialClass.CARDINAL]), 6)
        self.assertEqual(len(by_class[MaterialClass.METAL]), 7)
        self.assertEqual(by_class[MaterialClass.LIFE_DEATH], [Atom.MORS, Atom.VITAE])
        self.assertEqual(METAL_ORDER[-1], Atom.GOLD)
        self.assertIsNone(metal_rank(Atom.QUICKSILVER))

    def test_given_indices_when_converting_then_declaration_order(self):
        self.assertEqual(atom_from_index(0), Atom.WATER)
        self.assertEqual(atom_from_index(12), Atom.GOLD)
        self.assertEqual(Atom.VITAE.index, 14)
        self.assertIsNone(atom_from_index(15))
        self.assertIsNone(atom_from_index(-1))


if __name__ == '__main__':
    unittest.main(verbosity=2)
