import unittest

from constants import WOUND_CONSTANTS, BurnDepth
from models import InvalidInputError
from protocols import BASE_PROTOCOLS, HEALING_TIMES, WoundCareProtocolGenerator as Wounds

class TestBaseProtocols(unittest.TestCase):

    def test_01_every_depth_has_a_protocol(self):
        self.assertEqual(set(BASE_PROTOCOLS), set(BurnDepth))
        self.assertEqual(set(HEALING_TIMES), set(BurnDepth))

    def test_02_cleansing_is_constant(self):
        for depth in BurnDepth:
            protocol = Wounds.generate(depth, 10, "", 0)
            self.assertEqual(protocol.cleansing_solution, WOUND_CONSTANTS.CLEANSING_SOLUTION)
            self.assertTrue(protocol.pain_management)

    def test_03_shallow_burns_need_no_grafting(self):
        for depth in (BurnDepth.SUPERFICIAL, BurnDepth.SUPERFICIAL_PARTIAL):
            protocol = Wounds.generate(depth, 10, "", 30)
            self.assertIsNone(protocol.grafting)
            self.assertIsNone(protocol.debridement_method)
            self.assertNotIn("Wound bed preparation for delayed grafting", protocol.special_instructions)
        self.assertEqual(Wounds.generate("superficial", 3, "arm", 0).special_instructions, ())

    def test_04_deep_burns_plan_grafting(self):
        deep = Wounds.generate(BurnDepth.DEEP_PARTIAL, 10, "", 0)
        self.assertTrue(deep.grafting.indicated)
        self.assertEqual(deep.grafting.timing, "After demarcation (7-14 days)")
        self.assertEqual(deep.grafting.graft_type, "Split-thickness skin graft")

        small = Wounds.generate(BurnDepth.FULL_THICKNESS, 30, "", 0)
        self.assertEqual(small.grafting.graft_type, "Split-thickness autograft")
        large = Wounds.generate(BurnDepth.FULL_THICKNESS, 41, "", 0)
        self.assertEqual(large.grafting.graft_type, "Consider cultured skin, Integra, or allograft")

class TestAddenda(unittest.TestCase):

    def test_01_full_thickness_face(self):
        """45% full thickness to the face: ophthalmology consult + early excision in 3-5 days."""
        protocol = Wounds.generate(BurnDepth.FULL_THICKNESS, 45, "face", 2)
        self.assertIn("Ophthalmology consult for periorbital burns", protocol.special_instructions)
        self.assertTrue(protocol.grafting.indicated)
        self.assertEqual(protocol.grafting.timing, "Early excision within 3-5 days")
        self.assertEqual(protocol.debridement_method, "Early surgical excision recommended")

    def test_02_location_matching_is_case_insensitive(self):
        hand = Wounds.generate("deep_partial", 5, "Left HAND, dorsum", 1)
        self.assertIn("Early hand therapy referral", hand.special_instructions)

        for location in ("Perineum", "external genitalia"):
            protocol = Wounds.generate("superficial_partial", 5, location, 1)
            self.assertIn("Foley catheter for major burns", protocol.special_instructions)

    def test_03_addenda_leave_base_untouched(self):
        plain = Wounds.generate(BurnDepth.DEEP_PARTIAL, 20, "back", 3)
        face = Wounds.generate(BurnDepth.DEEP_PARTIAL, 20, "face and hands", 3)

        self.assertEqual(plain.dressing_type, face.dressing_type)
        self.assertEqual(plain.topical_agent, face.topical_agent)
        self.assertEqual(plain.grafting, face.grafting)
        # Base instructions first, then the addenda in fixed order
        self.assertEqual(face.special_instructions[:len(plain.special_instructions)], plain.special_instructions)
        self.assertEqual(len(face.special_instructions), len(plain.special_instructions) + 6)
        self.assertLess(face.special_instructions.index("Frequent lubrication of eyes"),
                        face.special_instructions.index("Early hand therapy referral"))

    def test_04_delayed_grafting_after_14_days(self):
        day_14 = Wounds.generate(BurnDepth.DEEP_PARTIAL, 10, "", 14)
        day_15 = Wounds.generate(BurnDepth.DEEP_PARTIAL, 10, "hand", 15)
        self.assertNotIn("Wound bed preparation for delayed grafting", day_14.special_instructions)
        self.assertEqual(day_15.special_instructions[-1], "Wound bed preparation for delayed grafting")

    def test_05_invalid_inputs(self):
        with self.assertRaises(InvalidInputError):
            Wounds.generate("charred", 10, "", 0)
        with self.assertRaises(InvalidInputError):
            Wounds.generate(BurnDepth.SUPERFICIAL, 10, "", -1)
        with self.assertRaises(InvalidInputError):
            Wounds.generate(BurnDepth.SUPERFICIAL, 10, 42, 0)

class TestHealing(unittest.TestCase):

    def test_01_deeper_burns_heal_slower(self):
        estimates = [Wounds.estimate_healing_time(depth) for depth in BurnDepth]
        self.assertEqual([e.min_days for e in estimates], sorted(e.min_days for e in estimates))
        full = Wounds.estimate_healing_time("full_thickness")
        self.assertEqual((full.min_days, full.max_days), (28, 90))

if __name__ == '__main__':
    unittest.main()
