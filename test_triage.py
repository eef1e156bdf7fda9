import itertools
import unittest

from constants import BurnDepth
from models import BurnSeverity, Disposition, InvalidInputError, ReferralDecision
from triage import ReferralTriageEngine as Triage

class TestReferral(unittest.TestCase):

    def test_01_pediatric_patient(self):
        """8-year-old, 15% partial thickness, no full thickness: refer."""
        decision = Triage.assess(15, BurnDepth.DEEP_PARTIAL, [], 8)
        print(f"\nReferral reasons: {decision.reasons}")

        self.assertTrue(decision.required)
        self.assertIn("Pediatric patient with >10% TBSA", decision.reasons)
        self.assertNotIn("Full thickness burns >5% TBSA", decision.reasons)

    def test_02_minor_burn_stays_local(self):
        decision = Triage.assess(5, BurnDepth.SUPERFICIAL_PARTIAL, ["forearm"], 30)
        self.assertFalse(decision.required)
        self.assertEqual(decision.reasons, ())

    def test_03_superficial_area_does_not_count(self):
        decision = Triage.assess(20, BurnDepth.SUPERFICIAL, [], 30)
        self.assertFalse(decision.required)

    def test_04_one_reason_per_critical_location(self):
        decision = Triage.assess(2, "superficial_partial", ["hands", "back", "Face"], 30)
        self.assertEqual(decision.reasons, (
            "Burns to hands - functional/cosmetic area",
            "Burns to Face - functional/cosmetic area",
        ))

    def test_05_all_rules_are_evaluated(self):
        decision = Triage.assess(30, BurnDepth.FULL_THICKNESS, ["perineum"], 60,
                                 inhalation_injury=True, electrical_burn=True, chemical_burn=True,
                                 has_comorbidities=True, circumferential_burn=True)
        self.assertEqual(decision.reasons, (
            ">10% TBSA with partial/full thickness burns (30%)",
            "Patient >50 years with >10% TBSA",
            "Full thickness burns >5% TBSA",
            "Burns to perineum - functional/cosmetic area",
            "Inhalation injury suspected",
            "Electrical burn - cardiac monitoring and fasciotomy may be needed",
            "Chemical burn - specialized decontamination needed",
            "Circumferential burn (limb/chest) - escharotomy may be needed",
            "Significant comorbidities that could affect healing",
        ))

    def test_06_required_iff_reasons(self):
        grid = itertools.product(
            (0, 5, 10.5, 40),
            list(BurnDepth),
            ([], ["face"], ["thigh"]),
            (3, 30, 70),
            (False, True),
            (False, True),
        )
        for tbsa, depth, locations, age, inhalation, electrical in grid:
            decision = Triage.assess(tbsa, depth, locations, age,
                                     inhalation_injury=inhalation, electrical_burn=electrical)
            self.assertEqual(decision.required, len(decision.reasons) > 0)

    def test_07_decision_cannot_disagree_with_reasons(self):
        self.assertFalse(ReferralDecision().required)
        self.assertTrue(ReferralDecision(reasons=["Inhalation injury suspected"]).required)

    def test_08_single_location_string(self):
        decision = Triage.assess(1, BurnDepth.SUPERFICIAL, "right foot", 30)
        self.assertEqual(decision.reasons, ("Burns to right foot - functional/cosmetic area",))

    def test_09_invalid_inputs(self):
        with self.assertRaises(InvalidInputError):
            Triage.assess(10, "charred", [], 30)
        with self.assertRaises(InvalidInputError):
            Triage.assess(10, BurnDepth.SUPERFICIAL, [], -3)
        with self.assertRaises(InvalidInputError):
            Triage.assess(10, BurnDepth.SUPERFICIAL, [None], 30)

    def test_10_depth_rules_use_depth_specific_area(self):
        """26.5% total, but only 0.5% is full thickness and nothing else is deep."""
        decision = Triage.assess(26.5, BurnDepth.FULL_THICKNESS, ["back"], 30,
                                 deep_tbsa_percent=0.5, full_thickness_percent=0.5)
        self.assertEqual(decision.reasons, ())

        decision = Triage.assess(26.5, BurnDepth.FULL_THICKNESS, [], 30,
                                 deep_tbsa_percent=12, full_thickness_percent=6)
        self.assertEqual(decision.reasons, (
            ">10% TBSA with partial/full thickness burns (12%)",
            "Full thickness burns >5% TBSA",
        ))

    def test_11_sub_area_cannot_exceed_total(self):
        with self.assertRaises(InvalidInputError):
            Triage.assess(10, BurnDepth.FULL_THICKNESS, [], 30, full_thickness_percent=15)
        with self.assertRaises(InvalidInputError):
            Triage.classify_severity(10, True, False, 30, full_thickness_percent=15)

class TestSeverityAndDisposition(unittest.TestCase):

    def test_01_severity_grades(self):
        cases = [
            ((45, False, False, 30), BurnSeverity.CRITICAL),
            ((25, False, True, 30), BurnSeverity.CRITICAL),
            ((25, False, False, 30), BurnSeverity.MAJOR),
            ((5, False, True, 30), BurnSeverity.MAJOR),
            ((5, False, False, 8), BurnSeverity.MAJOR),
            ((15, False, False, 30), BurnSeverity.MODERATE),
            ((3, True, False, 30), BurnSeverity.MODERATE),
            ((5, False, False, 30), BurnSeverity.MINOR),
        ]
        for args, expected in cases:
            self.assertEqual(Triage.classify_severity(*args), expected, msg=str(args))

    def test_02_disposition(self):
        self.assertEqual(Triage.recommend_disposition(BurnSeverity.MINOR, True), Disposition.BURN_CENTER)
        self.assertEqual(Triage.recommend_disposition(BurnSeverity.CRITICAL, False), Disposition.ICU)
        self.assertEqual(Triage.recommend_disposition(BurnSeverity.MAJOR, False), Disposition.HDU)
        self.assertEqual(Triage.recommend_disposition("moderate", False), Disposition.WARD)
        self.assertEqual(Triage.recommend_disposition(BurnSeverity.MINOR, False), Disposition.OUTPATIENT)

    def test_03_full_thickness_grade_uses_full_thickness_area(self):
        # 15% burn with a 1% full thickness patch is graded on total area alone
        self.assertEqual(Triage.classify_severity(15, True, False, 30, full_thickness_percent=1),
                         BurnSeverity.MODERATE)
        self.assertEqual(Triage.classify_severity(15, True, False, 30, full_thickness_percent=11),
                         BurnSeverity.MAJOR)
        self.assertEqual(Triage.classify_severity(8, True, False, 30, full_thickness_percent=1),
                         BurnSeverity.MINOR)

if __name__ == '__main__':
    unittest.main()
