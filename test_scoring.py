import unittest

from models import AbsiComponents, Gender, InvalidInputError, RiskCategory
from scoring import SeverityScorer, outcome_for

class TestABSI(unittest.TestCase):

    def test_01_reference_case(self):
        """25y male, 35% TBSA, inhalation + full thickness: (2,4,1,1,0) = 8 -> high, 20%."""
        result = SeverityScorer.calculate_absi(25, 35, True, True, Gender.MALE)
        print(f"\nABSI: {result.score} ({result.risk_category.value}, survival {result.survival_probability})")

        self.assertEqual(result.components, AbsiComponents(age=2, tbsa=4, inhalation=1, full_thickness=1, gender=0))
        self.assertEqual(result.score, 8)
        self.assertEqual(result.risk_category, RiskCategory.HIGH)
        self.assertEqual(result.survival_probability, "20%")

    def test_02_composite_is_sum_of_components(self):
        for age in (5, 30, 55, 75, 95):
            for tbsa in (0, 15, 45, 95):
                for flag in (False, True):
                    for gender in Gender:
                        result = SeverityScorer.calculate_absi(age, tbsa, flag, not flag, gender)
                        self.assertEqual(result.score, result.components.total)

    def test_03_band_edges(self):
        def age_pts(age):
            return SeverityScorer.calculate_absi(age, 5, False, False, "male").components.age

        def tbsa_pts(tbsa):
            return SeverityScorer.calculate_absi(30, tbsa, False, False, "male").components.tbsa

        self.assertEqual([age_pts(a) for a in (0, 20, 20.5, 40, 41, 60, 61, 80, 81, 110)],
                         [1, 1, 2, 2, 3, 3, 4, 4, 5, 5])
        self.assertEqual([tbsa_pts(t) for t in (0, 10, 10.1, 20, 30, 40, 50, 60, 70, 80, 90, 90.1, 100)],
                         [1, 1, 2, 2, 3, 4, 5, 6, 7, 8, 9, 10, 10])

    def test_04_outcome_table_is_total_and_monotonic(self):
        previous_rank = -1
        for score in range(0, 19):
            survival, category = outcome_for(score)
            self.assertTrue(survival)
            self.assertGreaterEqual(category.rank, previous_rank, msg=f"score {score}")
            previous_rank = category.rank

        self.assertEqual(outcome_for(2), (">99%", RiskCategory.VERY_LOW))
        self.assertEqual(outcome_for(3), ("98%", RiskCategory.VERY_LOW))
        self.assertEqual(outcome_for(4), ("90%", RiskCategory.LOW))
        self.assertEqual(outcome_for(6), ("60%", RiskCategory.MODERATE))
        self.assertEqual(outcome_for(9), ("10%", RiskCategory.VERY_HIGH))
        self.assertEqual(outcome_for(10), ("<5%", RiskCategory.SEVERE))
        self.assertEqual(outcome_for(18), ("<5%", RiskCategory.SEVERE))

    def test_05_monotonic_in_each_factor(self):
        base = dict(age_years=30, tbsa_percent=20, inhalation_injury=False,
                    has_full_thickness=False, gender=Gender.MALE)

        def score(**overrides):
            return SeverityScorer.calculate_absi(**{**base, **overrides}).score

        ages = [score(age_years=a) for a in range(0, 121, 5)]
        self.assertEqual(ages, sorted(ages))
        tbsas = [score(tbsa_percent=t) for t in range(0, 101, 5)]
        self.assertEqual(tbsas, sorted(tbsas))
        self.assertEqual(score(inhalation_injury=True), score() + 1)
        self.assertEqual(score(has_full_thickness=True), score() + 1)
        self.assertEqual(score(gender=Gender.FEMALE), score() + 1)

    def test_06_extremes(self):
        low = SeverityScorer.calculate_absi(5, 1, False, False, Gender.MALE)
        self.assertEqual(low.score, 2)
        self.assertEqual(low.risk_category, RiskCategory.VERY_LOW)

        high = SeverityScorer.calculate_absi(90, 100, True, True, Gender.FEMALE)
        self.assertEqual(high.score, 18)
        self.assertEqual(high.risk_category, RiskCategory.SEVERE)
        self.assertEqual(high.survival_probability, "<5%")

    def test_07_invalid_inputs(self):
        with self.assertRaises(InvalidInputError):
            SeverityScorer.calculate_absi(30, 20, False, False, "unknown")
        with self.assertRaises(InvalidInputError):
            SeverityScorer.calculate_absi(150, 20, False, False, Gender.MALE)
        with self.assertRaises(InvalidInputError):
            SeverityScorer.calculate_absi(30, 120, False, False, Gender.MALE)

class TestBaux(unittest.TestCase):

    def test_01_classic(self):
        result = SeverityScorer.calculate_baux(40, 30)
        self.assertEqual(result.score, 70)
        self.assertEqual(result.mortality_risk, "Moderate (10-30%)")
        self.assertIsNone(result.inhalation_injury)

    def test_02_revised_adds_inhalation(self):
        without = SeverityScorer.calculate_revised_baux(40, 30, False)
        with_inhalation = SeverityScorer.calculate_revised_baux(40, 30, True)
        self.assertEqual(without.score, 70)
        self.assertEqual(with_inhalation.score, 87)
        self.assertEqual(with_inhalation.mortality_risk, "High (30-60%)")
        self.assertTrue(with_inhalation.inhalation_injury)

    def test_03_bands(self):
        cases = [(20, 10, "Low (<10%)"), (50, 0, "Moderate (10-30%)"),
                 (60, 40, "Very High (60-90%)"), (90, 40, "Extremely High (>90%)")]
        for age, tbsa, band in cases:
            self.assertEqual(SeverityScorer.calculate_baux(age, tbsa).mortality_risk, band)

if __name__ == '__main__':
    unittest.main()
