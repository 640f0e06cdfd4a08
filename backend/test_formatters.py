import unittest
from formatters import format_tablets, format_summary
from models import CalculationResult

class TestTabletFormatter(unittest.TestCase):

    def test_01_quarter_bands(self):
        self.assertEqual(format_tablets(1.5), "1 (1/2)")
        self.assertEqual(format_tablets(2.74), "2 (3/4)")
        self.assertEqual(format_tablets(1.26), "1 (1/4)")
        self.assertEqual(format_tablets(0.5), "1/2")
        self.assertEqual(format_tablets(0.7), "3/4")
        self.assertEqual(format_tablets(0.2), "1/4")  # inside the 1/4 band (0.125, 0.375)

    def test_02_whole_numbers(self):
        self.assertEqual(format_tablets(2.0), "2")
        self.assertEqual(format_tablets(2.1), "2")
        self.assertEqual(format_tablets(0.1), "0")
        self.assertEqual(format_tablets(0.0005), "0")

    def test_03_rounds_up_past_seven_eighths(self):
        self.assertEqual(format_tablets(0.95), "1")
        self.assertEqual(format_tablets(1.9), "2")

    def test_04_band_edges_round_half_up(self):
        """Exactly between two bands the raw count is shown, halves rounded up."""
        self.assertEqual(format_tablets(0.125), "0.13")
        self.assertEqual(format_tablets(0.625), "0.63")
        self.assertEqual(format_tablets(1.125), "1.13")

        # 12.5 kg, 10 mg/kg/day in 2 doses, 500 mg tablet
        self.assertEqual(format_tablets(12.5 * 10 / 2 / 500), "0.13")

    def test_05_invalid_input_is_blank(self):
        self.assertEqual(format_tablets(None), "")
        self.assertEqual(format_tablets(float('nan')), "")
        self.assertEqual(format_tablets(-1), "")

class TestSummary(unittest.TestCase):

    def test_01_syrup_summary(self):
        res = CalculationResult(single_dose_mg=75, total_daily_dose_mg=150, doses_per_day=2,
                                max_daily_dose_mg=149, dose_ml=3.0,
                                warning="Total daily dose 150.00 mg exceeds the limit.")
        text = format_summary(res, 10)
        self.assertIn("Give 3.0 mL per dose", text)
        self.assertIn("75.00 mg x 2/day = 150.00 mg/day", text)
        self.assertIn("Max daily dose: 149.00 mg", text)
        self.assertIn("WARNING:", text)
        self.assertNotIn("estimated", text)

    def test_02_tablet_summary_uses_quarters(self):
        res = CalculationResult(single_dose_mg=250, total_daily_dose_mg=750, doses_per_day=3,
                                dose_tablets=0.5)
        text = format_summary(res, 12.5, weight_estimated=True)
        self.assertIn("Give 1/2 tablet(s) per dose", text)
        self.assertIn("12.5 kg (estimated from age)", text)

    def test_03_no_result_no_summary(self):
        self.assertEqual(format_summary(None, 10), "")

if __name__ == '__main__':
    unittest.main()
