import unittest
from protocols import parse_strength, normalize_category, FormulationSelector
from constants import FormulationKind, FormStrength
from models import DrugInfo, DrugSource, DrugCategory

class TestStrengthParsing(unittest.TestCase):

    def test_01_syrup_strength(self):
        parsed = parse_strength("125mg/5mL")
        self.assertEqual(parsed.kind, FormulationKind.SYRUP)
        self.assertEqual(parsed.strength_mg, 125)
        self.assertEqual(parsed.volume_ml, 5)

    def test_02_case_and_spacing(self):
        parsed = parse_strength("Suspension 228.5 MG / 5 ml")
        self.assertEqual(parsed.kind, FormulationKind.SYRUP)
        self.assertAlmostEqual(parsed.strength_mg, 228.5)

    def test_03_tablet_when_no_volume(self):
        parsed = parse_strength("500mg")
        self.assertEqual(parsed.kind, FormulationKind.TABLET)
        self.assertIsNone(parsed.volume_ml)

    def test_04_unparsable(self):
        self.assertIsNone(parse_strength(None))
        self.assertIsNone(parse_strength("1 g"))

class TestCategory(unittest.TestCase):

    def test_01_known_and_free_text(self):
        self.assertEqual(normalize_category("antibiotic"), DrugCategory.ANTIBIOTIC)
        self.assertEqual(normalize_category("Macrolide antibiotic"), DrugCategory.ANTIBIOTIC)
        self.assertEqual(normalize_category("Analgesic/Antipyretic"), DrugCategory.ANTIPYRETIC)
        self.assertEqual(normalize_category("GI"), DrugCategory.GI)
        self.assertEqual(normalize_category("Antiemetic"), DrugCategory.GI)
        self.assertEqual(normalize_category("Antihistamine"), DrugCategory.RESPIRATORY)
        self.assertEqual(normalize_category(None), DrugCategory.OTHER)
        self.assertEqual(normalize_category("Vitamin"), DrugCategory.OTHER)

class TestFormulationSelector(unittest.TestCase):

    def setUp(self):
        self.online = DrugInfo(source=DrugSource.ONLINE, name="Amoxicillin",
                               dose_per_kg_per_day=45, frequency="Every 12 hours",
                               strength="250mg/5mL")
        self.offline = DrugInfo(source=DrugSource.OFFLINE, name="Paracetamol",
                                dose_per_kg_per_day=60, max_daily_dose_per_kg=75,
                                forms={
                                    FormulationKind.SYRUP: FormStrength(125, 5),
                                    FormulationKind.TABLET: FormStrength(500),
                                })

    def test_01_both_sources_normalize_to_same_reference_shape(self):
        ref = FormulationSelector.to_reference(self.online)
        self.assertEqual(ref.dose_per_kg_per_day, 45)
        self.assertEqual(ref.frequency, "Every 12 hours")
        ref = FormulationSelector.to_reference(self.offline)
        self.assertEqual(ref.max_daily_dose_per_kg, 75)
        self.assertEqual(ref.name, "Paracetamol")

    def test_02_online_formulation_from_strength_string(self):
        f = FormulationSelector.select_formulation(self.online)
        self.assertEqual(f.kind, FormulationKind.SYRUP)
        self.assertEqual(f.strength_mg, 250)
        self.assertEqual(f.volume_ml, 5)

        self.online.strength = None
        self.assertIsNone(FormulationSelector.select_formulation(self.online))

    def test_03_offline_formulation_prefers_requested_kind(self):
        f = FormulationSelector.select_formulation(self.offline)
        self.assertEqual(f.kind, FormulationKind.SYRUP)
        f = FormulationSelector.select_formulation(self.offline, FormulationKind.TABLET)
        self.assertEqual(f.kind, FormulationKind.TABLET)
        self.assertEqual(f.strength_mg, 500)
        self.assertIsNone(f.volume_ml)

    def test_04_offline_falls_back_to_available_kind(self):
        del self.offline.forms[FormulationKind.SYRUP]
        f = FormulationSelector.select_formulation(self.offline, FormulationKind.SYRUP)
        self.assertEqual(f.kind, FormulationKind.TABLET)

if __name__ == '__main__':
    unittest.main()
