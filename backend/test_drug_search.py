import unittest
from unittest import mock

import requests

from drug_search import OnlineDrugSearch, offline_lookup, lookup_drug
from constants import FormulationKind
from models import DrugSource, DrugNotFoundError

def _response(payload, status=200):
    r = mock.Mock()
    r.status_code = status
    r.json.return_value = payload
    if status >= 400:
        r.raise_for_status.side_effect = requests.HTTPError(f"{status} Error")
    else:
        r.raise_for_status.return_value = None
    return r

class TestOfflineLookup(unittest.TestCase):

    def test_01_match_by_name_and_alias(self):
        by_name = offline_lookup("parace")
        self.assertEqual([d.name for d in by_name], ["Paracetamol"])
        by_alias = offline_lookup("crocin")
        self.assertEqual(by_alias[0].name, "Paracetamol")
        self.assertEqual(by_alias[0].source, DrugSource.OFFLINE)

    def test_02_records_carry_forms(self):
        drug = offline_lookup("Amoxicillin")[0]
        syrup = drug.forms[FormulationKind.SYRUP]
        self.assertEqual(syrup.strength_mg, 250)
        self.assertEqual(syrup.volume_ml, 5)
        self.assertIsNone(drug.forms[FormulationKind.TABLET].volume_ml)

    def test_03_no_match(self):
        self.assertEqual(offline_lookup("unobtainium"), [])
        self.assertEqual(offline_lookup("   "), [])

class TestOnlineSearch(unittest.TestCase):

    def setUp(self):
        self.client = OnlineDrugSearch("http://search.local/drug", timeout=3)

    @mock.patch("drug_search.requests.post")
    def test_01_valid_payload(self, post):
        post.return_value = _response({
            "name": "Azithromycin", "dosePerKg": 10, "frequency": "Once a day",
            "category": "Antibiotic", "form": "syrup", "strength": "200mg/5mL"
        })
        info = self.client.search("azithro 200", weight_kg=12.0)

        self.assertEqual(info.source, DrugSource.ONLINE)
        self.assertEqual(info.dose_per_kg_per_day, 10)
        self.assertIsNone(info.max_daily_dose_per_kg)
        self.assertEqual(info.strength, "200mg/5mL")
        post.assert_called_once_with(
            "http://search.local/drug",
            json={"query": "azithro 200", "weightKg": 12.0},
            timeout=3
        )

    @mock.patch("drug_search.requests.post")
    def test_02_missing_dose_per_kg_is_not_found(self, post):
        post.return_value = _response({"name": "Mystery"})
        with self.assertRaises(DrugNotFoundError):
            self.client.search("mystery")

    @mock.patch("drug_search.requests.post")
    def test_03_http_error_is_not_found(self, post):
        post.return_value = _response({}, status=500)
        with self.assertRaises(DrugNotFoundError):
            self.client.search("amox")

    @mock.patch("drug_search.requests.post")
    def test_04_unreachable_service_falls_back_to_offline(self, post):
        post.side_effect = requests.ConnectionError("offline")
        info = lookup_drug("ibuprofen", client=self.client)
        self.assertEqual(info.source, DrugSource.OFFLINE)
        self.assertEqual(info.name, "Ibuprofen")

    @mock.patch("drug_search.requests.post")
    def test_05_offline_mode_skips_client(self, post):
        info = lookup_drug("zofran", client=self.client, online=False)
        self.assertEqual(info.name, "Ondansetron")
        post.assert_not_called()

    def test_06_not_found_anywhere(self):
        with self.assertRaises(DrugNotFoundError):
            lookup_drug("unobtainium", client=None)

    @mock.patch("drug_search.requests.post")
    def test_07_broken_request_is_not_found(self, post):
        post.side_effect = requests.exceptions.MissingSchema("Invalid URL 'not-a-url'")
        client = OnlineDrugSearch("not-a-url")
        with self.assertRaises(DrugNotFoundError):
            lookup_drug("calpol", client=client)

if __name__ == '__main__':
    unittest.main()
