"""Test projecting ORCID JSON records."""

import copy
import json
import unittest
from pathlib import Path

from orcid_client.api import Date, Record

HERE = Path(__file__).parent.resolve()
EXAMPLE_PATH = HERE.joinpath("example.json")


def _get_example() -> dict:
    return json.loads(EXAMPLE_PATH.read_text())


class TestParse(unittest.TestCase):
    """Test parsing a full record."""

    def setUp(self) -> None:
        """Parse the example record."""
        self.record = Record.from_document(_get_example())

    def test_person(self) -> None:
        """Test parsing the person section."""
        record = self.record
        self.assertEqual("0000-0001-5916-0947", record.orcid)
        self.assertEqual("A. A. Lovelace", record.credit_name)
        self.assertEqual("Ada Lovelace", record.full_name)
        self.assertEqual("A. A. Lovelace", record.name)
        self.assertEqual(["Augusta Ada King", "Countess of Lovelace"], record.other_names)
        self.assertEqual("Mathematician and writer.", record.biography)
        self.assertEqual(["analytical engine", "mathematics"], record.keywords)
        self.assertEqual(["ada@example.org"], record.emails)
        self.assertEqual("ada@example.org", record.email)
        self.assertEqual(["GB"], record.countries)
        self.assertEqual("en", record.locale)

    def test_researcher_urls(self) -> None:
        """Test a missing link label becomes an empty string."""
        self.assertEqual(
            [("Homepage", "https://example.org/ada"), ("", "https://github.com/ada")],
            self.record.researcher_urls,
        )

    def test_external_ids(self) -> None:
        """Test missing values become empty strings and duplicates are kept."""
        self.assertEqual(
            [
                ("Scopus Author ID", "1234567890"),
                ("ResearcherID", ""),
                ("Scopus Author ID", "1234567890"),
            ],
            self.record.external_ids,
        )
        # the ResearcherID has no value, so it's skipped
        self.assertEqual({"scopus": "1234567890"}, self.record.xrefs)

    def test_educations(self) -> None:
        """Test parsing educations."""
        self.assertEqual(1, len(self.record.educations))
        education = self.record.educations[0]
        self.assertEqual("Mathematics", education.department)
        self.assertEqual("Student", education.role)
        self.assertEqual(Date(year=1833, month=6), education.start)
        # the year can't be parsed, and nothing else is there
        self.assertIsNone(education.end)
        organization = education.organization
        self.assertIsNotNone(organization)
        self.assertEqual("University of London", organization.name)
        self.assertEqual("London", organization.city)
        self.assertIsNone(organization.region)
        self.assertEqual("GB", organization.country)
        self.assertEqual(("ROR", "https://ror.org/04cw6st05"), organization.disambiguation)
        self.assertEqual("04cw6st05", organization.ror)
        self.assertEqual("04cw6st05", education.ror)

    def test_employments(self) -> None:
        """Test employments are flattened across groups in document order."""
        employments = self.record.employments
        self.assertEqual(["Analyst", "Translator"], [e.role for e in employments])
        self.assertIsNone(employments[0].department)
        self.assertEqual(Date(year=1842), employments[0].start)
        self.assertIsNone(employments[0].end)
        self.assertEqual(("RINGGOLD", "1234"), employments[0].organization.disambiguation)
        self.assertIsNone(employments[0].ror)
        self.assertIsNone(employments[1].organization.disambiguation)
        self.assertEqual([], self.record.memberships)
        self.assertEqual("04cw6st05", self.record.current_affiliation_ror)

    def test_works(self) -> None:
        """Test parsing works."""
        self.assertEqual(2, len(self.record.works))
        work, notes = self.record.works
        self.assertEqual("Sketch of the Analytical Engine", work.title)
        self.assertEqual("journal-article", work.type)
        self.assertEqual("Scientific Memoirs", work.journal_title)
        self.assertEqual(Date(year=1843, month=9, day=1), work.publication_date)
        self.assertEqual(
            [("doi", "10.1234/sketch"), ("pmid", "PMID: 36151740"), ("isbn", "")],
            work.external_ids,
        )
        self.assertEqual("10.1234/sketch", work.doi)
        self.assertEqual("36151740", work.pubmed)
        self.assertEqual("10.1234/sketch", work.xrefs["doi"])

        self.assertEqual("Notes", notes.title)
        self.assertEqual([], notes.external_ids)
        self.assertIsNone(notes.publication_date)
        self.assertIsNone(notes.doi)

    def test_frozen(self) -> None:
        """Test records can't be modified."""
        with self.assertRaises(ValueError):
            self.record.orcid = "0000-0003-4423-4370"

    def test_round_trip(self) -> None:
        """Test a record survives serialization."""
        self.assertEqual(self.record, Record.model_validate_json(self.record.model_dump_json()))


class TestFullName(unittest.TestCase):
    """Test deriving full names."""

    @staticmethod
    def _get_record(**name) -> Record:
        return Record.from_document(
            {"person": {"name": {k: {"value": v} for k, v in name.items()}}}
        )

    def test_both(self) -> None:
        """Test given and family names are joined."""
        record = self._get_record(**{"given-names": "Ada", "family-name": "Lovelace"})
        self.assertEqual("Ada Lovelace", record.full_name)
        self.assertEqual("Ada Lovelace", record.name)

    def test_family_only(self) -> None:
        """Test a family name on its own."""
        record = self._get_record(**{"family-name": "Lovelace"})
        self.assertEqual("Lovelace", record.full_name)

    def test_given_only(self) -> None:
        """Test a given name on its own isn't a full name."""
        record = self._get_record(**{"given-names": "Ada"})
        self.assertIsNone(record.full_name)
        self.assertIsNone(record.name)

    def test_neither(self) -> None:
        """Test a missing name."""
        self.assertIsNone(self._get_record().full_name)
        self.assertIsNone(Record.from_document({}).full_name)

    def test_blank(self) -> None:
        """Test whitespace-only names count as missing."""
        record = self._get_record(**{"given-names": "  ", "family-name": "Lovelace"})
        self.assertEqual("Lovelace", record.full_name)


class TestTolerance(unittest.TestCase):
    """Test that missing or malformed parts of a record don't affect other parts."""

    def test_empty(self) -> None:
        """Test an empty document."""
        record = Record.from_document({}, orcid="0000-0001-5916-0947")
        self.assertEqual("0000-0001-5916-0947", record.orcid)
        self.assertIsNone(record.credit_name)
        self.assertIsNone(record.biography)
        self.assertEqual([], record.other_names)
        self.assertEqual([], record.external_ids)
        self.assertEqual([], record.keywords)
        self.assertEqual([], record.researcher_urls)
        self.assertEqual([], record.educations)
        self.assertEqual([], record.employments)
        self.assertEqual([], record.works)

    def test_missing_branch(self) -> None:
        """Test removing one branch leaves the others alone."""
        full = Record.from_document(_get_example())
        for remove in ["biography", "keywords", "external-identifiers", "name"]:
            with self.subTest(remove=remove):
                document = _get_example()
                del document["person"][remove]
                record = Record.from_document(document)
                for field in ["works", "educations", "employments", "other_names", "emails"]:
                    self.assertEqual(getattr(full, field), getattr(record, field))

        document = _get_example()
        del document["person"]["biography"]
        record = Record.from_document(document)
        self.assertIsNone(record.biography)
        self.assertEqual(full.keywords, record.keywords)
        self.assertEqual(full.external_ids, record.external_ids)
        self.assertEqual(full.full_name, record.full_name)

    def test_wrong_kinds(self) -> None:
        """Test values of the wrong JSON kind become absent."""
        document = _get_example()
        document["person"]["biography"] = "not an object"
        document["person"]["keywords"]["keyword"] = {"content": "not a list"}
        document["person"]["name"]["credit-name"] = {"value": 42}
        document["activities-summary"]["works"]["group"] = "not a list"
        record = Record.from_document(document)
        self.assertIsNone(record.biography)
        self.assertEqual([], record.keywords)
        self.assertIsNone(record.credit_name)
        self.assertEqual("Ada Lovelace", record.name)
        self.assertEqual([], record.works)
        self.assertEqual(1, len(record.educations))

    def test_list_elements(self) -> None:
        """Test malformed list elements keep their place with empty strings."""
        document = {
            "person": {
                "external-identifiers": {
                    "external-identifier": [
                        {"external-id-type": "ISNI", "external-id-value": "0000000121032683"},
                        "not an object",
                        {"external-id-value": "123"},
                    ]
                }
            }
        }
        record = Record.from_document(document)
        self.assertEqual(
            [("ISNI", "0000000121032683"), ("", ""), ("", "123")],
            record.external_ids,
        )
        self.assertEqual({"isni": "0000000121032683"}, record.xrefs)

    def test_blank_contents(self) -> None:
        """Test whitespace-only keywords and other names are skipped."""
        document = {
            "person": {
                "keywords": {"keyword": [{"content": "   "}, {"content": " x "}]},
                "other-names": {"other-name": [{"content": ""}, {"content": "\t"}]},
            }
        }
        record = Record.from_document(document)
        self.assertEqual(["x"], record.keywords)
        self.assertEqual([], record.other_names)

    def test_dates(self) -> None:
        """Test date parts are independent."""
        document = copy.deepcopy(_get_example())
        education = document["activities-summary"]["educations"]["affiliation-group"][0][
            "summaries"
        ][0]["education-summary"]
        education["start-date"] = {"year": {"value": "1833"}, "month": {"value": "June"}}
        education["end-date"] = {"year": None, "month": {"value": "7"}, "day": "2"}
        record = Record.from_document(document)
        self.assertEqual(Date(year=1833), record.educations[0].start)
        self.assertEqual(Date(month=7), record.educations[0].end)


class TestAffiliations(unittest.TestCase):
    """Test flattening affiliation groups."""

    def test_flatten(self) -> None:
        """Test two groups with one summary each give two affiliations in order."""
        document = {
            "activities-summary": {
                "educations": {
                    "affiliation-group": [
                        {"summaries": [{"education-summary": {"role-title": "BSc"}}]},
                        {"summaries": [{"education-summary": {"role-title": "PhD"}}]},
                    ]
                }
            }
        }
        record = Record.from_document(document)
        self.assertEqual(["BSc", "PhD"], [education.role for education in record.educations])
        self.assertEqual([], record.employments)

    def test_skip_other_kinds(self) -> None:
        """Test summaries of another kind are skipped."""
        document = {
            "activities-summary": {
                "memberships": {
                    "affiliation-group": [
                        {
                            "summaries": [
                                {"employment-summary": {"role-title": "Engineer"}},
                                {"membership-summary": {"role-title": "Fellow"}},
                                {},
                            ]
                        },
                    ]
                }
            }
        }
        record = Record.from_document(document)
        self.assertEqual(["Fellow"], [membership.role for membership in record.memberships])
