"""Typed projections of ORCID records."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic_extra_types.country import CountryAlpha2, _index_by_alpha2

from orcid_client.schema import (
    AffiliationSection,
    AffiliationSummary,
    FuzzyDate,
    OrganizationModel,
    Person,
    RecordDocument,
    Value,
    WorkSummary,
)
from orcid_client.xrefs import get_person_xrefs, get_work_xrefs, standardize_pubmed

__all__ = [
    "Affiliation",
    "Date",
    "Organization",
    "Record",
    "Work",
]

logger = logging.getLogger(__name__)


class Date(BaseModel):
    """A model representing a date, where any part can be missing."""

    model_config = ConfigDict(frozen=True)

    year: int | None = None
    month: int | None = None
    day: int | None = None


class Organization(BaseModel):
    """A model representing an organization."""

    model_config = ConfigDict(frozen=True)

    name: str | None = None
    city: str | None = None
    region: str | None = None
    country: str | None = None
    disambiguation: tuple[str, str] | None = Field(
        None, description="A pair of the disambiguation source (e.g., ROR) and identifier"
    )

    @property
    def ror(self) -> str | None:
        """Get the organization's ROR identifier, if available."""
        if self.disambiguation is None:
            return None
        source, identifier = self.disambiguation
        if source != "ROR" or not identifier:
            return None
        return identifier.strip().removeprefix("https://ror.org/")


class Affiliation(BaseModel):
    """A model representing an affiliation (e.g., education or employment)."""

    model_config = ConfigDict(frozen=True)

    department: str | None = None
    role: str | None = None
    start: Date | None = Field(None, title="Start Date")
    end: Date | None = Field(None, title="End Date")
    organization: Organization | None = None

    @property
    def ror(self) -> str | None:
        """Get the affiliation's ROR identifier, if available."""
        return self.organization.ror if self.organization is not None else None


class Work(BaseModel):
    """A model representing a creative work."""

    model_config = ConfigDict(frozen=True)

    title: str | None = None
    external_ids: list[tuple[str, str]] = Field(
        default_factory=list, description="Pairs of external identifier types and values"
    )
    publication_date: Date | None = None
    type: str | None = Field(None, description="The ORCID work type, e.g., journal-article")
    journal_title: str | None = None
    url: str | None = None

    @property
    def xrefs(self) -> dict[str, str]:
        """Get the work's external identifiers, keyed by Bioregistry prefix."""
        return get_work_xrefs(self.external_ids)

    @property
    def doi(self) -> str | None:
        """Get the work's DOI, if available."""
        for id_type, value in self.external_ids:
            if id_type.lower() == "doi" and value:
                return value
        return None

    @property
    def pubmed(self) -> str | None:
        """Get the work's PubMed identifier, if available."""
        for id_type, value in self.external_ids:
            if id_type.lower() == "pmid" and value and (pubmed := standardize_pubmed(value)):
                return pubmed
        return None


class Record(BaseModel):
    """A model representing a person's public ORCID record."""

    model_config = ConfigDict(frozen=True)

    orcid: str | None = None
    credit_name: str | None = Field(None, description="The name the researcher prefers")
    given_name: str | None = None
    family_name: str | None = None
    other_names: list[str] = Field(default_factory=list)
    biography: str | None = None
    external_ids: list[tuple[str, str]] = Field(
        default_factory=list, description="Pairs of external identifier types and values"
    )
    keywords: list[str] = Field(default_factory=list)
    researcher_urls: list[tuple[str, str]] = Field(
        default_factory=list, description="Pairs of link labels and URLs"
    )
    educations: list[Affiliation] = Field(default_factory=list)
    employments: list[Affiliation] = Field(default_factory=list)
    memberships: list[Affiliation] = Field(default_factory=list)
    works: list[Work] = Field(default_factory=list)
    emails: list[str] = Field(default_factory=list)
    countries: list[CountryAlpha2] = Field(
        default_factory=list, description="The ISO 3166-1 alpha-2 country codes (uppercase)"
    )
    locale: str | None = None

    @classmethod
    def from_document(cls, document: dict[str, Any], orcid: str | None = None) -> Record:
        """Project a JSON document from the ORCID API into a record.

        :param document: The JSON object returned by ``GET /v3.0/{orcid}``
        :param orcid: The identifier to use if the document doesn't list its own
        :return: A record. Missing or malformed parts of the document are left empty.
        """
        return _process_document(RecordDocument.model_validate(document), orcid=orcid)

    @property
    def full_name(self) -> str | None:
        """Get the name built from the given and family names.

        Falls back to the family name alone if there's no given name.
        """
        if self.given_name and self.family_name:
            return f"{self.given_name} {self.family_name}"
        if self.family_name:
            return self.family_name
        return None

    @property
    def name(self) -> str | None:
        """Get the credit name if available, otherwise the full name."""
        return self.credit_name or self.full_name

    @property
    def xrefs(self) -> dict[str, str]:
        """Get the researcher's external identifiers, keyed by Bioregistry prefix."""
        return get_person_xrefs(self.external_ids)

    @property
    def email(self) -> str | None:
        """Get the first email, if available."""
        return self.emails[0] if self.emails else None

    @property
    def country(self) -> str | None:
        """Get the first country, if available."""
        return self.countries[0] if self.countries else None

    @property
    def current_affiliation_ror(self) -> str | None:
        """Guess the current affiliation and return its ROR identifier, if available."""
        # assume that if there are employments listed that are not over yet,
        # then these surpass education
        for employment in self.employments:
            if employment.ror and employment.end is None:
                return employment.ror

        for education in self.educations:
            if education.ror and education.end is None:
                return education.ror

        return None


def _process_document(document: RecordDocument, orcid: str | None = None) -> Record:
    person = document.person or Person()
    name = person.name

    if document.orcid_identifier is not None and document.orcid_identifier.path:
        orcid = document.orcid_identifier.path

    record: dict[str, Any] = {
        "orcid": orcid,
        "credit_name": _get_value(name.credit_name) if name else None,
        "given_name": _get_value(name.given_names) if name else None,
        "family_name": _get_value(name.family_name) if name else None,
        "biography": person.biography.content if person.biography else None,
        "other_names": _get_contents(person.other_names.other_name if person.other_names else []),
        "keywords": _get_contents(person.keywords.keyword if person.keywords else []),
        "external_ids": _get_tuples(
            person.external_identifiers.external_identifier if person.external_identifiers else [],
            "external_id_type",
            "external_id_value",
        ),
        "researcher_urls": _get_tuples(
            person.researcher_urls.researcher_url if person.researcher_urls else [],
            "url_name",
            "url",
        ),
        "emails": [
            email.email.strip()
            for email in (person.emails.email if person.emails else [])
            if email.email
        ],
        "countries": _get_countries(
            person.addresses.address if person.addresses else [], orcid=orcid
        ),
        "locale": document.preferences.locale if document.preferences else None,
    }

    activities = document.activities_summary
    if activities is not None:
        record["educations"] = _get_affiliations(activities.educations, "education_summary")
        record["employments"] = _get_affiliations(activities.employments, "employment_summary")
        record["memberships"] = _get_affiliations(activities.memberships, "membership_summary")
        if activities.works is not None:
            record["works"] = [
                _get_work(work_summary)
                for group in activities.works.group
                for work_summary in group.work_summary
            ]

    return Record.model_validate(record)


def _get_value(value: Value | None) -> str | None:
    if value is None or value.value is None:
        return None
    # whitespace-only is the same as missing
    return value.value.strip() or None


def _get_text(obj: Any) -> str:
    if isinstance(obj, Value):
        obj = obj.value
    return obj if isinstance(obj, str) else ""


def _get_tuples(elements: Iterable[BaseModel], *fields: str) -> list[tuple[str, ...]]:
    """Get one tuple of strings per element, using empty strings for missing fields."""
    return [tuple(_get_text(getattr(element, field)) for field in fields) for element in elements]


def _get_contents(elements: Iterable[Any]) -> list[str]:
    return [
        content for element in elements if element.content and (content := element.content.strip())
    ]


def _get_countries(elements: Iterable[Any], orcid: str | None) -> list[str]:
    rv = []
    for address in elements:
        value = _get_value(address.country)
        if not value:
            continue
        value = value.upper()
        if value == "XK":
            # XK is a proposed code for Kosovo, but isn't valid.
            continue
        elif value not in _index_by_alpha2():
            logger.debug("[%s] invalid 2 letter country code: %s", orcid, value)
            continue
        rv.append(value)
    return rv


def _get_affiliations(section: AffiliationSection | None, summary_key: str) -> list[Affiliation]:
    """Get affiliations from all groups of a section.

    :param section: An affiliation section from the activities summary, e.g., ``educations``
    :param summary_key: The attribute of each summary that holds the affiliation,
        e.g., ``education_summary``. Summaries without it are skipped.
    :return: All affiliations in document order, flattened across groups
    """
    if section is None:
        return []
    rv = []
    for group in section.affiliation_group:
        for summaries in group.summaries:
            summary: AffiliationSummary | None = getattr(summaries, summary_key)
            if summary is None:
                continue
            rv.append(
                Affiliation(
                    department=summary.department_name,
                    role=summary.role_title,
                    start=_get_date(summary.start_date),
                    end=_get_date(summary.end_date),
                    organization=_get_organization(summary.organization),
                )
            )
    return rv


def _get_organization(organization: OrganizationModel | None) -> Organization | None:
    if organization is None:
        return None
    address = organization.address
    disambiguated = organization.disambiguated_organization
    if disambiguated is not None and (
        disambiguated.disambiguation_source or disambiguated.disambiguated_organization_identifier
    ):
        disambiguation = (
            disambiguated.disambiguation_source or "",
            disambiguated.disambiguated_organization_identifier or "",
        )
    else:
        disambiguation = None
    return Organization(
        name=organization.name,
        city=address.city if address else None,
        region=address.region if address else None,
        country=address.country if address else None,
        disambiguation=disambiguation,
    )


def _get_date(date: FuzzyDate | None) -> Date | None:
    if date is None:
        return None
    year, month, day = (_get_int(part) for part in (date.year, date.month, date.day))
    if year is None and month is None and day is None:
        return None
    return Date(year=year, month=month, day=day)


def _get_int(part: Value | None) -> int | None:
    text = _get_value(part)
    if text is None:
        return None
    try:
        return int(text)
    except ValueError:
        return None


def _get_work(work_summary: WorkSummary) -> Work:
    title = work_summary.title
    return Work(
        title=_get_value(title.title) if title else None,
        external_ids=_get_tuples(
            work_summary.external_ids.external_id if work_summary.external_ids else [],
            "external_id_type",
            "external_id_value",
        ),
        publication_date=_get_date(work_summary.publication_date),
        type=work_summary.type,
        journal_title=_get_value(work_summary.journal_title),
        url=_get_value(work_summary.url),
    )
