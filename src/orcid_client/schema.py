"""Tolerant models for the JSON records served by the ORCID public API.

These mirror the subset of the `ORCID v3.0 record
<https://github.com/ORCID/orcid-model/tree/master/src/main/resources/record_3.0>`_
that :mod:`orcid_client.api` projects. Every field is optional. A branch that
is missing, ``null``, or of the wrong JSON kind validates to ``None`` (or to
an empty list for list-valued fields) instead of failing the whole document.
"""

from __future__ import annotations

from typing import Annotated, Any, TypeVar

from pydantic import (
    BaseModel,
    ConfigDict,
    ValidationError,
    ValidatorFunctionWrapHandler,
    WrapValidator,
)

__all__ = [
    "ActivitiesSummary",
    "AffiliationGroup",
    "AffiliationSection",
    "AffiliationSummary",
    "ExternalId",
    "FuzzyDate",
    "OrganizationModel",
    "Person",
    "RecordDocument",
    "Value",
    "WorkSummary",
]

T = TypeVar("T")


def _absent_on_error(value: Any, handler: ValidatorFunctionWrapHandler) -> Any:
    if value is None:
        return None
    try:
        return handler(value)
    except ValidationError:
        return None


def _empty_on_error(value: Any, handler: ValidatorFunctionWrapHandler) -> Any:
    if not isinstance(value, list):
        return []
    # non-objects still count as elements, they just have no sub-fields
    return handler([element if isinstance(element, dict) else {} for element in value])


#: A value that becomes None if it can't be validated
Lenient = Annotated[T | None, WrapValidator(_absent_on_error)]
#: A list that becomes empty if it isn't a list
LenientList = Annotated[list[T], WrapValidator(_empty_on_error)]
LenientStr = Lenient[str]


def _kebab(name: str) -> str:
    return name.replace("_", "-")


class _Model(BaseModel):
    model_config = ConfigDict(
        alias_generator=_kebab,
        frozen=True,
        extra="ignore",
    )


class Value(_Model):
    """ORCID wraps many scalars in a ``{"value": ...}`` object."""

    value: LenientStr = None


class FuzzyDate(_Model):
    """A date where each part is optional, e.g., only a year."""

    year: Lenient[Value] = None
    month: Lenient[Value] = None
    day: Lenient[Value] = None


class ExternalId(_Model):
    """An external identifier, used both for people and for works."""

    external_id_type: LenientStr = None
    external_id_value: LenientStr = None
    external_id_url: Lenient[Value] = None
    external_id_relationship: LenientStr = None


class ExternalIds(_Model):
    external_id: LenientList[ExternalId] = []


class ExternalIdentifiers(_Model):
    external_identifier: LenientList[ExternalId] = []


class Name(_Model):
    given_names: Lenient[Value] = None
    family_name: Lenient[Value] = None
    credit_name: Lenient[Value] = None


class Content(_Model):
    content: LenientStr = None


class OtherNames(_Model):
    other_name: LenientList[Content] = []


class Keywords(_Model):
    keyword: LenientList[Content] = []


class ResearcherUrl(_Model):
    url_name: LenientStr = None
    url: Lenient[Value] = None


class ResearcherUrls(_Model):
    researcher_url: LenientList[ResearcherUrl] = []


class Email(_Model):
    email: LenientStr = None


class Emails(_Model):
    email: LenientList[Email] = []


class Address(_Model):
    country: Lenient[Value] = None


class Addresses(_Model):
    address: LenientList[Address] = []


class Person(_Model):
    """The ``person`` section of a record."""

    name: Lenient[Name] = None
    other_names: Lenient[OtherNames] = None
    biography: Lenient[Content] = None
    researcher_urls: Lenient[ResearcherUrls] = None
    emails: Lenient[Emails] = None
    addresses: Lenient[Addresses] = None
    keywords: Lenient[Keywords] = None
    external_identifiers: Lenient[ExternalIdentifiers] = None


class OrganizationAddress(_Model):
    city: LenientStr = None
    region: LenientStr = None
    country: LenientStr = None


class DisambiguatedOrganization(_Model):
    disambiguated_organization_identifier: LenientStr = None
    disambiguation_source: LenientStr = None


class OrganizationModel(_Model):
    """An organization as it appears in an affiliation summary."""

    name: LenientStr = None
    address: Lenient[OrganizationAddress] = None
    disambiguated_organization: Lenient[DisambiguatedOrganization] = None


class AffiliationSummary(_Model):
    """The body shared by all affiliation summaries (education, employment, ...)."""

    department_name: LenientStr = None
    role_title: LenientStr = None
    start_date: Lenient[FuzzyDate] = None
    end_date: Lenient[FuzzyDate] = None
    organization: Lenient[OrganizationModel] = None


class AffiliationSummaries(_Model):
    """One entry of a group's ``summaries`` list, keyed by the kind of affiliation."""

    education_summary: Lenient[AffiliationSummary] = None
    employment_summary: Lenient[AffiliationSummary] = None
    membership_summary: Lenient[AffiliationSummary] = None


class AffiliationGroup(_Model):
    summaries: LenientList[AffiliationSummaries] = []


class AffiliationSection(_Model):
    affiliation_group: LenientList[AffiliationGroup] = []


class WorkTitle(_Model):
    title: Lenient[Value] = None
    subtitle: Lenient[Value] = None


class WorkSummary(_Model):
    """A summary of a work, i.e., one source's version of a work."""

    title: Lenient[WorkTitle] = None
    external_ids: Lenient[ExternalIds] = None
    type: LenientStr = None
    publication_date: Lenient[FuzzyDate] = None
    journal_title: Lenient[Value] = None
    url: Lenient[Value] = None


class WorkGroup(_Model):
    work_summary: LenientList[WorkSummary] = []


class Works(_Model):
    group: LenientList[WorkGroup] = []


class ActivitiesSummary(_Model):
    """The ``activities-summary`` section of a record."""

    educations: Lenient[AffiliationSection] = None
    employments: Lenient[AffiliationSection] = None
    memberships: Lenient[AffiliationSection] = None
    works: Lenient[Works] = None


class OrcidIdentifier(_Model):
    uri: LenientStr = None
    path: LenientStr = None
    host: LenientStr = None


class Preferences(_Model):
    locale: LenientStr = None


class RecordDocument(_Model):
    """A full record, as returned by ``GET /v3.0/{orcid}``."""

    orcid_identifier: Lenient[OrcidIdentifier] = None
    person: Lenient[Person] = None
    activities_summary: Lenient[ActivitiesSummary] = None
    preferences: Lenient[Preferences] = None
