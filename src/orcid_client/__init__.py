"""A client for the ORCID public API."""

from .api import Affiliation, Date, Organization, Record, Work
from .client import (
    ApiError,
    Client,
    MalformedResponse,
    OrcidClientError,
    fetch_record,
    search,
    search_external_id,
)

__all__ = [
    "Affiliation",
    "ApiError",
    "Client",
    "Date",
    "MalformedResponse",
    "OrcidClientError",
    "Organization",
    "Record",
    "Work",
    "fetch_record",
    "search",
    "search_external_id",
]
