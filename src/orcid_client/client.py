"""A client for the ORCID public API."""

from __future__ import annotations

import logging
from typing import Any

import pystow
import requests

from orcid_client.api import Record

__all__ = [
    "ApiError",
    "Client",
    "MalformedResponse",
    "OrcidClientError",
    "fetch_record",
    "search",
    "search_external_id",
]

logger = logging.getLogger(__name__)

#: The name used to look up configuration with :func:`pystow.get_config`
CONFIG_MODULE = "orcid_client"
#: The versioned root of the ORCID public API
BASE_URL = "https://pub.orcid.org/v3.0/"
#: Seconds to wait for the API before giving up
TIMEOUT = 60.0
HEADERS = {"Accept": "application/json", "User-Agent": "orcid_client"}

ORCID_PREFIXES = ("https://orcid.org/", "http://orcid.org/", "orcid:")


class OrcidClientError(Exception):
    """The base class for errors raised by this package."""


class ApiError(OrcidClientError):
    """Raised when the ORCID API reports an error in its response."""

    def __init__(self, identifier: str, message: str, code: Any = None) -> None:
        self.identifier = identifier
        self.message = message
        self.code = code
        super().__init__(f"{identifier}: {message}")


class MalformedResponse(OrcidClientError):
    """Raised when a response doesn't have the shape an operation needs."""


def normalize_orcid(orcid: str) -> str:
    """Remove whitespace and URI prefixes from an ORCID identifier.

    >>> normalize_orcid(" https://orcid.org/0000-0003-4423-4370 ")
    '0000-0003-4423-4370'
    """
    orcid = orcid.strip()
    for prefix in ORCID_PREFIXES:
        orcid = orcid.removeprefix(prefix)
    return orcid


class Client:
    """A client for the ORCID public API.

    Each operation makes exactly one GET request and doesn't retry.
    """

    def __init__(self, base_url: str | None = None, timeout: float | None = None) -> None:
        """Instantiate the client.

        :param base_url: The root of the API. If not given, looks up ``base_url``
            in the ``orcid_client`` configuration (e.g., the ``ORCID_CLIENT_BASE_URL``
            environment variable) and falls back to :data:`BASE_URL`.
        :param timeout: Seconds to wait for a response. If not given, looks up
            ``timeout`` in the configuration and falls back to :data:`TIMEOUT`.
        """
        if base_url is None:
            base_url = pystow.get_config(CONFIG_MODULE, "base_url", default=BASE_URL)
        if timeout is None:
            timeout = pystow.get_config(CONFIG_MODULE, "timeout", default=TIMEOUT, dtype=float)
        self.base_url = base_url.rstrip("/") + "/"
        self.timeout = timeout

    def get_json(self, path: str, params: dict[str, Any] | None = None) -> Any:
        """Get the JSON body of ``GET {base_url}{path}``."""
        url = self.base_url + path
        logger.debug("GET %s params=%s", url, params)
        res = requests.get(url, params=params, headers=HEADERS, timeout=self.timeout)
        try:
            document = res.json()
        except ValueError as e:
            res.raise_for_status()
            raise MalformedResponse(f"response from {url} is not JSON") from e
        # errors reported in the body are raised by the caller as ApiError
        if not (isinstance(document, dict) and "error-code" in document):
            res.raise_for_status()
        return document

    def fetch_record(self, orcid: str) -> Record:
        """Get a researcher's record.

        :param orcid: An ORCID identifier, e.g., ``0000-0003-4423-4370``
        :return: The researcher's record
        :raises ApiError: if the API reports an error, e.g., for an unknown identifier
        :raises MalformedResponse: if the response isn't a JSON object
        """
        document = self.get_json(normalize_orcid(orcid))
        if not isinstance(document, dict):
            raise MalformedResponse(f"record for {orcid} is not a JSON object")
        _raise_for_api_error(document, orcid)
        return Record.from_document(document, orcid=normalize_orcid(orcid))

    def search(self, query: str, *, rows: int | None = None, start: int | None = None) -> list[str]:
        """Search for researchers.

        :param query: A query in the `ORCID search syntax
            <https://info.orcid.org/documentation/api-tutorials/api-tutorial-searching-the-orcid-registry/>`_
        :param rows: The maximum number of results to return
        :param start: The offset of the first result, for paging
        :return: The ORCID identifiers of the matching researchers
        :raises ApiError: if the API reports an error, e.g., for bad query syntax
        :raises MalformedResponse: if the response has no ``result`` list
        """
        params: dict[str, Any] = {"q": query}
        if rows is not None:
            params["rows"] = rows
        if start is not None:
            params["start"] = start
        document = self.get_json("search", params=params)
        if isinstance(document, dict):
            _raise_for_api_error(document, query)
        if not isinstance(document, dict) or "result" not in document:
            raise MalformedResponse(f"search for {query!r} is missing its results")
        results = document["result"]
        if results is None:
            # the API gives null instead of an empty list when nothing matches
            return []
        if not isinstance(results, list):
            raise MalformedResponse(f"search for {query!r} has non-list results")
        return [_get_search_orcid(result, query) for result in results]

    def search_external_id(self, identifier: str, **kwargs: Any) -> list[str]:
        """Search for researchers by an identifier from another database, e.g., a DOI."""
        return self.search(f'"{identifier}"', **kwargs)


def _raise_for_api_error(document: dict[str, Any], identifier: str) -> None:
    if "error-code" not in document:
        return
    code = document["error-code"]
    message = document.get("developer-message") or document.get("user-message")
    raise ApiError(identifier, message or str(code), code=code)


def _get_search_orcid(result: Any, query: str) -> str:
    orcid = None
    if isinstance(result, dict) and isinstance(result.get("orcid-identifier"), dict):
        orcid = result["orcid-identifier"].get("path")
    if not isinstance(orcid, str):
        raise MalformedResponse(f"search for {query!r} has a result without an identifier")
    return orcid


def fetch_record(orcid: str) -> Record:
    """Get a researcher's record with a new client."""
    return Client().fetch_record(orcid)


def search(query: str, **kwargs: Any) -> list[str]:
    """Search for researchers with a new client."""
    return Client().search(query, **kwargs)


def search_external_id(identifier: str, **kwargs: Any) -> list[str]:
    """Search for researchers by an identifier from another database with a new client."""
    return Client().search_external_id(identifier, **kwargs)
