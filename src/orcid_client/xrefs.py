"""Normalization of external identifiers that appear in ORCID records."""

from __future__ import annotations

import logging
from collections.abc import Iterable

import bioregistry

__all__ = [
    "get_person_xrefs",
    "get_work_xrefs",
    "standardize_pubmed",
]

logger = logging.getLogger(__name__)


def _norm_key(id_type: str) -> str:
    return id_type.lower().replace(" ", "").rstrip(":")


#: Mapping from ORCID person external identifier types to Bioregistry prefixes
EXTERNAL_ID_MAPPING = {
    "ResearcherID": "wos.researcher",
    "RID": "wos.researcher",
    "Web of Science Researcher ID": "wos.researcher",
    "Scopus Author ID": "scopus",
    "Scopus ID": "scopus",
    "Loop profile": "loop",
    "github": "github",
    "ISNI": "isni",
    "Google Scholar": "google.scholar",
    "gnd": "gnd",
    "AuthenticusID": "authenticus",
    "Dialnet ID": "dialnet.author",
    "SciProfiles": "sciprofiles",
    "Ciência ID": "cienciavitae",
    "KAKEN": "kaken",
    "SSRN": "ssrn.author",
}

for key, value in EXTERNAL_ID_MAPPING.items():
    _resource = bioregistry.get_resource(value)
    if _resource is None:
        raise ValueError(f"Unregistered prefix in EXTERNAL_ID_MAPPING for {key} - {value}")
    if _resource.prefix != value:
        raise ValueError(
            f"Mapping uses non-standard prefix for {key} - {value} should be {_resource.prefix}"
        )

EXTERNAL_ID_MAPPING = {_norm_key(k): v for k, v in EXTERNAL_ID_MAPPING.items()}


def get_person_xrefs(pairs: Iterable[tuple[str, str]]) -> dict[str, str]:
    """Map (type, value) pairs of a person's external identifiers onto Bioregistry prefixes.

    :param pairs: External identifier type/value pairs, as listed in a record
    :return: A dictionary from Bioregistry prefix to local unique identifier. Pairs
        with an empty value or an unknown type are skipped. If a prefix appears
        more than once, the first value wins.
    """
    rv: dict[str, str] = {}
    for id_type, local_unique_identifier in pairs:
        if not id_type or not local_unique_identifier:
            continue
        prefix = EXTERNAL_ID_MAPPING.get(_norm_key(id_type))
        if prefix is None:
            logger.debug("unknown external identifier type '%s'", id_type)
            continue
        rv.setdefault(prefix, local_unique_identifier.strip())
    return rv


def get_work_xrefs(pairs: Iterable[tuple[str, str]]) -> dict[str, str]:
    """Map (type, value) pairs of a work's external identifiers onto Bioregistry prefixes.

    Work identifier types in ORCID (``doi``, ``pmid``, ``arxiv``, ...) are mostly
    already prefixes or synonyms, so they go through :func:`bioregistry.normalize_prefix`.
    """
    rv: dict[str, str] = {}
    for id_type, local_unique_identifier in pairs:
        if not id_type or not local_unique_identifier:
            continue
        prefix = bioregistry.normalize_prefix(id_type)
        if prefix is None:
            logger.debug("unknown work identifier type '%s'", id_type)
            continue
        if prefix == "pubmed":
            pubmed = standardize_pubmed(local_unique_identifier)
            if pubmed is None:
                continue
            local_unique_identifier = pubmed
        rv.setdefault(prefix, local_unique_identifier.strip())
    return rv


PUBMED_PREFIXES = [
    "https://pubmed.ncbi.nlm.nih.gov/",
    "http://www.ncbi.nlm.nih.gov/pubmed/",
    "https://www.ncbi.nlm.nih.gov/pubmed/",
    "www.ncbi.nlm.nih.gov/pubmed/",
    "ncbi.nlm.nih.gov/pubmed/",
    "http://europepmc.org/abstract/med/",
    "PubMed PMID: ",
    "PubMed ID: ",
    "PubMed:",
    "PMID: ",
    "PMID:",
    "PMID ",
    "PMID",
    "MEDLINE:",
]


def standardize_pubmed(pubmed: str) -> str | None:
    """Standardize a PubMed identifier.

    :param pubmed: A string that might somehow represent a PubMed identifier
    :returns: A cleaned PubMed identifier, if possible

    >>> standardize_pubmed("PMID: 36151740")
    '36151740'
    >>> standardize_pubmed("https://pubmed.ncbi.nlm.nih.gov/36151740/")
    '36151740'
    >>> standardize_pubmed("PMC1234") is None
    True
    """
    pubmed = pubmed.strip().strip(".").rstrip("/").strip()
    if pubmed.isnumeric():
        return pubmed
    for x in PUBMED_PREFIXES:
        if pubmed.startswith(x):
            parts = pubmed.removeprefix(x).strip().split()
            if parts and parts[0].isnumeric():
                return parts[0]
            return None
    return None
