"""Data sources that resolve a resource URI into labelled triples."""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Dict, Iterable, List, Optional

import requests
from rdflib import Graph as RDFGraph, Literal, URIRef

from ldexplorer.config import LABEL_PREDICATES, get_setting
from ldexplorer.models import Term, Triple
from ldexplorer.utils import _local_name, profile_time

RDF_ACCEPT = "application/ld+json, application/rdf+xml, text/turtle, application/n-triples;q=0.9"


class FetchError(RuntimeError):
    """A data source could not answer a request."""


class DataSource:
    """
    Interface consumed by the graph.

    Both calls return an empty list when the source has nothing to say about
    the resource, and raise `FetchError` when the source itself fails.
    """

    async def fetch_properties(self, uri: str) -> List[Triple]:
        raise NotImplementedError

    async def fetch_data(self, uri: str, predicate: str) -> List[Triple]:
        raise NotImplementedError


# ------------------------------
# SPARQL endpoint
# ------------------------------
def _label_clause(var: str, target: str, language: str) -> str:
    return (
        f"OPTIONAL {{ {target} <http://www.w3.org/2000/01/rdf-schema#label> ?{var} . "
        f'FILTER(LANG(?{var}) = "" || LANGMATCHES(LANG(?{var}), "{language}")) }}'
    )


def build_properties_query(uri: str, language: str = "en", limit: int = 200) -> str:
    subject = URIRef(uri).n3()
    return "\n".join(
        [
            "SELECT ?sLabel ?p ?pLabel ?o ?oLabel WHERE {",
            f"  {subject} ?p ?o .",
            "  FILTER(isIRI(?o))",
            "  " + _label_clause("sLabel", subject, language),
            "  " + _label_clause("pLabel", "?p", language),
            "  " + _label_clause("oLabel", "?o", language),
            "}",
            f"LIMIT {int(limit)}",
        ]
    )


def build_data_query(uri: str, predicate: str, language: str = "en", limit: int = 200) -> str:
    subject = URIRef(uri).n3()
    prop = URIRef(predicate).n3()
    return "\n".join(
        [
            "SELECT ?sLabel ?pLabel ?o ?oLabel WHERE {",
            f"  {subject} {prop} ?o .",
            "  FILTER(isIRI(?o))",
            "  " + _label_clause("sLabel", subject, language),
            "  " + _label_clause("pLabel", prop, language),
            "  " + _label_clause("oLabel", "?o", language),
            "}",
            f"LIMIT {int(limit)}",
        ]
    )


def _binding_value(binding: Dict[str, Any], var: str) -> Optional[str]:
    cell = binding.get(var)
    if not isinstance(cell, dict):
        return None
    value = cell.get("value")
    return value if isinstance(value, str) and value else None


def triples_from_bindings(
    uri: str,
    bindings: Iterable[Dict[str, Any]],
    predicate: Optional[str] = None,
) -> List[Triple]:
    """
    Convert SPARQL JSON result bindings into triples about `uri`.

    Rows repeated because a resource carries several labels collapse to the
    first one seen.
    """
    triples: List[Triple] = []
    seen = set()
    for binding in bindings:
        p_value = predicate or _binding_value(binding, "p")
        o_value = _binding_value(binding, "o")
        if not p_value or not o_value:
            continue
        if (p_value, o_value) in seen:
            continue
        seen.add((p_value, o_value))
        triples.append(
            Triple(
                subject=Term(uri, _binding_value(binding, "sLabel") or _local_name(uri)),
                predicate=Term(p_value, _binding_value(binding, "pLabel") or _local_name(p_value)),
                object=Term(o_value, _binding_value(binding, "oLabel") or _local_name(o_value)),
            )
        )
    return triples


class SparqlDataSource(DataSource):
    def __init__(
        self,
        endpoint: Optional[str] = None,
        timeout: Optional[float] = None,
        language: Optional[str] = None,
        limit: Optional[int] = None,
    ) -> None:
        self.endpoint = endpoint or get_setting("SPARQL_ENDPOINT")
        self.timeout = float(timeout or get_setting("SPARQL_TIMEOUT"))
        self.language = language or get_setting("LABEL_LANGUAGE", "en")
        self.limit = int(limit or get_setting("RESULT_LIMIT"))

    async def fetch_properties(self, uri: str) -> List[Triple]:
        query = self._build(build_properties_query, uri, self.language, self.limit)
        bindings = await self._select(query)
        return triples_from_bindings(uri, bindings)

    async def fetch_data(self, uri: str, predicate: str) -> List[Triple]:
        query = self._build(build_data_query, uri, predicate, self.language, self.limit)
        bindings = await self._select(query)
        return triples_from_bindings(uri, bindings, predicate=predicate)

    @staticmethod
    def _build(builder, *args) -> str:
        try:
            return builder(*args)
        except Exception as exc:
            # rdflib refuses to serialize IRIs with spaces, quotes or angle brackets
            raise FetchError(f"Cannot build a SPARQL query for {args[0]!r}: {exc}") from exc

    @profile_time
    async def _select(self, query: str) -> List[Dict[str, Any]]:
        return await asyncio.to_thread(self._run_select, query)

    def _run_select(self, query: str) -> List[Dict[str, Any]]:
        try:
            resp = requests.get(
                self.endpoint,
                params={"query": query},
                headers={"Accept": "application/sparql-results+json"},
                timeout=self.timeout,
            )
            resp.raise_for_status()
        except requests.RequestException as exc:
            raise FetchError(f"SPARQL request to {self.endpoint} failed: {exc}") from exc

        try:
            bindings = resp.json()["results"]["bindings"]
        except (ValueError, KeyError, TypeError) as exc:
            raise FetchError(f"Unexpected SPARQL response from {self.endpoint}: {resp.text[:500]}") from exc
        logging.debug("SPARQL endpoint %s returned %s row(s)", self.endpoint, len(bindings))
        return bindings


# ------------------------------
# In-memory rdflib graph
# ------------------------------
class RDFGraphDataSource(DataSource):
    """Answer fetches from an rdflib graph, e.g. an uploaded RDF file."""

    def __init__(self, rdf_graph: RDFGraph, language: Optional[str] = None) -> None:
        self.rdf_graph = rdf_graph
        self.language = language or get_setting("LABEL_LANGUAGE", "en")

    @classmethod
    def from_data(cls, data: str, rdf_format: str = "turtle", **kwargs) -> "RDFGraphDataSource":
        return cls(RDFGraph().parse(data=data, format=rdf_format), **kwargs)

    @classmethod
    def from_file(cls, path: str, rdf_format: Optional[str] = None, **kwargs) -> "RDFGraphDataSource":
        return cls(RDFGraph().parse(path, format=rdf_format), **kwargs)

    @classmethod
    def from_uri(cls, uri: str, timeout: float = 10, **kwargs) -> "RDFGraphDataSource":
        """Dereference `uri` with content negotiation and load the returned RDF."""
        try:
            response = requests.get(uri, headers={"Accept": RDF_ACCEPT}, timeout=timeout)
            response.raise_for_status()
        except requests.RequestException as exc:
            raise FetchError(f"Error dereferencing URI '{uri}': {exc}") from exc

        content_type = response.headers.get("Content-Type", "").lower()
        if "application/ld+json" in content_type:
            fmt = "json-ld"
        elif "text/turtle" in content_type or uri.endswith(".ttl"):
            fmt = "turtle"
        elif "application/n-triples" in content_type or uri.endswith(".nt"):
            fmt = "nt"
        else:
            fmt = "xml"
        try:
            rdf_graph = RDFGraph().parse(data=response.text, format=fmt)
        except Exception as exc:
            raise FetchError(f"Could not parse RDF from '{uri}' as {fmt}: {exc}") from exc
        logging.info("Dereferenced URI '%s' with %s triple(s) (format: %s).", uri, len(rdf_graph), fmt)
        return cls(rdf_graph, **kwargs)

    def label_for(self, uri: str) -> str:
        node = URIRef(uri)
        fallback = None
        for predicate in LABEL_PREDICATES:
            for value in self.rdf_graph.objects(node, URIRef(predicate)):
                if not isinstance(value, Literal):
                    continue
                if value.language in (None, self.language):
                    return str(value)
                fallback = fallback or str(value)
        return fallback or _local_name(uri)

    def _triple(self, uri: str, predicate: str, obj: str) -> Triple:
        return Triple(
            subject=Term(uri, self.label_for(uri)),
            predicate=Term(predicate, self.label_for(predicate)),
            object=Term(obj, self.label_for(obj)),
        )

    async def fetch_properties(self, uri: str) -> List[Triple]:
        pairs = sorted(
            (str(p), str(o))
            for p, o in self.rdf_graph.predicate_objects(URIRef(uri))
            if isinstance(o, URIRef)
        )
        return [self._triple(uri, p, o) for p, o in pairs]

    async def fetch_data(self, uri: str, predicate: str) -> List[Triple]:
        objects = sorted(
            str(o) for o in self.rdf_graph.objects(URIRef(uri), URIRef(predicate)) if isinstance(o, URIRef)
        )
        return [self._triple(uri, predicate, o) for o in objects]
