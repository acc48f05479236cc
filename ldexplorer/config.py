"""Application settings and display constants."""

from __future__ import annotations

import os
from typing import Any, Dict

from rdflib.namespace import FOAF, OWL, RDF, RDFS, SKOS

GRAPH_CANVAS_HEIGHT = 720
GRAPH_CARD_HEIGHT = GRAPH_CANVAS_HEIGHT + 40
VIS_FONT_FACE = "IBM Plex Sans"
APP_FONTS = {"display": "Fraunces", "body": "IBM Plex Sans", "mono": "IBM Plex Mono"}

NAMESPACE_PREFIXES: Dict[str, str] = {
    str(RDF): "rdf",
    str(RDFS): "rdfs",
    str(OWL): "owl",
    str(SKOS): "skos",
    str(FOAF): "foaf",
    "http://schema.org/": "schema",
    "https://schema.org/": "schema",
    "http://purl.org/dc/terms/": "dcterms",
    "http://www.wikidata.org/entity/": "wd",
    "http://www.wikidata.org/prop/direct/": "wdt",
    "http://dbpedia.org/resource/": "dbr",
    "http://dbpedia.org/ontology/": "dbo",
}

LABEL_PREDICATES = [str(RDFS.label), str(SKOS.prefLabel), str(FOAF.name), "http://schema.org/name"]

CONFIG: Dict[str, Any] = {
    "SPARQL_ENDPOINT": "https://dbpedia.org/sparql",
    "SPARQL_TIMEOUT": 30,
    "LABEL_LANGUAGE": "en",
    "RESULT_LIMIT": 200,
    "START_URI": "http://dbpedia.org/resource/Tim_Berners-Lee",
    "DEFAULT_THEME": "light",
    "NODE_STATE_COLORS": {
        "focus": "#C85A3A",
        "fetched": "#1F3F5A",
        "unfetched": "#84A59D",
    },
    "DEFAULT_EDGE_COLOR": "#7A8594",
    "EXPANSION_OFFSET": 160,
}


def get_setting(key: str, default: Any = None) -> Any:
    """
    Resolve a setting from Streamlit secrets, then the environment, then CONFIG.

    Environment variables use an `LDX_` prefix, e.g. `LDX_SPARQL_ENDPOINT`.
    """
    try:
        import streamlit as st

        value = st.secrets.get(key, None)
    except Exception:
        value = None
    if value is None:
        value = os.getenv(f"LDX_{key}")
    if value is None:
        value = CONFIG.get(key, default)
    return value
