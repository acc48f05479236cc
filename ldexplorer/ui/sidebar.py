"""Sidebar: data source selection, start resource and display settings."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Optional

import streamlit as st

from ldexplorer.config import get_setting
from ldexplorer.data_processing import DataSource, FetchError, RDFGraphDataSource, SparqlDataSource
from ldexplorer.graph import Graph

_SOURCE_KINDS = ["SPARQL endpoint", "Uploaded RDF file", "Dereference URI"]
_UPLOAD_FORMATS = {"ttl": "turtle", "nt": "nt", "rdf": "xml", "owl": "xml", "jsonld": "json-ld", "json": "json-ld"}


@dataclass
class SidebarState:
    show_labels: bool
    enable_physics: bool
    theme: str


def init_session_state() -> None:
    if "graph" not in st.session_state:
        st.session_state.graph = None
    if "selected_node" not in st.session_state:
        st.session_state.selected_node = None
    if "source_kind" not in st.session_state:
        st.session_state.source_kind = _SOURCE_KINDS[0]
    if "sparql_endpoint" not in st.session_state:
        st.session_state.sparql_endpoint = get_setting("SPARQL_ENDPOINT")
    if "start_uri" not in st.session_state:
        st.session_state.start_uri = get_setting("START_URI")
    if "theme" not in st.session_state:
        st.session_state.theme = get_setting("DEFAULT_THEME", "light")
    if "show_labels" not in st.session_state:
        st.session_state.show_labels = True
    if "enable_physics" not in st.session_state:
        st.session_state.enable_physics = True


def get_theme() -> str:
    return st.session_state.get("theme", get_setting("DEFAULT_THEME", "light"))


def change_theme(dark: bool) -> None:
    st.session_state.theme = "dark" if dark else "light"


def _build_source(kind: str, uploaded_file=None) -> Optional[DataSource]:
    if kind == "SPARQL endpoint":
        return SparqlDataSource(endpoint=st.session_state.sparql_endpoint)
    if kind == "Uploaded RDF file":
        if uploaded_file is None:
            st.sidebar.warning("Upload an RDF file first.")
            return None
        ext = uploaded_file.name.rsplit(".", 1)[-1].lower()
        content = uploaded_file.read().decode("utf-8")
        return RDFGraphDataSource.from_data(content, _UPLOAD_FORMATS.get(ext, "turtle"))
    return RDFGraphDataSource.from_uri(st.session_state.start_uri)


def _start_exploration(kind: str, uploaded_file=None) -> None:
    uri = st.session_state.start_uri.strip()
    if not uri:
        st.sidebar.warning("Enter a resource URI to explore.")
        return
    try:
        source = _build_source(kind, uploaded_file)
        if source is None:
            return
        graph = Graph(source)
        asyncio.run(graph.get_properties(uri))
    except FetchError as exc:
        logging.error("Exploration of %s failed: %s", uri, exc)
        st.sidebar.error(str(exc))
        return
    except Exception as exc:
        logging.error("Could not load data for %s: %s", uri, exc)
        st.sidebar.error(f"Could not load RDF data: {exc}")
        return

    graph.synchronize()
    st.session_state.graph = graph
    st.session_state.selected_node = uri
    logging.info("Started exploration at %s with %s known node(s).", uri, len(graph.nodes))


def render_sidebar() -> SidebarState:
    with st.sidebar.expander("Data Source", expanded=True):
        kind = st.radio("Resolve resources from", _SOURCE_KINDS, key="source_kind")
        uploaded_file = None
        if kind == "SPARQL endpoint":
            st.text_input("SPARQL endpoint", key="sparql_endpoint")
        elif kind == "Uploaded RDF file":
            uploaded_file = st.file_uploader(
                "Upload RDF",
                type=list(_UPLOAD_FORMATS),
                help="Turtle, N-Triples, RDF/XML or JSON-LD",
            )

    with st.sidebar.expander("Start Resource", expanded=True):
        st.text_input("Resource URI", key="start_uri")
        if st.button("Explore", type="primary"):
            with st.spinner("Fetching properties..."):
                _start_exploration(kind, uploaded_file)

    with st.sidebar.expander("Display"):
        st.checkbox("Show labels", key="show_labels")
        st.checkbox("Enable physics", key="enable_physics")
        dark = st.toggle("Dark mode", value=get_theme() == "dark")
        if dark != (get_theme() == "dark"):
            change_theme(dark)
            st.rerun()

    graph = st.session_state.graph
    if graph is not None:
        st.sidebar.caption(
            f"{len(graph.nodes_view)} visible of {len(graph.nodes)} known node(s), "
            f"{len(graph.edges_view)} visible edge(s)"
        )

    return SidebarState(
        show_labels=st.session_state.show_labels,
        enable_physics=st.session_state.enable_physics,
        theme=get_theme(),
    )
