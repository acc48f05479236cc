"""Main tabs: graph canvas, property expansion, data tables."""

from __future__ import annotations

import asyncio
import logging
from typing import Dict

import streamlit as st
import streamlit.components.v1 as components

from ldexplorer.config import CONFIG, GRAPH_CARD_HEIGHT
from ldexplorer.data_processing import FetchError
from ldexplorer.graph import Graph
from ldexplorer.models import Position
from ldexplorer.ui.sidebar import SidebarState
from ldexplorer.utils import _shorten_iri
from ldexplorer.visualizer import build_graph, snapshot_to_frames


def _node_options(graph: Graph) -> Dict[str, str]:
    return {node.id: node.label or _shorten_iri(node.id) for node in graph.nodes_view}


def _expansion_position(graph: Graph, uri: str, index: int) -> Position:
    origin = graph.nodes[uri].position
    offset = float(CONFIG["EXPANSION_OFFSET"])
    return Position(origin.x + offset, origin.y + offset * 0.4 * index)


def _render_graph_view(graph: Graph, state: SidebarState) -> None:
    st.header("Network Graph")
    snapshot = graph.synchronize()
    if not snapshot.nodes:
        st.info("Nothing is visible yet. Pick a start resource in the sidebar.")
        return
    with st.spinner("Generating Network Graph..."):
        net = build_graph(
            snapshot,
            focus=st.session_state.selected_node,
            show_labels=state.show_labels,
            physics=state.enable_physics,
            theme=state.theme,
        )
        html = net.generate_html()
        html = html.replace(
            '<div id="mynetwork" class="card-body"></div>',
            '<div class="graph-frame"><div id="mynetwork" class="card-body"></div></div>',
            1,
        )
        components.html(html, height=GRAPH_CARD_HEIGHT, scrolling=False)


def _render_properties(graph: Graph) -> None:
    st.header("Properties")
    options = _node_options(graph)
    if not options:
        st.info("No visible resources.")
        return
    ids = list(options)
    current = st.session_state.selected_node
    selected = st.selectbox(
        "Resource",
        ids,
        index=ids.index(current) if current in ids else 0,
        format_func=lambda uri: options[uri],
    )
    st.session_state.selected_node = selected
    st.caption(selected)

    try:
        with st.spinner("Fetching properties..."):
            properties = asyncio.run(graph.get_properties(selected))
    except FetchError as exc:
        logging.error("Fetching properties of %s failed: %s", selected, exc)
        st.error(str(exc))
        return

    if not properties:
        st.write("No properties found for this resource.")
    for index, (predicate, refs) in enumerate(properties.items()):
        cols = st.columns([4, 1, 1])
        cols[0].markdown(f"**{refs[0].label}**  \n`{_shorten_iri(predicate)}`")
        cols[1].write(f"{len(refs)} link(s)")
        if cols[2].button("Expand", key=f"expand::{selected}::{predicate}"):
            try:
                with st.spinner(f"Following {refs[0].label}..."):
                    asyncio.run(graph.load_data(selected, predicate, _expansion_position(graph, selected, index)))
            except FetchError as exc:
                logging.error("Expanding %s along %s failed: %s", selected, predicate, exc)
                st.error(str(exc))
                return
            st.rerun()

    if st.button("Hide resource", key=f"hide::{selected}"):
        graph.nodes[selected].visible = False
        graph.synchronize()
        st.session_state.selected_node = None
        st.rerun()


def _render_data_view(graph: Graph) -> None:
    st.header("Data View")
    nodes_df, edges_df = snapshot_to_frames(graph.synchronize())
    st.subheader("Visible Nodes")
    st.dataframe(nodes_df, use_container_width=True)
    st.subheader("Visible Edges")
    st.dataframe(edges_df, use_container_width=True)


def render_tabs(state: SidebarState) -> None:
    tabs = st.tabs(["Graph View", "Properties", "Data View", "About"])
    graph = st.session_state.graph

    with tabs[3]:
        st.header("About")
        st.markdown(
            "Explore linked data one neighbourhood at a time. Start from a resource, "
            "inspect the relationships it takes part in, and expand along a predicate "
            "to reveal the resources it points to."
        )

    if graph is None:
        for tab in tabs[:3]:
            with tab:
                st.info("Pick a data source and a start resource in the sidebar, then press Explore.")
        return

    with tabs[0]:
        _render_graph_view(graph, state)
    with tabs[1]:
        _render_properties(graph)
    with tabs[2]:
        _render_data_view(graph)
