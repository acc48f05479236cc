"""PyVis generation helpers for the visible subgraph."""

from __future__ import annotations

import logging
from typing import Dict, Optional, Tuple

import pandas as pd
from pyvis.network import Network

from ldexplorer.config import CONFIG, GRAPH_CANVAS_HEIGHT, VIS_FONT_FACE
from ldexplorer.models import Edge, Node, SinkSnapshot
from ldexplorer.utils import (
    _make_edge_color,
    _make_node_color,
    _pick_label_color,
    _relative_luminance,
    _shorten_iri,
)

_THEME_BACKGROUNDS = {"light": ("transparent", None), "dark": ("#111827", "#E5E7EB")}


def _node_state(node: Node, focus: Optional[str]) -> str:
    if focus and node.id == focus:
        return "focus"
    return "fetched" if node.fetched else "unfetched"


def add_node(
    net: Network,
    node: Node,
    focus: Optional[str] = None,
    show_labels: bool = True,
    state_colors: Optional[Dict[str, str]] = None,
    font_color: Optional[str] = None,
) -> None:
    palette = state_colors or CONFIG["NODE_STATE_COLORS"]
    state = _node_state(node, focus)
    color = palette.get(state, CONFIG["NODE_STATE_COLORS"]["unfetched"])
    label = node.label or _shorten_iri(node.id, max_len=40)
    label_color = font_color or _pick_label_color(color)
    label_stroke = (
        "rgba(15, 23, 42, 0.65)"
        if _relative_luminance(label_color) > 0.5
        else "rgba(248, 244, 237, 0.92)"
    )

    net.add_node(
        node.id,
        label=label,
        title=f"{label}\n{_shorten_iri(node.id)}",
        color=_make_node_color(color),
        shape="dot",
        size=22 if state == "focus" else 16,
        x=node.position.x,
        y=node.position.y,
        borderWidth=3 if state == "focus" else 2,
        font={
            "size": 17 if show_labels else 0,
            "face": VIS_FONT_FACE,
            "color": label_color,
            "strokeWidth": 3,
            "strokeColor": label_stroke,
        },
    )
    logging.debug("Added node: %s (%s) as %s", label, node.id, state)


def add_edge(net: Network, edge: Edge, show_labels: bool = True) -> None:
    label_text = edge.label or _shorten_iri(edge.predicate, max_len=40)
    net.add_edge(
        edge.source,
        edge.target,
        label=label_text,
        title=f"{label_text} ({_shorten_iri(edge.predicate)})",
        predicate=edge.predicate,
        color=_make_edge_color(CONFIG["DEFAULT_EDGE_COLOR"]),
        width=2.2,
        arrows={"to": {"enabled": True, "scaleFactor": 0.6}},
        font={"size": 9 if show_labels else 0, "align": "middle", "face": VIS_FONT_FACE, "strokeWidth": 3},
        smooth={"enabled": True, "type": "dynamic"},
    )
    logging.debug("Added edge: %s --%s--> %s", edge.source, label_text, edge.target)


def build_graph(
    snapshot: SinkSnapshot,
    focus: Optional[str] = None,
    show_labels: bool = True,
    physics: bool = True,
    theme: str = "light",
    state_colors: Optional[Dict[str, str]] = None,
) -> Network:
    bgcolor, font_color = _THEME_BACKGROUNDS.get(theme, _THEME_BACKGROUNDS["light"])
    net = Network(
        height=f"{GRAPH_CANVAS_HEIGHT}px",
        width="100%",
        directed=True,
        notebook=False,
        bgcolor=bgcolor,
    )

    added_nodes = set()
    for node in snapshot.nodes:
        add_node(net, node, focus, show_labels, state_colors, font_color)
        added_nodes.add(node.id)

    for edge in snapshot.edges:
        if edge.source not in added_nodes or edge.target not in added_nodes:
            logging.debug("Skipping edge %s --%s--> %s without both endpoints", edge.source, edge.predicate, edge.target)
            continue
        add_edge(net, edge, show_labels)

    net.toggle_physics(physics)
    return net


def snapshot_to_frames(snapshot: SinkSnapshot) -> Tuple[pd.DataFrame, pd.DataFrame]:
    nodes_df = pd.DataFrame(
        [
            {
                "URI": node.id,
                "Label": node.label,
                "Fetched": node.fetched,
                "x": node.position.x,
                "y": node.position.y,
            }
            for node in snapshot.nodes
        ],
        columns=["URI", "Label", "Fetched", "x", "y"],
    )
    edges_df = pd.DataFrame(
        [
            {
                "Source": edge.source,
                "Predicate": edge.predicate,
                "Label": edge.label,
                "Target": edge.target,
            }
            for edge in snapshot.edges
        ],
        columns=["Source", "Predicate", "Label", "Target"],
    )
    return nodes_df, edges_df
