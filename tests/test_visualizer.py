from ldexplorer.config import CONFIG
from ldexplorer.models import Edge, Node, Position, SinkSnapshot
from ldexplorer.visualizer import build_graph, snapshot_to_frames


def _snapshot() -> SinkSnapshot:
    alice = Node(id="http://example.org/alice", label="Alice", visible=True, fetched=True)
    bob = Node(id="http://example.org/bob", label="", visible=True, position=Position(10, 20))
    edges = [
        Edge("http://example.org/alice", "http://example.org/knows", "http://example.org/bob", "knows"),
        Edge("http://example.org/alice", "http://example.org/knows", "http://example.org/hidden", "knows"),
    ]
    return SinkSnapshot(nodes=[alice, bob], edges=edges)


def test_build_graph_adds_visible_nodes_and_complete_edges():
    net = build_graph(_snapshot(), focus="http://example.org/alice")

    assert net.get_nodes() == ["http://example.org/alice", "http://example.org/bob"]
    assert len(net.edges) == 1
    assert net.edges[0]["from"] == "http://example.org/alice"
    assert net.edges[0]["to"] == "http://example.org/bob"
    assert net.edges[0]["label"] == "knows"


def test_build_graph_uses_state_colours_and_positions():
    net = build_graph(_snapshot(), focus="http://example.org/alice")
    alice = net.get_node("http://example.org/alice")
    bob = net.get_node("http://example.org/bob")

    assert alice["color"]["background"] == CONFIG["NODE_STATE_COLORS"]["focus"]
    assert bob["color"]["background"] == CONFIG["NODE_STATE_COLORS"]["unfetched"]
    assert (bob["x"], bob["y"]) == (10, 20)
    assert bob["label"] == "http://example.org/bob"


def test_build_graph_can_hide_labels():
    net = build_graph(_snapshot(), show_labels=False, theme="dark")

    assert all(node["font"]["size"] == 0 for node in net.nodes)
    assert all(node["font"]["color"] == "#E5E7EB" for node in net.nodes)
    assert all(edge["font"]["size"] == 0 for edge in net.edges)
    assert net.bgcolor == "#111827"


def test_snapshot_to_frames():
    nodes_df, edges_df = snapshot_to_frames(_snapshot())

    assert list(nodes_df.columns) == ["URI", "Label", "Fetched", "x", "y"]
    assert nodes_df["Label"].tolist() == ["Alice", ""]
    assert len(edges_df) == 2
    assert edges_df.iloc[0]["Predicate"] == "http://example.org/knows"


def test_snapshot_to_frames_empty():
    nodes_df, edges_df = snapshot_to_frames(SinkSnapshot(nodes=[], edges=[]))

    assert nodes_df.empty
    assert list(edges_df.columns) == ["Source", "Predicate", "Label", "Target"]
