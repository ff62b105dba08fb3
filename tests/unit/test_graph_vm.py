"""
Tests for GraphVM selection, click handling, zoom bounds and background builds.
"""

import os

import pytest

from depmap_core.domain import DependencyGraph, GraphEdge, GraphNode, SelectionKind

from conftest import make_files


def sample_graph():
    """a.ts imports b.ts; c.ts stands alone in lib/."""
    nodes = [
        GraphNode(node_id="0", label="a.ts", directory="root", full_path="/w/a.ts"),
        GraphNode(node_id="1", label="b.ts", directory="root", full_path="/w/b.ts"),
        GraphNode(node_id="2", label="c.ts", directory="lib", full_path="/w/lib/c.ts"),
    ]
    return DependencyGraph(nodes=nodes, edges=[GraphEdge("0", "1")])


@pytest.fixture
def vm(qapp):
    from depmap_app.viewmodels import GraphVM

    model = GraphVM()
    model.load_graph(sample_graph(), intro=False)
    yield model
    model.layout.stop()


def record(signal):
    calls = []
    signal.connect(lambda *args: calls.append(args))
    return calls


class TestHelpers:

    def test_neighbors_ignore_direction(self):
        from depmap_app.viewmodels import neighbors_of

        edges = [GraphEdge("0", "1"), GraphEdge("2", "1")]
        assert neighbors_of("1", edges) == {"0", "2"}
        assert neighbors_of("0", edges) == {"1"}
        assert neighbors_of("3", edges) == set()

    def test_fit_min_scale(self):
        from depmap_app.viewmodels import fit_min_scale

        assert fit_min_scale({}, 800, 600) is None
        assert fit_min_scale({"0": (0, 0)}, 0, 600) is None
        # Small graph: capped at 0.5
        assert fit_min_scale({"0": (0, 0), "1": (800, 0)}, 1000, 1000) == 0.5
        # Wide graph: 1000 / 5000 * 0.8
        assert fit_min_scale({"0": (0, 0), "1": (4800, 0)}, 1000, 1000) == pytest.approx(0.16)


class TestSelection:

    def test_select_node(self, vm):
        payloads = record(vm.selection_changed)
        cameras = record(vm.camera_requested)

        vm.on_node_click("1", 2)

        assert vm.selection.kind == SelectionKind.NODE
        assert vm.selection.neighbors == frozenset({"0"})
        assert payloads[-1][0] == {
            "label": "b.ts",
            "directory": "root",
            "description": None,
            "type": "node",
            "path": "/w/b.ts",
        }
        node = vm.graph.node_by_id("1")
        assert cameras[-1] == (pytest.approx(node.x), pytest.approx(node.y), 1.5)

    def test_single_click_does_not_select(self, vm):
        vm.on_node_click("1", 1)
        assert vm.selection.is_empty

    def test_select_cluster(self, vm):
        payloads = record(vm.selection_changed)
        vm.on_plate_click("root", 2)

        assert vm.selection.kind == SelectionKind.CLUSTER
        assert vm.selection.cluster == "root"
        payload = payloads[-1][0]
        assert payload["label"] == "Cluster: root"
        assert payload["description"] == "Contains 2 nodes."
        assert payload["type"] == "cluster"
        assert payload["path"] is None

    def test_background_click_clears(self, vm):
        vm.select_node("0")
        payloads = record(vm.selection_changed)
        cameras = record(vm.camera_requested)

        vm.on_background_click(1)
        assert vm.selection.is_empty
        assert payloads == [(None,)]
        assert cameras == []

    def test_background_double_click_resets_camera(self, vm):
        cameras = record(vm.camera_requested)
        vm.on_background_click(2)
        assert cameras == [(0.0, 0.0, 1.0)]

    def test_unknown_node_ignored(self, vm):
        vm.select_node("99")
        assert vm.selection.is_empty


class TestActions:

    def test_open_selected_file(self, vm):
        opened = record(vm.open_file_requested)
        assert not vm.request_open_file()

        vm.select_node("2")
        assert vm.request_open_file()
        assert opened == [("/w/lib/c.ts",)]

    def test_landforms_follow_layout(self, vm):
        vm.step()
        assert set(vm.positions) == {"0", "1", "2"}
        assert sorted(p.region_id for p in vm.landforms.plates) == ["lib", "root"]

    def test_min_scale_emitted(self, vm):
        scales = record(vm.min_scale_changed)
        vm.set_viewport_size(1000, 800)
        assert scales and scales[-1][0] <= 0.5

    def test_min_scale_not_repeated(self, vm):
        scales = record(vm.min_scale_changed)
        vm.set_viewport_size(1000, 800)
        vm.set_viewport_size(1000, 800)
        assert len(scales) == 1

    def test_drag_pins_node(self, vm):
        vm.begin_drag("0")
        vm.drag_node("0", 300.0, 300.0)
        vm.step()
        assert vm.positions["0"] == (300.0, 300.0)
        vm.end_drag("0")
        assert not vm.layout.node("0").pinned

    def test_export_dict(self, vm):
        data = vm.export_dict()
        assert [n["id"] for n in data["nodes"]] == ["0", "1", "2"]
        assert data["edges"] == [{"id": "e0-1", "source": "0", "target": "1"}]


class TestInfoPanel:

    def test_follows_selection(self, vm):
        from depmap_app.views.info_panel import InfoPanel

        panel = InfoPanel(vm)
        vm.select_node("0")
        assert panel.payload["label"] == "a.ts"
        assert not panel.open_btn.isHidden()

        vm.select_cluster("lib")
        assert panel.payload["type"] == "cluster"
        assert panel.open_btn.isHidden()

        vm.clear_selection()
        assert panel.payload is None
        assert panel.isHidden()

    def test_go_to_file(self, vm):
        from depmap_app.views.info_panel import InfoPanel

        panel = InfoPanel(vm)
        opened = record(vm.open_file_requested)
        vm.select_node("1")
        panel.open_btn.click()
        assert opened == [("/w/b.ts",)]


def wait_for(qapp, calls, timeout=10.0):
    """Pump the event loop until calls is non-empty."""
    import time

    deadline = time.monotonic() + timeout
    while not calls and time.monotonic() < deadline:
        qapp.processEvents()
        time.sleep(0.01)
    return calls


@pytest.fixture
def built(qapp, workspace):
    """A GraphVM that finished a real background build of workspace."""
    from depmap_app.viewmodels import GraphVM

    make_files(workspace, {"a.ts": "import './b'", "b.ts": ""})
    model = GraphVM()
    progress = record(model.build_progress)
    finished = record(model.build_finished)
    assert model.start_build(str(workspace))
    success, message = wait_for(qapp, finished)[0]
    assert success and message.startswith("Mapped 2 files")
    qapp.processEvents()
    yield model, progress
    model.layout.stop()


class TestBackgroundBuild:

    def test_progress_forwarded(self, built):
        model, progress = built
        assert progress
        assert progress[-1][:2] == (2, 2)
        assert {os.path.basename(call[2]) for call in progress} <= {"a.ts", "b.ts"}
        assert not model.build_in_progress

    def test_unrelated_file_does_not_mark_stale(self, built, workspace):
        model, _ = built
        stale = record(model.stale_changed)
        make_files(workspace, {"notes.txt": "todo"})
        model._on_directory_changed(str(workspace))
        assert stale == []

        make_files(workspace, {"c.ts": ""})
        model._on_directory_changed(str(workspace))
        assert stale == [(True,)]

        # Still stale: repeats are not re-sent
        make_files(workspace, {"d.ts": ""})
        model._on_directory_changed(str(workspace))
        assert stale == [(True,)]

    def test_progress_drives_status_bar(self, qapp):
        from depmap_app.views.main_window import MainWindow

        window = MainWindow()
        window._graph_vm.build_progress.emit(3, 10, "/w/lib/c.ts")
        assert window.progress.maximum() == 10
        assert window.progress.value() == 3
        assert "c.ts" in window.statusBar().currentMessage()
        window.close()
