"""
Unit tests for the interactive overlay state machine.
"""

import asyncio
import warnings
from pathlib import Path
from unittest.mock import MagicMock

import pytest

import dtsviz.graph.overlay as overlay_module
from dtsviz.graph.overlay import ClickRegion, InteractiveGraphView, OverlayState
from dtsviz.graph.resolution import ArtifactResolver

TREE_DOT = 'digraph AST {\n  n0 [label="module"];\n  n1 [label="expr"];\n  n0 -> n1;\n}\n'


class FakeFetcher:
    def __init__(self, available=None):
        self.available = available or {}

    async def fetch(self, location):
        return self.available.get(location)


class TestOverlayStateMachine:
    @pytest.fixture
    def view(self):
        return InteractiveGraphView()

    def test_starts_idle(self, view):
        snapshot = view.snapshot()
        assert snapshot.state is OverlayState.IDLE
        assert snapshot.elements == []

    def test_activate_then_resolve(self, view):
        token = view.activate("main.py")
        assert view.state is OverlayState.LOADING
        assert view.title == "main.py"

        assert view.resolve(token, TREE_DOT, source="/dot/main.py.tree.dot")

        snapshot = view.snapshot()
        assert snapshot.state is OverlayState.DISPLAYING
        assert snapshot.fit is True
        assert snapshot.layout["name"] == "dagre"
        assert snapshot.node_count == 2 and snapshot.edge_count == 1
        assert snapshot.raw_text == TREE_DOT

    def test_stale_response_is_dropped(self, view):
        first = view.activate("a.py")
        second = view.activate("b.py")

        assert view.resolve(first, TREE_DOT) is False
        assert view.state is OverlayState.LOADING
        assert view.title == "b.py"

        assert view.resolve(second, TREE_DOT) is True
        assert view.state is OverlayState.DISPLAYING

    def test_failure(self, view):
        token = view.activate("x.py")
        assert view.fail(token, "nothing there")

        snapshot = view.snapshot()
        assert snapshot.state is OverlayState.FAILED
        assert snapshot.error == "nothing there"

    def test_stale_failure_is_dropped(self, view):
        first = view.activate("a.py")
        second = view.activate("b.py")
        view.resolve(second, TREE_DOT)

        assert view.fail(first, "late") is False
        assert view.state is OverlayState.DISPLAYING

    def test_reactivate_from_displaying(self, view):
        view.resolve(view.activate("a.py"), TREE_DOT)
        view.activate("b.py")

        assert view.state is OverlayState.LOADING
        assert view.snapshot().elements == []

    def test_dismiss_clears_overlay(self, view):
        view.resolve(view.activate("a.py"), TREE_DOT)
        view.dismiss()

        snapshot = view.snapshot()
        assert snapshot.state is OverlayState.IDLE
        assert snapshot.title is None
        assert snapshot.elements == []

    def test_dismiss_while_loading_retires_token(self, view):
        token = view.activate("a.py")
        view.dismiss()

        assert view.resolve(token, TREE_DOT) is False
        assert view.state is OverlayState.IDLE

    def test_dismiss_when_idle_is_noop(self, view):
        generation = view.generation
        view.dismiss()
        assert view.generation == generation

    def test_content_click_keeps_overlay(self, view):
        view.resolve(view.activate("a.py"), TREE_DOT)
        view.click(ClickRegion.CONTENT)
        assert view.state is OverlayState.DISPLAYING

    @pytest.mark.parametrize("region", [ClickRegion.BACKDROP, ClickRegion.CLOSE])
    def test_backdrop_and_close_dismiss(self, view, region):
        view.fail(view.activate("a.py"), "missing")
        view.click(region)
        assert view.state is OverlayState.IDLE

    def test_renderer_fits_after_render(self):
        renderer = MagicMock()
        view = InteractiveGraphView(renderer=renderer)
        view.resolve(view.activate("a.py"), TREE_DOT)

        names = [name for name, _, _ in renderer.method_calls]
        assert names[-2:] == ["render", "fit"]


class TestOverlayLoad:
    def test_load_displays_first_candidate_found(self):
        view = InteractiveGraphView()
        resolver = ArtifactResolver(FakeFetcher({"/dot/main.py.tree.dot": TREE_DOT}))

        snapshot = asyncio.run(view.load("main.py", resolver))

        assert snapshot.state is OverlayState.DISPLAYING
        assert snapshot.source == "/dot/main.py.tree.dot"
        assert snapshot.generation == view.generation

    def test_load_reports_every_attempt(self):
        view = InteractiveGraphView()
        snapshot = asyncio.run(view.load("util.py", ArtifactResolver(FakeFetcher())))

        assert snapshot.state is OverlayState.FAILED
        assert 'No DOT file found for "util.py"' in snapshot.error
        assert "/util.py.dot" in snapshot.error


class SlowFetcher:
    """Serves locations after a per-location delay."""

    def __init__(self, available, delays):
        self.available = available
        self.delays = delays

    async def fetch(self, location):
        await asyncio.sleep(self.delays.get(location, 0))
        return self.available.get(location)


OTHER_DOT = 'digraph AST {\n  n0 [label="program"];\n}\n'


class TestInterleavedLoads:
    def _run(self, view, fetcher, *node_ids):
        async def go():
            resolver = ArtifactResolver(fetcher)
            return await asyncio.gather(*(view.load(node_id, resolver) for node_id in node_ids))

        return asyncio.run(go())

    def test_overtaken_load_answers_with_its_own_tree(self):
        view = InteractiveGraphView()
        fetcher = SlowFetcher(
            {"/dot/a.py.tree.dot": TREE_DOT, "/dot/b.py.tree.dot": OTHER_DOT},
            {"/dot/a.py.tree.dot": 0.05},
        )

        first, second = self._run(view, fetcher, "a.py", "b.py")

        assert first.title == "a.py"
        assert first.superseded is True
        assert first.state is OverlayState.DISPLAYING
        assert [e["data"]["name"] for e in first.elements if "source" not in e["data"]] == ["module", "expr"]

        assert second.title == "b.py"
        assert second.superseded is False
        assert second.node_count == 1

        # the shared view still shows the newer activation
        assert view.title == "b.py"
        assert view.snapshot().raw_text == OTHER_DOT

    def test_overtaken_failure_keeps_its_own_error(self):
        view = InteractiveGraphView()
        fetcher = SlowFetcher({"/dot/b.py.tree.dot": OTHER_DOT}, {"/dot/a.py.tree.dot": 0.05})

        first, second = self._run(view, fetcher, "a.py", "b.py")

        assert first.state is OverlayState.FAILED
        assert first.title == "a.py"
        assert 'No DOT file found for "a.py"' in first.error
        assert second.state is OverlayState.DISPLAYING
        assert view.state is OverlayState.DISPLAYING


def test_module_compiles_without_warnings():
    source = Path(overlay_module.__file__).read_text(encoding="utf-8")
    with warnings.catch_warnings():
        warnings.simplefilter("error")
        compile(source, overlay_module.__file__, "exec")
