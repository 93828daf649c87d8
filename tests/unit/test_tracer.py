"""Tests for render tracing."""

from minigraphviz import Graph
from minigraphviz.tracer import PipelineStage, RenderTrace


class TestRenderTrace:
    """Tests for RenderTrace."""

    def test_add_and_get_stage(self):
        trace = RenderTrace()
        trace.add_stage("input", {"nodes": 2}, output="a\nb")

        stage = trace.get_stage("input")
        assert stage.data == {"nodes": 2}
        assert trace.get_output_at_stage("input") == ["a", "b"]
        assert trace.get_stage("missing") is None
        assert trace.get_output_at_stage("missing") is None

    def test_stage_data_is_copied(self):
        data = {"nodes": 1}
        trace = RenderTrace()
        trace.add_stage("input", data)
        data["nodes"] = 5
        assert trace.stages[0].data["nodes"] == 1

    def test_stage_str_truncates_long_values(self):
        stage = PipelineStage("input", {"long": "x" * 150})
        assert "..." in str(stage)
        assert "=== Stage: input ===" in str(stage)

    def test_summary_and_dump(self):
        trace = RenderTrace(graph_name="g", rank_dir="LR")
        trace.add_stage("input", {"nodes": 0})
        trace.add_stage("rendered", {"lines": 2}, output="digraph g {\n}")

        summary = trace.summary()
        assert "Graph: g" in summary
        assert "Direction: LR" in summary
        assert "[-] input" in summary
        assert "[+] rendered" in summary

        dump = trace.dump()
        assert "DETAILED TRACE" in dump
        assert "|digraph g {|" in dump

    def test_dump_to_file(self, tmp_path):
        trace = RenderTrace()
        trace.add_stage("input", {"nodes": 0})
        target = tmp_path / "trace.txt"
        trace.dump_to_file(str(target))
        assert "RENDER TRACE SUMMARY" in target.read_text(encoding="utf-8")


class TestGraphTracing:
    """Tests for tracing through Graph.generate_file."""

    def test_no_trace_by_default(self, graph):
        graph.create_node("A")
        graph.generate_file()
        assert graph.get_trace() is None

    def test_debug_records_stages(self, graph):
        graph.create_node("A", groups=["G"])
        graph.create_node("B", groups=["G"])
        graph.add_connection("A", "B")

        text = graph.generate_file(debug=True)
        trace = graph.get_trace()

        assert [stage.name for stage in trace.stages] == [
            "input",
            "simplified",
            "rendered",
        ]
        assert trace.get_stage("input").data == {
            "groups": 2,
            "nodes": 2,
            "connections": 1,
        }
        assert trace.get_stage("simplified").data["groups"] == 1
        assert trace.get_output_at_stage("rendered") == text.split("\n")

    def test_simplification_skipped(self, graph):
        graph.create_node("A", groups=["G"])
        graph.generate_file(simplify_groups=False, debug=True)
        trace = graph.get_trace()
        assert trace.get_stage("simplified").data == {"skipped": True}
        assert trace.get_stage("rendered").data["clusters"] == 1

    def test_trace_cleared_by_non_debug_render(self, graph):
        graph.generate_file(debug=True)
        assert graph.get_trace() is not None
        graph.generate_file()
        assert graph.get_trace() is None
