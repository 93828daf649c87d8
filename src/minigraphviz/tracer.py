"""
Debug tracing infrastructure for minigraphviz.

When debug mode is enabled, Graph.generate_file() records a trace of each
stage of generation: the live group tree it started from, the tree after
simplification, and the rendered document.

Usage:
    >>> graph = Graph()
    >>> graph.add_connection("A", "B")
    >>> text = graph.generate_file(debug=True)
    >>> trace = graph.get_trace()
    >>> print(trace.summary())
    >>> trace.dump_to_file("debug_trace.txt")
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass
class PipelineStage:
    """
    Snapshot of state at a generation stage.

    Stages, in order:
    1. input - Counts of the live group tree
    2. simplified - Counts after the simplification pass (or a skip marker)
    3. rendered - Line and cluster counts of the final document

    Attributes:
        name: Name of this stage
        data: Dictionary of relevant data at this stage
        snapshot: Optional output lines at this point
    """

    name: str
    data: Dict[str, Any]
    snapshot: Optional[List[str]] = None

    def __str__(self) -> str:
        lines = [f"=== Stage: {self.name} ==="]
        for key, value in self.data.items():
            str_val = str(value)
            if len(str_val) > 100:
                str_val = str_val[:100] + "..."
            lines.append(f"  {key}: {str_val}")
        if self.snapshot:
            lines.append("  Output preview (first 15 lines):")
            for row in self.snapshot[:15]:
                lines.append(f"    |{row}|")
        return "\n".join(lines)


@dataclass
class RenderTrace:
    """
    Complete trace of a render operation.

    Attributes:
        stages: List of generation stages with their data
        graph_name: Name of the rendered graph, if any
        rank_dir: Rank direction code of the rendered graph
    """

    stages: List[PipelineStage] = field(default_factory=list)
    graph_name: Optional[str] = None
    rank_dir: str = "TB"

    def add_stage(
        self,
        name: str,
        data: Dict[str, Any],
        output: Optional[str] = None,
    ) -> None:
        """
        Add a stage snapshot.

        Args:
            name: Name of the stage (e.g., "simplified")
            data: Dictionary of relevant data at this stage
            output: Optional rendered text to snapshot
        """
        snapshot = output.split("\n") if output else None
        self.stages.append(PipelineStage(name, data.copy(), snapshot))

    def get_stage(self, name: str) -> Optional[PipelineStage]:
        """Get a specific stage by name."""
        for stage in self.stages:
            if stage.name == name:
                return stage
        return None

    def get_output_at_stage(self, name: str) -> Optional[List[str]]:
        stage = self.get_stage(name)
        if stage and stage.snapshot:
            return stage.snapshot
        return None

    def summary(self) -> str:
        """Generate a human-readable summary of the trace."""
        lines = [
            "=" * 60,
            "RENDER TRACE SUMMARY",
            "=" * 60,
            "",
            f"Graph: {self.graph_name if self.graph_name is not None else '(unnamed)'}",
            f"Direction: {self.rank_dir}",
            "",
            f"Stages: {len(self.stages)}",
        ]

        for stage in self.stages:
            has_output = "+" if stage.snapshot else "-"
            lines.append(f"  [{has_output}] {stage.name}")

        return "\n".join(lines)

    def dump(self) -> str:
        """Generate a complete dump of the trace, including every stage."""
        lines = [self.summary(), "", "=" * 60, "DETAILED TRACE", "=" * 60, ""]

        for stage in self.stages:
            lines.append(str(stage))
            lines.append("")

        return "\n".join(lines)

    def dump_to_file(self, filename: str) -> None:
        """Write the complete trace dump to a file."""
        with open(filename, "w", encoding="utf-8") as f:
            f.write(self.dump())
