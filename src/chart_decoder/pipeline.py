"""LangGraph pipeline for chart decoding."""

from langgraph.graph import END, StateGraph

from chart_decoder.models import ChartSnapshot, DecoderConfig, DecoderState, ProcessingStage
from chart_decoder.nodes import assemble, calibrate, decode, legend, timeline


def _route_calibrate(state: DecoderState) -> str:
    for err in state.errors:
        if err.stage == ProcessingStage.CALIBRATE and not err.recoverable:
            return END
    if state.calibration is not None:
        return "decode"
    return END


def create_pipeline():
    graph = StateGraph(DecoderState)

    graph.add_node("calibrate", calibrate)
    graph.add_node("decode", decode)
    graph.add_node("timeline", timeline)
    graph.add_node("legend", legend)
    graph.add_node("assemble", assemble)

    # No series can be valued without a scale, so calibration runs first
    graph.set_entry_point("calibrate")

    graph.add_conditional_edges("calibrate", _route_calibrate, {"decode": "decode", END: END})
    # Label interpolation needs the decoded x extent
    graph.add_edge("decode", "timeline")
    graph.add_edge("timeline", "legend")
    graph.add_edge("legend", "assemble")
    graph.add_edge("assemble", END)

    return graph.compile()


def run_pipeline(snapshot: ChartSnapshot, config: DecoderConfig | None = None) -> DecoderState:
    """Run one decode pass.

    ``state.output`` is None when the pass failed outright; otherwise any
    recoverable entries in ``state.errors`` describe degraded fields.
    """
    initial = DecoderState(snapshot=snapshot, config=config or DecoderConfig())
    result = pipeline.invoke(initial)
    return result if isinstance(result, DecoderState) else DecoderState(**result)


pipeline = create_pipeline()
