from activator.core.utils import Profiler, enable_profiler, span
from activator.core.utils.profiling import get_active_profiler


def test_span_is_noop_without_profiler() -> None:
    assert get_active_profiler() is None
    with span("ignored"):
        pass


def test_nested_spans_record_depth_and_meta() -> None:
    profiler = Profiler()
    with enable_profiler(profiler):
        with span("outer"):
            with span("inner", tenant="t"):
                pass

    assert profiler.names() == ["inner", "outer"]
    inner, outer = profiler.spans
    assert (inner.depth, outer.depth) == (1, 0)
    assert inner.meta == {"tenant": "t"}
    assert set(profiler.summary_ms()) == {"inner", "outer"}
    assert get_active_profiler() is None
