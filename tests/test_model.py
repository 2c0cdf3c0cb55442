import pytest

from cryptolearn.trace.model import (
    BitGroups,
    CombineTriad,
    MatrixGrid,
    StepRecord,
    TextDiagram,
    TraceRecorder,
    hex_codes,
)
from cryptolearn.trace.textops import chunk, cycle_to, decode_result, encode_result, pad_block, xor_text


def _record(rec, title, data_in, data_out):
    return rec.record(title, "desc", data_in, data_out, "why", TextDiagram("diagram"))


def test_recorder_assigns_contiguous_ordinals():
    rec = TraceRecorder("demo", "forward")
    out = _record(rec, "one", "a", "b")
    _record(rec, "two", out, "c")
    result = rec.finish()
    assert [s.ordinal for s in result.steps] == [1, 2]
    assert result.result == "c"
    assert result.final_step.title == "two"
    assert len(result) == 2


def test_recorder_rejects_duplicate_titles():
    rec = TraceRecorder("demo", "forward")
    _record(rec, "same", "a", "b")
    with pytest.raises(ValueError):
        _record(rec, "same", "b", "c")


def test_recorder_rejects_empty_trace():
    with pytest.raises(ValueError):
        TraceRecorder("demo", "forward").finish()


def test_step_record_is_frozen():
    step = StepRecord(1, "t", "d", "AB", "\x00\xff", "e", TextDiagram("x"))
    assert step.input_hex == "41 42"
    assert step.output_hex == "00 FF"
    with pytest.raises(AttributeError):
        step.title = "other"


@pytest.mark.parametrize(
    "viz, kind",
    [
        (TextDiagram("x"), "text"),
        (MatrixGrid(((1, 2), (3, 4)), caption="c"), "matrix"),
        (BitGroups(("00000001",), ("00000010",)), "bits"),
        (CombineTriad("01", "02", "03"), "triad"),
    ],
)
def test_visualization_payloads_are_tagged(viz, kind):
    payload = viz.to_dict()
    assert payload["kind"] == kind


def test_trace_to_dict():
    rec = TraceRecorder("demo", "inverse")
    _record(rec, "only", "a", "b")
    doc = rec.finish().to_dict()
    assert doc["mode"] == "inverse"
    assert doc["steps"][0]["visualization"] == {"kind": "text", "text": "diagram"}


# ---------------------------------------------------------------------------
# Character helpers
# ---------------------------------------------------------------------------

def test_pad_block_is_stable():
    assert pad_block("abc", 8) == "abc     "
    assert pad_block(pad_block("abc", 8), 8) == "abc     "
    assert pad_block("abcdefghij", 8) == "abcdefgh"


def test_cycle_to():
    assert cycle_to("abc", 7) == "abcabca"
    assert cycle_to("abcdefgh", 5) == "abcde"


def test_xor_text_round_trips():
    data = "Hello, ✓"
    assert xor_text(xor_text(data, "key"), "key") == data


def test_chunk_keeps_short_tail():
    assert chunk("abcdefghij", 4) == ["abcd", "efgh", "ij"]
    assert chunk("", 8) == []


def test_encoding_round_trips_any_code_point():
    raw = "\x00\xffĀ ok"
    assert decode_result(encode_result(raw)) == raw
    assert encode_result(raw).isascii()


def test_hex_codes_wide_code_points():
    assert hex_codes("AĀ") == "41 100"


def test_encoding_accepts_lone_surrogates():
    raw = "ab\ud800cd"
    assert decode_result(encode_result(raw)) == raw
