from __future__ import annotations

from gateway_providers.base.streaming import EventLineSplitter, decode_json_payload


def test_many_records_in_one_chunk():
    splitter = EventLineSplitter()
    batch = splitter.feed('data: {"a":1}\n\ndata: {"b":2}\ndata: [DONE]\n')
    assert batch.records == ('{"a":1}', '{"b":2}', "[DONE]")  # nosec B101
    assert batch.error is None  # nosec B101


def test_partial_record_is_buffered_until_terminated():
    splitter = EventLineSplitter()
    assert splitter.feed('data: {"con').records == ()  # nosec B101
    assert splitter.pending == 'data: {"con'  # nosec B101
    assert splitter.feed('tent":"x"}').records == ()  # nosec B101
    assert splitter.feed('\ndata: {"y"').records == ('{"content":"x"}',)  # nosec B101
    assert splitter.flush().records == ('{"y"',)  # nosec B101
    assert splitter.pending == ""  # nosec B101


def test_crlf_and_non_data_lines():
    splitter = EventLineSplitter()
    batch = splitter.feed("event: message_start\r\nid: 7\r\n: ping\r\ndata:{}\r\n\r\ndata:   \r\n")
    assert batch.records == ("{}",)  # nosec B101


def test_empty_chunk_and_empty_flush():
    splitter = EventLineSplitter()
    assert splitter.feed("").records == ()  # nosec B101
    assert splitter.flush().records == ()  # nosec B101


def test_error_envelope_takes_priority_over_records():
    splitter = EventLineSplitter()
    batch = splitter.feed('data: {"x":1}\ndata: {"error": {"message": "boom"}}\n')
    assert batch.records == ()  # nosec B101
    assert batch.error == {"error": {"message": "boom"}}  # nosec B101


def test_error_envelope_split_across_reads():
    splitter = EventLineSplitter()
    assert splitter.feed('data: {"err').error is None  # nosec B101
    batch = splitter.feed('or": {"message": "late"}}\n')
    assert batch.error == {"error": {"message": "late"}}  # nosec B101


def test_error_key_inside_content_is_not_an_envelope():
    splitter = EventLineSplitter()
    line = 'data: {"choices":[{"delta":{"content":"\\"error\\": nope"}}]}\n'
    batch = splitter.feed(line)
    assert batch.error is None  # nosec B101
    assert len(batch.records) == 1  # nosec B101


def test_error_value_must_be_an_object():
    splitter = EventLineSplitter()
    batch = splitter.feed('data: {"error": null, "choices": []}\n')
    assert batch.error is None  # nosec B101
    assert batch.records == ('{"error": null, "choices": []}',)  # nosec B101


def test_decode_json_payload():
    assert decode_json_payload('{"a": 1}') == {"a": 1}  # nosec B101
    assert decode_json_payload("[1, 2]") is None  # nosec B101
    assert decode_json_payload("[DONE]") is None  # nosec B101
    assert decode_json_payload("{") is None  # nosec B101
