"""Process worker message tests."""

import msgpack

from core.models import SearchOptions
from core.worker import decode_request, decode_response, encode_request, run_scan_task


def test_request_carries_raw_bytes_and_options():
    options = SearchOptions.from_comment_mode("only", whole_word=True)
    payload = encode_request("a.c", b"\xef\xbb\xbfint x;", ("x", "y"), options)
    file_id, content, query, decoded_options = decode_request(payload)
    assert file_id == "a.c"
    assert content == b"\xef\xbb\xbfint x;"
    assert query == ["x", "y"]
    assert decoded_options == options


def test_run_scan_task_matches_in_process_scan():
    source = "int needle; // needle\n".encode("utf-8")
    response = run_scan_task(encode_request("a.c", source, "needle", SearchOptions(include_comments=True)))
    matches = decode_response(response)
    assert [(m.file, m.column, m.is_comment) for m in matches] == [("a.c", 5, False), ("a.c", 16, True)]
    assert matches[0].snippet == "int needle; // needle"


def test_undecodable_content_yields_empty_response(monkeypatch):
    monkeypatch.setattr("core.normalizer.detect_encoding", lambda raw: "utf-8")
    response = run_scan_task(encode_request("bad.c", b"\xff\xfe\xfa", "x", SearchOptions()))
    assert msgpack.unpackb(response) == []
