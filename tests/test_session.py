"""Search session tests - pages, navigation and fingerprints."""

import asyncio

import pytest

from core.models import SearchOptions
from core.scheduler import ConcurrencyScheduler
from core.session import SearchSession, search_fingerprint


@pytest.fixture
def session():
    scheduler = ConcurrencyScheduler(max_concurrency=2)
    yield SearchSession(scheduler, page_size=5)
    scheduler.close()


def _start(session, project, query="needle", options=None, target=None):
    files = sorted(p.name for p in project.iterdir())
    return asyncio.run(session.start(files, query, options, target, base_path=str(project)))


class TestSessionPaging:

    def test_start_uses_page_size(self, session, paged_project):
        result = _start(session, paged_project)
        assert result.total_count == 5
        assert result.has_more is True
        assert result.stats.files_scanned >= 2
        assert session.is_active

    def test_load_more_extends_results(self, session, paged_project):
        first = _start(session, paged_project)
        second = asyncio.run(session.load_more(3))
        assert second.total_count == 8
        assert [m.to_dict() for m in second.matches[:5]] == [m.to_dict() for m in first.matches]

    def test_load_more_without_search(self, session):
        result = asyncio.run(session.load_more())
        assert result.matches == []
        assert result.has_more is False

    def test_new_search_discards_previous(self, session, paged_project):
        _start(session, paged_project)
        session.next_match()
        result = _start(session, paged_project, options=SearchOptions(comments_only=True), target=2)
        assert result.total_count == 2
        assert all(m.is_comment for m in result.matches)
        assert session.current_index == -1


class TestNavigation:

    def test_next_wraps_around(self, session, paged_project):
        _start(session, paged_project, target=3)
        seen = [session.next_match() for _ in range(4)]
        assert seen[0] is session.results[0]
        assert seen[3] is session.results[0]
        assert session.current_index == 0

    def test_prev_from_start_wraps_to_last(self, session, paged_project):
        _start(session, paged_project, target=3)
        assert session.prev_match() is session.results[-1]
        assert session.prev_match() is session.results[1]

    def test_navigation_without_results(self, session):
        assert session.next_match() is None
        assert session.prev_match() is None
        assert session.current_match is None

    def test_go_to(self, session, paged_project):
        _start(session, paged_project, target=3)
        assert session.go_to(2) is session.results[2]
        assert session.current_match is session.results[2]
        assert session.go_to(3) is None
        assert session.go_to(-1) is None
        assert session.current_index == 2

    def test_clear(self, session, paged_project):
        _start(session, paged_project)
        session.clear()
        assert session.results == []
        assert session.has_more is False
        assert not session.is_active
        assert session.summary()["active"] is False


class TestSummaryAndFingerprint:

    def test_summary(self, session, paged_project):
        _start(session, paged_project, options=SearchOptions(include_comments=True))
        summary = session.summary()
        assert summary["query"] == "needle"
        assert summary["comment_mode"] == "include"
        assert summary["result_count"] == 5
        assert summary["files_total"] == 8
        assert summary["fingerprint"] == session.fingerprint

    def test_fingerprint_depends_on_inputs(self):
        options = SearchOptions()
        base = search_fingerprint("needle", options, "/p")
        assert base == search_fingerprint("needle", SearchOptions(), "/p")
        assert base != search_fingerprint("needle", options.with_comment_mode("only"), "/p")
        assert base != search_fingerprint("Needle", options, "/p")
        assert base != search_fingerprint("needle", options, "/q")
        assert search_fingerprint(["a", "b"], options) == search_fingerprint(("a", "b"), options)
