"""
Unit tests for result assembly (filtering, ordering, truncation).
"""

from src.lexical_search.options import SortBy
from src.lexical_search.results import SearchResult, assemble_results, identity_results


def _items(results):
    return [result.item for result in results]


class TestAssembleResults:
    """Test threshold, ordering and truncation"""

    def test_score_descending(self):
        records = ["a", "b", "c"]
        results = assemble_results(records, [0.5, 2.0, 1.0], [[], [], []])
        assert _items(results) == ["b", "c", "a"]

    def test_ties_keep_input_order(self):
        records = ["a", "b", "c", "d"]
        results = assemble_results(records, [1.0, 2.0, 1.0, 2.0], [[], [], [], []])
        assert _items(results) == ["b", "d", "a", "c"]

    def test_threshold_inclusive(self):
        records = ["a", "b", "c"]
        results = assemble_results(records, [0.5, 1.0, 1.5], [[], [], []], threshold=1.0)
        assert _items(results) == ["c", "b"]

    def test_truncation(self):
        records = list("abcdef")
        scores = [1.0, 2.0, 3.0, 4.0, 5.0, 6.0]
        results = assemble_results(records, scores, [[]] * 6, threshold=2.5, max_results=2)
        assert _items(results) == ["f", "e"]

    def test_truncation_length(self):
        """len(results) == min(max_results, count(score >= threshold))"""
        records = list("abcdef")
        scores = [0.0, 0.2, 0.4, 0.6, 0.8, 1.0]
        for threshold in (0.0, 0.3, 0.9, 2.0):
            for max_results in (0, 1, 3, 10):
                results = assemble_results(
                    records, scores, [[]] * 6, threshold=threshold, max_results=max_results
                )
                expected = min(max_results, sum(1 for score in scores if score >= threshold))
                assert len(results) == expected

    def test_matches_attached(self):
        results = assemble_results(["a"], [1.0], [["search", "engine"]])
        assert results == [SearchResult(item="a", score=1.0, matches=["search", "engine"])]

    def test_sort_by_property_ascending(self):
        records = [{"createdAt": "100"}, {"createdAt": "300"}, {"createdAt": "200"}]
        results = assemble_results(
            records, [1.0, 1.0, 1.0], [[], [], []], sort_by=SortBy(property="createdAt")
        )
        assert [r["createdAt"] for r in _items(results)] == ["100", "200", "300"]

    def test_sort_by_property_descending(self):
        records = [{"votes": 3}, {"votes": 7}, {"votes": 1}]
        results = assemble_results(
            records, [3.0, 1.0, 2.0], [[], [], []], sort_by=SortBy(property="votes", order="DESC")
        )
        assert [r["votes"] for r in _items(results)] == [7, 3, 1]

    def test_sort_by_ignores_score_order(self):
        records = [{"n": 2}, {"n": 1}]
        results = assemble_results(records, [9.0, 0.1], [[], []], sort_by=SortBy(property="n"))
        assert _items(results) == [{"n": 1}, {"n": 2}]

    def test_sort_by_threshold_still_filters(self):
        records = [{"n": 2}, {"n": 1}, {"n": 3}]
        results = assemble_results(
            records, [1.0, 0.0, 1.0], [[], [], []], threshold=0.5, sort_by=SortBy(property="n")
        )
        assert _items(results) == [{"n": 2}, {"n": 3}]

    def test_sort_by_missing_property_last(self):
        records = [{"other": 1}, {"n": 2}, {"n": None}, {"n": 1}]
        for order in ("ASC", "DESC"):
            results = assemble_results(
                records, [1.0] * 4, [[]] * 4, sort_by=SortBy(property="n", order=order)
            )
            assert _items(results)[2:] == [{"other": 1}, {"n": None}]

    def test_sort_by_mixed_types(self):
        records = [{"v": "b"}, {"v": 2}, {"v": "a"}, {"v": 1.5}]
        results = assemble_results(records, [1.0] * 4, [[]] * 4, sort_by=SortBy(property="v"))
        assert [r["v"] for r in _items(results)] == [1.5, 2, "a", "b"]

    def test_sort_by_nested_path(self):
        records = [{"meta": {"rank": 2}}, {"meta": {"rank": 1}}]
        results = assemble_results(records, [1.0, 1.0], [[], []], sort_by=SortBy(property="meta.rank"))
        assert _items(results) == [{"meta": {"rank": 1}}, {"meta": {"rank": 2}}]

    def test_sort_order_case_insensitive(self):
        assert SortBy(property="n", order="desc").order == "DESC"


class TestIdentityResults:
    def test_all_records_zero_score(self):
        results = identity_results(["a", "b", "c"])
        assert [(r.item, r.score, r.matches) for r in results] == [
            ("a", 0.0, []),
            ("b", 0.0, []),
            ("c", 0.0, []),
        ]

    def test_empty(self):
        assert identity_results([]) == []
