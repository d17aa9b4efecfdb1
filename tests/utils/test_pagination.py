import json
from urllib.parse import parse_qs, urlsplit

import pytest

from songs.errors import PaginationLinkError
from songs.utils.pagination import (
    MAX_OFFSET,
    UNKNOWN_TOTAL,
    PageRequest,
    PageResult,
    PaginationConfig,
    calculate_total_pages,
    calculate_window,
    join_verses,
    page_request_from_query,
    paginate,
    resolve_page_request,
    split_verses,
    window_sequence,
)


def _query(url: str) -> dict[str, list[str]]:
    return parse_qs(urlsplit(url).query)


class TestResolvePageRequest:
    def test_defaults_when_missing(self):
        assert resolve_page_request(None, None) == PageRequest(page=1, per_page=10)

    def test_defaults_when_not_numeric(self):
        assert resolve_page_request("abc", "1.5") == PageRequest(page=1, per_page=10)

    def test_non_positive_values_clamp_to_one(self):
        assert resolve_page_request("0", "0") == PageRequest(page=1, per_page=1)
        assert resolve_page_request("-4", "-20") == PageRequest(page=1, per_page=1)

    def test_per_page_capped_at_maximum(self):
        assert resolve_page_request("2", "10000") == PageRequest(page=2, per_page=100)

    def test_accepts_ints_and_whitespace(self):
        assert resolve_page_request(3, " 25 ") == PageRequest(page=3, per_page=25)

    def test_uses_explicit_config(self):
        config = PaginationConfig(default_per_page=5, max_per_page=20)
        assert resolve_page_request(None, None, config).per_page == 5
        assert resolve_page_request(None, "50", config).per_page == 20

    def test_huge_page_keeps_offset_in_range(self):
        request = resolve_page_request("99999999999999999999", "10")
        assert request.per_page == 10
        assert request.offset <= MAX_OFFSET
        assert request.offset + request.per_page > MAX_OFFSET

    def test_huge_page_with_smallest_size(self):
        request = resolve_page_request(str(10**30), "1")
        assert request.offset == MAX_OFFSET

    def test_from_query_params(self):
        request = page_request_from_query({"page": "3", "perPage": "25", "group": "Muse"})
        assert request == PageRequest(page=3, per_page=25)
        assert request.offset == 50
        assert request.limit == 25


class TestWindowArithmetic:
    @pytest.mark.parametrize(
        "page, per_page, expected",
        [(1, 10, (0, 10)), (2, 10, (10, 10)), (3, 20, (40, 20)), (7, 1, (6, 1))],
    )
    def test_calculate_window(self, page, per_page, expected):
        assert calculate_window(page, per_page) == expected

    @pytest.mark.parametrize(
        "total, per_page, expected",
        [(0, 10, 0), (1, 10, 1), (10, 10, 1), (11, 10, 2), (95, 10, 10), (5, 1, 5)],
    )
    def test_total_pages_is_ceiling(self, total, per_page, expected):
        assert calculate_total_pages(total, per_page) == expected

    def test_total_pages_unknown_total(self):
        assert calculate_total_pages(UNKNOWN_TOTAL, 10) == 0

    def test_window_sequence_clamps_end(self):
        assert window_sequence(3, 10, ["a", "b", "c", "d", "e"]) == ["d", "e"]

    def test_window_sequence_past_end_is_empty(self):
        assert window_sequence(5, 2, ["a", "b", "c", "d", "e"]) == []
        assert window_sequence(0, 2, []) == []


class TestVerses:
    def test_split_on_escaped_newline_only(self):
        assert split_verses("a\\nb\\nc") == ["a", "b", "c"]
        assert split_verses("a\nb") == ["a\nb"]

    def test_empty_text_has_no_verses(self):
        assert split_verses("") == []
        assert split_verses(None) == []

    def test_join_terminates_each_verse(self):
        assert join_verses(["c", "d"]) == "c\nd\n"
        assert join_verses([]) == ""

    def test_text_pagination(self):
        verses = split_verses("a\\nb\\nc\\nd\\ne")
        result = paginate(
            PageRequest(page=2, per_page=2),
            lambda offset, limit: join_verses(window_sequence(offset, limit, verses)),
            lambda: len(verses),
        )
        assert result.items == "c\nd\n"
        assert result.total == 5
        assert result.total_pages == 3


class TestPaginate:
    def test_fetch_receives_offset_and_limit(self):
        calls = []

        def fetch(offset, limit):
            calls.append((offset, limit))
            return ["x"] * limit

        result = paginate(PageRequest(page=3, per_page=4), fetch, lambda: 50)
        assert calls == [(8, 4)]
        assert result.total == 50
        assert result.total_pages == 13

    def test_without_count_total_is_unknown(self):
        result = paginate(PageRequest(page=1, per_page=10), lambda offset, limit: [])
        assert result.total == UNKNOWN_TOTAL
        assert result.total_pages == 0

    def test_page_beyond_last_yields_empty_items(self):
        items = list(range(5))
        result = paginate(
            PageRequest(page=3, per_page=10),
            lambda offset, limit: window_sequence(offset, limit, items),
            lambda: len(items),
        )
        offset, _ = calculate_window(result.page, result.per_page)
        assert offset >= result.total
        assert result.items == []
        assert result.has_next() is False


class TestLinkHeader:
    def test_empty_set_links_first_and_last_to_page_one(self):
        result = PageResult.new(1, 10, 0)
        assert result.to_dict() == {
            "page": 1,
            "perPage": 10,
            "total": 0,
            "totalPages": 0,
            "items": [],
        }
        assert result.build_link_header("/v1/", 10) == (
            '</v1/?page=1>; rel="first", </v1/?page=1>; rel="last"'
        )

    def test_middle_page_has_all_relations(self):
        result = PageResult.new(2, 10, 45)
        assert result.build_link_header("/v1/?page=2", 10) == (
            '</v1/?page=1>; rel="first", '
            '</v1/?page=1>; rel="prev", '
            '</v1/?page=3>; rel="next", '
            '</v1/?page=5>; rel="last"'
        )

    def test_first_page_has_no_prev(self):
        links = PageResult.new(1, 10, 45).build_links("/v1/", 10)
        assert list(links) == ["first", "next", "last"]

    def test_last_page_has_no_next(self):
        links = PageResult.new(5, 10, 45).build_links("/v1/?page=5", 10)
        assert list(links) == ["first", "prev", "last"]
        assert links["prev"] == "/v1/?page=4"

    def test_page_past_end_points_prev_at_last_page(self):
        links = PageResult.new(3, 10, 5).build_links("/v1/?page=3", 10)
        assert "next" not in links
        assert links["prev"] == "/v1/?page=1"
        assert links["last"] == "/v1/?page=1"

    def test_filters_are_preserved(self):
        links = PageResult.new(2, 10, 45).build_links("/v1/?group=Muse&page=2", 10)
        assert links["next"] == "/v1/?group=Muse&page=3"
        assert links["prev"] == "/v1/?group=Muse&page=1"

    def test_absolute_url_keeps_host(self):
        links = PageResult.new(1, 10, 20).build_links(
            "http://localhost:8080/v1/?song=Uprising", 10
        )
        assert links["next"] == "http://localhost:8080/v1/?song=Uprising&page=2"

    def test_non_default_page_size_is_carried(self):
        links = PageResult.new(1, 100, 250).build_links("/v1/?perPage=1000&text=love", 10)
        assert _query(links["next"]) == {
            "text": ["love"],
            "page": ["2"],
            "perPage": ["100"],
        }

    def test_default_page_size_is_dropped(self):
        links = PageResult.new(1, 10, 25).build_links("/v1/?perPage=abc&group=Muse", 10)
        assert _query(links["next"]) == {"group": ["Muse"], "page": ["2"]}

    def test_unknown_total_full_page_offers_next(self):
        result = PageResult.new(1, 3, UNKNOWN_TOTAL)
        result.items = ["a", "b", "c"]
        links = result.build_links("/v1/", 3)
        assert list(links) == ["first", "next"]

    def test_unknown_total_short_page_has_no_next(self):
        result = PageResult.new(2, 3, UNKNOWN_TOTAL)
        result.items = ["a"]
        links = result.build_links("/v1/?page=2", 3)
        assert list(links) == ["first", "prev"]

    def test_unknown_total_single_object_is_not_counted(self):
        result = PageResult.new(1, 1, UNKNOWN_TOTAL)
        result.items = {"text": "a\n"}
        assert result.has_next() is False

        result.items = [{"text": "a\n"}]
        assert result.has_next() is True

    def test_malformed_url_raises(self):
        result = PageResult.new(1, 10, 20)
        with pytest.raises(PaginationLinkError):
            result.build_link_header("http://[::1/v1/", 10)

    def test_builders_are_idempotent(self):
        result = PageResult.new(2, 10, 45)
        result.items = [{"id": 1}, {"id": 2}]
        url = "/v1/?group=Muse&page=2"

        assert json.dumps(result.to_dict()) == json.dumps(result.to_dict())
        assert result.build_link_header(url, 10) == result.build_link_header(url, 10)
