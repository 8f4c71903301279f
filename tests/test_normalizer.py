"""Article normalizer tests."""

from datetime import datetime, timezone

import pytest
from dateutil import parser as dtparse

from truthlens.normalizer import normalize_record, normalize_records

NOW = datetime(2025, 3, 1, 12, 0, 0, tzinfo=timezone.utc)


def _record(**overrides):
    record = {
        "title": "Budget passes",
        "link": "https://news.example/budget",
        "description": "Parliament approved the budget.",
        "content": "Full text of the budget story.",
        "image_url": "https://news.example/budget.jpg",
        "source_name": "Example Times",
        "source_id": "example_times",
        "category": ["politics"],
        "pubDate": "2025-03-01 10:30:00",
    }
    record.update(overrides)
    return record


class TestFieldDerivation:

    def test_full_record(self):
        article = normalize_record(_record(), 0, NOW)
        assert article is not None
        assert article.to_dict() == {
            "id": "https://news.example/budget",
            "title": "Budget passes",
            "summary": "Parliament approved the budget.",
            "content": "Full text of the budget story.",
            "imageUrl": "https://news.example/budget.jpg",
            "sourceName": "Example Times",
            "category": "politics",
            "pubDate": "2025-03-01T10:30:00.000Z",
            "link": "https://news.example/budget",
        }

    def test_summary_falls_back_to_content(self):
        article = normalize_record(_record(description=None), 0, NOW)
        assert article.summary == "Full text of the budget story."

    def test_summary_and_content_default_empty(self):
        article = normalize_record(_record(description=None, content=None), 0, NOW)
        assert article.summary == ""
        assert article.content == ""

    def test_blank_description_skipped(self):
        article = normalize_record(_record(description="   "), 0, NOW)
        assert article.summary == "Full text of the budget story."

    def test_source_name_falls_back_to_source_id(self):
        article = normalize_record(_record(source_name=None), 0, NOW)
        assert article.source_name == "example_times"

    def test_source_name_unknown(self):
        article = normalize_record(_record(source_name=None, source_id=None), 0, NOW)
        assert article.source_name == "Unknown"

    def test_missing_image(self):
        article = normalize_record(_record(image_url=None), 0, NOW)
        assert article.image_url is None

    @pytest.mark.parametrize(
        "value, expected",
        [
            (["sports", "top"], "sports"),
            ("business", "business"),
            (None, "general"),
            ([], "general"),
        ],
    )
    def test_category(self, value, expected):
        article = normalize_record(_record(category=value), 0, NOW)
        assert article.category == expected

    def test_pub_date_with_offset_converted_to_utc(self):
        article = normalize_record(_record(pubDate="2025-03-01T15:00:00+05:30"), 0, NOW)
        assert article.pub_date == "2025-03-01T09:30:00.000Z"

    def test_rfc2822_pub_date(self):
        article = normalize_record(_record(pubDate="Sat, 01 Mar 2025 08:00:00 GMT"), 0, NOW)
        assert article.pub_date == "2025-03-01T08:00:00.000Z"

    @pytest.mark.parametrize("value", [None, "", "not a date", "2025-02-30"])
    def test_invalid_pub_date_uses_now(self, value):
        article = normalize_record(_record(pubDate=value), 0, NOW)
        assert article.pub_date == "2025-03-01T12:00:00.000Z"

    def test_missing_pub_date_not_before_normalization(self):
        start = datetime.now(timezone.utc)
        start = start.replace(microsecond=start.microsecond // 1000 * 1000)
        article = normalize_record({"title": "A", "link": "https://x/1", "pubDate": None}, 0)
        assert article.title == "A"
        assert article.link == "https://x/1"
        published = dtparse.isoparse(article.pub_date)
        assert start <= published <= datetime.now(timezone.utc)


class TestViability:

    @pytest.mark.parametrize("link", [None, "", "  "])
    def test_records_without_link_dropped(self, link):
        assert normalize_record(_record(link=link), 0, NOW) is None

    def test_record_without_link_or_title_dropped(self):
        assert normalize_record({"description": "orphan"}, 0, NOW) is None

    def test_missing_title_becomes_untitled(self):
        article = normalize_record(_record(title=None), 0, NOW)
        assert article is not None
        assert article.title == "Untitled"

    @pytest.mark.parametrize("title", [{"text": "x"}, False, ["a", "b"]])
    def test_non_scalar_title_becomes_untitled(self, title):
        article = normalize_record(_record(title=title), 0, NOW)
        assert article.title == "Untitled"

    @pytest.mark.parametrize("link", [{"href": "https://x/1"}, True, ["https://x/1"]])
    def test_non_scalar_link_dropped(self, link):
        assert normalize_record(_record(link=link), 0, NOW) is None

    def test_numeric_title_kept_as_text(self):
        assert normalize_record(_record(title=2025), 0, NOW).title == "2025"

    def test_non_mapping_record_dropped(self):
        assert normalize_record("not a record", 0, NOW) is None


class TestIdentifiers:

    def test_id_prefers_link(self):
        article = normalize_record(_record(), 3, NOW)
        assert article.id == "https://news.example/budget"

    def test_batch_keeps_order_and_drops_non_viable(self):
        records = [
            _record(link="https://news.example/1"),
            _record(link=None),
            _record(link="https://news.example/2", title=None),
        ]
        articles = normalize_records(records, NOW)
        assert [a.link for a in articles] == ["https://news.example/1", "https://news.example/2"]
        assert [a.title for a in articles] == ["Budget passes", "Untitled"]
        assert len({a.id for a in articles}) == 2
