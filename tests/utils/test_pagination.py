import json

import pytest
from sqlalchemy import select

from app.models import Tournament
from app.utils.pagination import MetaData, PagedList, page_offset


class TestMetaData:
    @pytest.mark.parametrize(
        "count,page_size,expected",
        [(0, 10, 0), (1, 10, 1), (10, 10, 1), (11, 10, 2), (25, 20, 2), (100, 2, 50)],
    )
    def test_total_pages_is_ceiling(self, count, page_size, expected):
        meta = MetaData.from_count(count, 1, page_size)
        assert meta.total_pages == expected
        assert meta.total_count == count
        assert meta.page_size == page_size

    def test_first_page_has_next_but_no_previous(self):
        meta = MetaData.from_count(25, 1, 10)
        assert meta.has_next is True
        assert meta.has_previous is False

    def test_last_page_has_previous_but_no_next(self):
        meta = MetaData.from_count(25, 3, 10)
        assert meta.has_next is False
        assert meta.has_previous is True

    def test_empty_result_has_no_neighbours(self):
        meta = MetaData.from_count(0, 1, 10)
        assert meta.has_next is False
        assert meta.has_previous is False

    def test_non_positive_page_size_is_rejected(self):
        with pytest.raises(ValueError):
            MetaData.from_count(5, 1, 0)

    def test_is_immutable(self):
        meta = MetaData.from_count(5, 1, 2)
        with pytest.raises(AttributeError):
            meta.current_page = 2

    def test_header_is_camel_case_json(self):
        header = MetaData.from_count(25, 2, 10).to_header()
        assert json.loads(header) == {
            "currentPage": 2,
            "totalPages": 3,
            "pageSize": 10,
            "totalCount": 25,
            "hasNext": True,
            "hasPrevious": True,
        }


def test_page_offset():
    assert page_offset(1, 20) == 0
    assert page_offset(3, 20) == 40


@pytest.mark.asyncio
class TestPagedList:
    async def test_create_returns_requested_window(self, test_session, many_tournaments):
        stmt = select(Tournament).order_by(Tournament.start_date)

        paged = await PagedList.create(test_session, stmt, 2, 10)

        assert [t.title for t in paged.items] == [f"League {i:02d}" for i in range(10, 20)]
        assert paged.meta_data.total_count == 25
        assert paged.meta_data.total_pages == 3
        assert paged.meta_data.current_page == 2
        assert paged.exceeds_last_page is False

    async def test_page_past_the_end_is_flagged(self, test_session, many_tournaments):
        stmt = select(Tournament).order_by(Tournament.start_date)

        paged = await PagedList.create(test_session, stmt, 9, 10)

        assert paged.items == []
        assert paged.exceeds_last_page is True

    async def test_empty_table(self, test_session):
        paged = await PagedList.create(test_session, select(Tournament), 3, 10)

        assert paged.items == []
        assert paged.meta_data.total_pages == 0
        assert paged.exceeds_last_page is False
