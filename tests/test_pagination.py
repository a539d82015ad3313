"""Tests for page/limit to offset/limit conversion."""

from bookreview.database import DB_INT_MAX
from bookreview.utils.pagination import Window, paginate


class TestPaginate:

    def test_defaults(self):
        assert paginate() == Window(skip=0, take=10)

    def test_later_pages(self):
        assert paginate(2, 10) == Window(skip=10, take=10)
        assert paginate(3, 5) == Window(skip=10, take=5)

    def test_page_zero_and_negative_read_first_window(self):
        assert paginate(0, 10).skip == 0
        assert paginate(-4, 10).skip == 0

    def test_negative_limit_takes_nothing(self):
        assert paginate(2, -3) == Window(skip=0, take=0)

    def test_large_limit_is_not_capped(self):
        assert paginate(1, 1000).take == 1000

    def test_offset_capped_at_integer_range(self):
        assert paginate(2**62, 10).skip == DB_INT_MAX
        assert paginate(2, DB_INT_MAX) == Window(skip=DB_INT_MAX, take=DB_INT_MAX)
