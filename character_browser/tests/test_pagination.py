import unittest

from ..models.pagination import Page, PageMapper, UPSTREAM_PAGE_SIZE
from ..ui.widgets.pagination import ELLIPSIS, page_window


def upstream(n_items):
    """Items 0..n-1 split into upstream pages of 20."""
    items = list(range(n_items))
    return [items[i:i + UPSTREAM_PAGE_SIZE] for i in range(0, n_items, UPSTREAM_PAGE_SIZE)]


class TestPageMapperSingleFetch(unittest.TestCase):
    def test_first_page_of_ten(self):
        mapper = PageMapper(current_page=1, per_page=10)
        self.assertEqual(mapper.api_page, 1)
        self.assertEqual(mapper.start_index, 0)
        self.assertEqual(mapper.slice(list(range(20))), list(range(10)))

    def test_second_page_of_ten(self):
        mapper = PageMapper(current_page=2, per_page=10)
        self.assertEqual(mapper.api_page, 1)
        self.assertEqual(mapper.start_index, 10)
        self.assertEqual(mapper.slice(list(range(20))), list(range(10, 20)))

    def test_third_page_of_ten(self):
        mapper = PageMapper(current_page=3, per_page=10)
        self.assertEqual(mapper.api_page, 2)
        self.assertEqual(mapper.start_index, 0)

    def test_aligned_sizes_always_fill_one_upstream_page(self):
        pages = upstream(800)
        for per_page in (5, 10):
            for current in range(1, 40):
                mapper = PageMapper(current, per_page)
                with self.subTest(per_page=per_page, current=current):
                    self.assertEqual(mapper.api_page, -(-current * per_page // 20))
                    sliced = mapper.slice(pages[mapper.api_page - 1])
                    self.assertEqual(len(sliced), per_page)
                    self.assertEqual(sliced[0], (current - 1) * per_page)

    def test_alignment(self):
        self.assertTrue(PageMapper(1, 5).is_aligned)
        self.assertTrue(PageMapper(1, 20).is_aligned)
        self.assertFalse(PageMapper(1, 30).is_aligned)
        self.assertFalse(PageMapper(1, 50).is_aligned)

    def test_unaligned_single_fetch_is_short(self):
        # 30 per page: page 1 should be items 0..29 but a single fetch of
        # upstream page 2 only has 20 items starting at 20.
        mapper = PageMapper(1, 30)
        self.assertEqual(mapper.api_page, 2)
        self.assertEqual(mapper.start_index, 0)
        self.assertEqual(mapper.slice(upstream(100)[1]), list(range(20, 40)))

    def test_rejects_invalid_input(self):
        with self.assertRaises(ValueError):
            PageMapper(0, 10)
        with self.assertRaises(ValueError):
            PageMapper(1, 0)
        with self.assertRaises(ValueError):
            PageMapper(1, 7)


class TestPageMapperStitched(unittest.TestCase):
    def test_upstream_pages_for_thirty(self):
        self.assertEqual(list(PageMapper(1, 30).upstream_pages), [1, 2])
        self.assertEqual(list(PageMapper(2, 30).upstream_pages), [2, 3])
        self.assertEqual(list(PageMapper(3, 30).upstream_pages), [4, 5])

    def test_upstream_pages_for_aligned_size_is_single(self):
        mapper = PageMapper(7, 10)
        self.assertEqual(list(mapper.upstream_pages), [mapper.api_page])

    def test_stitch_gives_exact_slices(self):
        pages = upstream(826)
        for per_page in (5, 10, 20, 30, 50):
            last = -(-826 // per_page)
            for current in (1, 2, 3, last):
                mapper = PageMapper(current, per_page)
                wanted = [pages[n - 1] for n in mapper.upstream_pages if n <= len(pages)]
                expected = list(range((current - 1) * per_page, min(current * per_page, 826)))
                with self.subTest(per_page=per_page, current=current):
                    self.assertEqual(mapper.stitch(wanted), expected)

    def test_stitch_matches_single_fetch_when_aligned(self):
        pages = upstream(100)
        mapper = PageMapper(4, 5)
        self.assertEqual(
            mapper.stitch([pages[n - 1] for n in mapper.upstream_pages]),
            mapper.slice(pages[mapper.api_page - 1]),
        )


class TestTotals(unittest.TestCase):
    def test_estimate_assumes_full_upstream_pages(self):
        self.assertEqual(PageMapper(1, 10).estimate_total_pages(42), 84)
        self.assertEqual(PageMapper(1, 30).estimate_total_pages(42), 28)

    def test_exact_uses_count(self):
        # 826 characters: the estimate overcounts the partially filled last page.
        mapper = PageMapper(1, 10)
        self.assertEqual(mapper.exact_total_pages(826), 83)
        self.assertEqual(mapper.estimate_total_pages(42), 84)

    def test_never_below_one(self):
        self.assertEqual(PageMapper(1, 10).exact_total_pages(0), 1)
        self.assertEqual(PageMapper(1, 10).estimate_total_pages(0), 1)


class TestPage(unittest.TestCase):
    def test_navigation_helpers(self):
        page = Page(items=[1, 2], total=12, pages=3, page=2, per_page=5)
        self.assertTrue(page.has_next())
        self.assertTrue(page.has_prev())
        self.assertFalse(Page(items=[], total=0, pages=1, page=1, per_page=5).has_next())


class TestPageWindow(unittest.TestCase):
    def test_single_page(self):
        self.assertEqual(page_window(1, 1), [1])
        self.assertEqual(page_window(1, 0), [1])

    def test_two_pages(self):
        self.assertEqual(page_window(1, 2), [1, 2])

    def test_start(self):
        self.assertEqual(page_window(1, 10), [1, 2, 3, ELLIPSIS, 10])

    def test_middle(self):
        self.assertEqual(page_window(5, 10), [1, ELLIPSIS, 3, 4, 5, 6, 7, ELLIPSIS, 10])

    def test_end(self):
        self.assertEqual(page_window(10, 10), [1, ELLIPSIS, 8, 9, 10])

    def test_no_ellipsis_next_to_edges(self):
        self.assertEqual(page_window(4, 7), [1, 2, 3, 4, 5, 6, 7])

    def test_current_is_clamped(self):
        self.assertEqual(page_window(99, 5), page_window(5, 5))


if __name__ == "__main__":
    unittest.main()
