from pagedview.services.paginator import INVALID_PAGE_COUNT, compute_num_pages, compute_page


def test_first_and_last_page_slices():
    data = list(range(7))
    assert compute_page(data, 1, 3) == [0, 1, 2]
    assert compute_page(data, 3, 3) == [6]


def test_page_beyond_end_is_empty():
    assert compute_page(list(range(4)), 3, 2) == []


def test_non_positive_page_is_empty():
    data = list(range(4))
    assert compute_page(data, 0, 2) == []
    assert compute_page(data, -1, 2) == []


def test_page_size_law_holds_for_every_page():
    data = list(range(11))
    for size in (1, 2, 3, 5, 11, 20):
        for page in range(1, 6):
            expected = min(size, max(0, len(data) - size * (page - 1)))
            assert len(compute_page(data, page, size)) == expected


def test_num_pages():
    assert compute_num_pages(0, 5) == 0
    assert compute_num_pages(5, 5) == 1
    assert compute_num_pages(6, 5) == 2
    assert compute_num_pages(3, 0) == INVALID_PAGE_COUNT
    assert compute_num_pages(3, -2) == -1
