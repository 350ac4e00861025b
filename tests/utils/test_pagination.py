from app.utils.pagination import PageParams, PageResult


def test_page_params_offset():
    assert PageParams().offset == 0
    assert PageParams(page=3, limit=20).offset == 40


def test_total_pages_rounds_up():
    params = PageParams(page=1, limit=10)

    assert PageResult(items=[], total=0, params=params).total_pages == 0
    assert PageResult(items=[], total=10, params=params).total_pages == 1
    assert PageResult(items=[], total=11, params=params).total_pages == 2


def test_to_response():
    result = PageResult(items=("a", "b"), total=5, params=PageParams(page=2, limit=2))

    assert result.to_response() == {
        "data": ["a", "b"],
        "pagination": {"page": 2, "limit": 2, "total": 5, "total_pages": 3},
    }
