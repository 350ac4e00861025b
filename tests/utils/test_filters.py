from app.models.class_model import ClassModel
from app.utils.filters import FilterBuilder, search_filter


def test_search_filter_skips_empty_terms():
    assert search_filter(None, ClassModel.name) is None
    assert search_filter("", ClassModel.name) is None


def test_search_filter_escapes_wildcards():
    clause = search_filter("50%_off", ClassModel.name, ClassModel.invite_code)
    compiled = clause.compile()
    sql = str(compiled)

    assert "classes.name" in sql
    assert "classes.invite_code" in sql
    assert " OR " in sql
    assert "ESCAPE '/'" in sql
    assert set(compiled.params.values()) == {"50/%/_off"}


def test_filter_builder_only_adds_supplied_values():
    filters = (
        FilterBuilder()
        .search(None, ClassModel.name)
        .equals(ClassModel.subject_id, None)
        .equals(ClassModel.teacher_id, "teacher-1")
        .add(None)
    )

    assert len(filters.conditions) == 1


def test_filter_builder_keeps_falsy_values():
    filters = FilterBuilder().equals(ClassModel.capacity, 0)

    assert len(filters.conditions) == 1
