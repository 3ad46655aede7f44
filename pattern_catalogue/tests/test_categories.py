import pytest

from pattern_catalogue.categories import (
    BEHAVIORAL_GUARANTEES,
    CAPABILITIES,
    PatternCategory,
    declared_category,
    missing_capabilities,
)
from pattern_catalogue.errors import NotFoundError, UnknownCategoryError


@pytest.mark.parametrize(
    "spelling", ["object-pool", "object_pool", "OBJECT_POOL", "ObjectPool", " Object Pool "]
)
def test_parse_accepts_common_spellings(spelling):
    assert PatternCategory.parse(spelling) is PatternCategory.OBJECT_POOL, spelling


def test_parse_member_is_identity():
    assert PatternCategory.parse(PatternCategory.MVC) is PatternCategory.MVC


@pytest.mark.parametrize("bad", ["", "   ", "mvvm", "spa", None, 3])
def test_parse_rejects_unknown(bad):
    with pytest.raises(UnknownCategoryError) as info:
        PatternCategory.parse(bad)
    # unknown categories are lookups that failed
    assert isinstance(info.value, NotFoundError)
    assert info.value.code == "unknown_category"


def test_every_category_has_family_and_capabilities():
    families = {c.family for c in PatternCategory}
    assert families == {"creational", "behavioral", "structural", "architectural"}
    assert set(CAPABILITIES) == set(PatternCategory), "capability table must be total"
    assert PatternCategory.ITERATOR.capabilities == ("has_next", "next", "__len__")


def test_behavioral_guarantees_cover_required_categories():
    for category in ("singleton", "observer", "iterator", "object-pool"):
        assert PatternCategory.parse(category) in BEHAVIORAL_GUARANTEES


def test_str_is_value():
    assert str(PatternCategory.ABSTRACT_FACTORY) == "abstract-factory"


def test_declared_category_reads_tag():
    class Tagged:
        pattern_category = "Observer"

    class Untagged:
        pass

    class Bogus:
        pattern_category = "not-a-pattern"

    assert declared_category(Tagged()) is PatternCategory.OBSERVER
    assert declared_category(Untagged()) is None
    assert declared_category(Bogus()) is None


def test_missing_capabilities_lists_absent_operations():
    class HalfSubject:
        def subscribe(self, observer):
            pass

    assert missing_capabilities(PatternCategory.OBSERVER, HalfSubject()) == ("unsubscribe", "notify")
