import pytest

from pattern_catalogue.categories import PatternCategory
from pattern_catalogue.contract import CheckOutcome, Contract, check, expect
from pattern_catalogue.errors import NotFoundError
from pattern_catalogue.implementations import creational, structural
from pattern_catalogue.verifier import CONSTRUCTION, SKIPPED_DETAIL

IDENTITY = "factory returns the same instance on every call"


class Shared:
    pattern_category = "singleton"


def test_fresh_object_singleton_fails_identity(registry, verifier):
    registry.register("singleton", "impostor", Shared)
    report = verifier.verify("singleton", "impostor")
    assert not report.passed
    assert report.result(CONSTRUCTION).passed
    identity = report.result(IDENTITY)
    assert not identity.passed
    assert "different Shared object" in identity.detail


def test_true_singleton_passes_identity(registry, verifier):
    registry.register("singleton", "shared", creational.singleton_factory(Shared))
    report = verifier.verify("singleton", "shared")
    assert report.passed, report.to_dict()
    assert report.result(IDENTITY).passed


def test_always_raising_factory_still_reports(registry, verifier):
    def broken():
        raise RuntimeError("no database")

    registry.register("object-pool", "broken", broken)
    report = verifier.verify("object-pool", "broken")
    assert not report.passed
    first = report.results[0]
    assert first.description == CONSTRUCTION
    assert first.detail == "RuntimeError: no database"
    skipped = report.results[1:]
    assert len(skipped) == len(registry.get("object-pool", "broken").contract)
    assert all(not r.passed and r.detail == SKIPPED_DETAIL for r in skipped)


def test_checks_run_in_order_without_short_circuit(registry, verifier):
    seen = []

    @check("first fails")
    def first(instances):
        seen.append("first")
        return CheckOutcome.fail("nope")

    @check("second raises")
    def second(instances):
        seen.append("second")
        raise KeyError("gone")

    @check("third asserts")
    def third(instances):
        seen.append("third")
        expect(instances.primary == 0, "primary is not zero")

    @check("fourth passes")
    def fourth(instances):
        seen.append("fourth")

    registry.register("facade", "ordered", lambda: 1, Contract("facade", (first, second, third, fourth)))
    report = verifier.verify("facade", "ordered")

    assert seen == ["first", "second", "third", "fourth"]
    assert [r.description for r in report.results] == [
        CONSTRUCTION, "first fails", "second raises", "third asserts", "fourth passes",
    ]
    details = {r.description: r.detail for r in report.results}
    assert details["first fails"] == "nope"
    assert details["second raises"] == "KeyError: 'gone'"
    assert details["third asserts"] == "primary is not zero"
    assert report.failed_checks == 3
    assert report.total_checks == 5
    assert report.pass_rate == pytest.approx(0.4)


def test_report_passed_is_and_of_results(registry, verifier):
    registry.register("factory", "animal", creational.AnimalFactory)
    report = verifier.verify("factory", "animal")
    assert report.passed == all(r.passed for r in report.results)
    payload = report.to_dict()
    assert payload["entry"] == "animal"
    assert payload["category"] == "factory"
    assert payload["passed"] is True
    assert payload["failed_checks"] == 0
    assert payload["checks"][0] == {"description": CONSTRUCTION, "ok": True, "detail": None}


def test_verify_unknown_entry_propagates_not_found(verifier):
    with pytest.raises(NotFoundError):
        verifier.verify("factory", "missing")


def test_verify_all_in_registration_order(registry, verifier):
    registry.register("factory", "shape", creational.ShapeFactory)
    registry.register("factory", "animal", creational.AnimalFactory)
    reports = verifier.verify_all(PatternCategory.FACTORY)
    assert [r.entry_name for r in reports] == ["shape", "animal"]
    assert all(r.passed for r in reports)
    assert verifier.verify_all("builder") == []


def test_pool_without_bound_fails_bounded_check(registry, verifier):
    class LeakyPool(creational.ConnectionPool):
        def release(self, connection):
            self._pool.append(connection)
            return True

    registry.register("object-pool", "leaky", LeakyPool, config={"max_size": 2})
    report = verifier.verify("object-pool", "leaky")
    bounded = report.result("released objects beyond max_size are discarded")
    assert not bounded.passed
    assert "retains 4 objects, max_size is 2" in bounded.detail


def test_pool_overflow_constructs(registry, verifier):
    registry.register("object-pool", "db", creational.ConnectionPool, config={"max_size": 3})
    report = verifier.verify("object-pool", "db")
    assert report.result(
        "after max_size objects cycle through the pool, one more acquire constructs"
    ).passed
    assert report.passed, report.to_dict()


def test_double_release_pools_object_once():
    pool = creational.ImagePool(max_size=5)
    image = pool.get_image("a.png")
    assert pool.release_image(image) is True
    assert pool.release_image(image) is False
    assert pool.available == 1
    first, second = pool.get_image("b.png"), pool.get_image("c.png")
    assert first is image
    assert second is not first


def test_pool_that_pools_duplicates_fails_double_release_check(registry, verifier):
    class LeakyPool(creational.ImagePool):
        def release(self, obj):
            self._pool.append(obj)
            return True

    registry.register("object-pool", "leaky", LeakyPool, config={"max_size": 5})
    report = verifier.verify("object-pool", "leaky")
    assert not report.result("releasing an object twice pools it once").passed
    registry.register("object-pool", "db", creational.ConnectionPool, config={"max_size": 5})
    assert verifier.verify("object-pool", "db").result("releasing an object twice pools it once").passed


class CountingKit:
    """Each application stamps a fresh number, so no two groupings agree."""

    pattern_category = PatternCategory.DECORATOR

    def __init__(self, decorators=1):
        self.stamps = 0
        self.decorators = tuple(self._stamp for _ in range(decorators))

    def _stamp(self, component):
        self.stamps += 1
        return f"{component}+{self.stamps}"

    def base(self):
        return "base"

    def evaluate(self, component):
        return component


GROUPING = "decorator composition gives the same result however it is grouped"


def test_decorator_grouping_regroups_a_composed_pair(registry, verifier):
    registry.register("decorator", "counting", CountingKit)
    result = verifier.verify("decorator", "counting").result(GROUPING)
    assert not result.passed
    assert "regrouping decorators 0..2" in result.detail


def test_decorator_grouping_passes_for_single_decorator_kit(registry, verifier):
    registry.register("decorator", "milk-only", structural.CoffeeKit, config={"names": ["milk"]})
    assert verifier.verify("decorator", "milk-only").result(GROUPING).passed
