import pytest

from pattern_catalogue.categories import PatternCategory
from pattern_catalogue.contract import (
    Check,
    CheckOutcome,
    Contract,
    InstanceSource,
    build_contract,
    check,
    conformance_check,
)
from pattern_catalogue.contracts import CONTRACTS, default_contract
from pattern_catalogue.contracts.probes import Probe, probes
from pattern_catalogue.errors import ContractDefinitionError


def test_empty_contract_rejected_for_guaranteed_categories():
    for category in ("singleton", "observer", "iterator", "object-pool"):
        with pytest.raises(ContractDefinitionError):
            Contract(category, ())


def test_empty_contract_allowed_elsewhere():
    assert len(Contract("facade", ())) == 0


def test_contract_is_immutable_and_extended_returns_copy():
    base = default_contract("builder")

    @check("builds twice")
    def builds_twice(instances):
        instances.fresh().build()
        instances.fresh().build()

    extended = base.extended(builds_twice)
    assert len(extended) == len(base) + 1
    assert extended.descriptions[-1] == "builds twice"
    assert "builds twice" not in base.descriptions
    with pytest.raises(AttributeError):
        base.checks = ()


def test_contract_rejects_non_checks():
    with pytest.raises(ContractDefinitionError):
        Contract("facade", (lambda instances: True,))


def test_check_requires_description_and_callable():
    with pytest.raises(ContractDefinitionError):
        Check("", lambda instances: True)
    with pytest.raises(ContractDefinitionError):
        Check("not callable", None)


def test_outcome_coercion():
    assert CheckOutcome.coerce(None).passed
    assert CheckOutcome.coerce(True).passed
    assert not CheckOutcome.coerce(False).passed
    outcome = CheckOutcome.fail("why")
    assert CheckOutcome.coerce(outcome) is outcome
    with pytest.raises(TypeError):
        CheckOutcome.coerce("yes")


def test_every_category_has_default_contract():
    assert set(CONTRACTS) == set(PatternCategory)
    for category, contract in CONTRACTS.items():
        assert contract.category is category
        assert len(contract) >= 1, f"{category} contract is empty"


def test_default_contracts_lead_with_conformance_except_singleton():
    for category, contract in CONTRACTS.items():
        first = contract.descriptions[0]
        if category is PatternCategory.SINGLETON:
            assert "declares" not in first
        else:
            assert first.startswith(f"declares the {category} category"), first


def test_conformance_check_reports_missing_capabilities():
    class Subject:
        pattern_category = "observer"

        def subscribe(self, observer):
            pass

    run = conformance_check("observer").run
    outcome = run(InstanceSource(Subject(), Subject))
    assert not outcome.passed
    assert "unsubscribe" in outcome.detail and "notify" in outcome.detail


def test_conformance_check_reports_wrong_tag():
    class Untagged:
        def build(self):
            return 1

    outcome = conformance_check("builder").run(InstanceSource(Untagged(), Untagged))
    assert not outcome.passed
    assert "declared category None" in outcome.detail


def test_build_contract_prepends_conformance():
    @check("anything")
    def anything(instances):
        return None

    contract = build_contract("proxy", [anything])
    assert contract.descriptions == ("declares the proxy category and its capabilities", "anything")


def test_instance_source_counts_fresh_calls():
    source = InstanceSource("primary", lambda: object())
    first, second = source.fresh(), source.fresh()
    assert first is not second
    assert source.fresh_count == 2
    assert source.primary == "primary"


def test_probes_record_calls_in_shared_log():
    log = []
    first, second = probes(2, log)
    assert first.update("AAPL", 150) == "probe:0"
    second.receive("hello")
    assert first.calls == [("update", ("AAPL", 150))]
    assert [label for label, _, _ in log] == [0, 1]
    assert second.count("receive") == 1
    assert second.count("update") == 0
    with pytest.raises(AttributeError):
        Probe("x")._private
