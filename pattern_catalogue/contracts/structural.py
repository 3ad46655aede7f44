"""Default contracts for the structural categories."""
from ..categories import PatternCategory
from ..contract import CheckOutcome, build_contract, check, expect
from .probes import Probe, probes

# attributes every tagged instance carries besides its public members
_INFRASTRUCTURE = {"pattern_category", "public_members"}


@check("the target request returns a translated result")
def adapter_translates(instances):
    adapter = instances.fresh()
    expect(adapter.adaptee is not None, "adapter wraps no adaptee")
    result = adapter.request()
    expect(result is not None, "request() returned None")


@check("translation is deterministic")
def adapter_deterministic(instances):
    adapter = instances.fresh()
    first = adapter.request()
    second = adapter.request()
    expect(first == second, f"{first!r} != {second!r}")


@check("the abstraction delegates to its bound implementation")
def bridge_delegates(instances):
    abstraction = instances.fresh()
    implementation = Probe("implementation")
    abstraction.implementation = implementation
    abstraction.operation()
    expect(implementation.count() >= 1, "implementation was never called")


@check("re-binding switches implementations")
def bridge_rebinds(instances):
    abstraction = instances.fresh()
    first, second = probes(2)
    abstraction.implementation = first
    abstraction.operation()
    calls = first.count()
    abstraction.implementation = second
    abstraction.operation()
    expect(first.count() == calls, "old implementation called after re-binding")
    expect(second.count() >= 1, "new implementation was never called")


@check("an operation on the composite reaches every child exactly once")
def composite_reaches_children(instances):
    composite = instances.fresh()
    leaves = probes(3)
    for leaf in leaves:
        composite.add(leaf)
    composite.operation()
    for leaf in leaves:
        expect(
            leaf.count("operation") == 1,
            f"child {leaf.label} reached {leaf.count('operation')} times",
        )


@check("removed children are not reached")
def composite_remove(instances):
    composite = instances.fresh()
    removed, kept = probes(2)
    composite.add(removed)
    composite.add(kept)
    composite.remove(removed)
    expect(removed not in list(composite.children), "removed child still listed")
    composite.operation()
    expect(removed.count() == 0, "removed child was reached")
    expect(kept.count("operation") == 1, "remaining child was not reached")


def _apply(component, decorators):
    for decorate in decorators:
        component = decorate(component)
    return component


def _then(first, second):
    def composed(component):
        return second(first(component))

    return composed


@check("decorator composition gives the same result however it is grouped")
def decorator_associative(instances):
    kit = instances.fresh()
    decorators = list(kit.decorators)
    expect(decorators, "no decorators declared")
    # every decorator, repeated until there is a triple to regroup
    while len(decorators) < 3:
        decorators += list(kit.decorators)
    expected = kit.evaluate(_apply(kit.base(), decorators))
    for i in range(len(decorators) - 2):
        before, (d1, d2, d3), after = decorators[:i], decorators[i:i + 3], decorators[i + 3:]
        right = kit.evaluate(_apply(kit.base(), before + [d1, _then(d2, d3)] + after))
        left = kit.evaluate(_apply(kit.base(), before + [_then(d1, d2), d3] + after))
        expect(
            right == left == expected,
            f"regrouping decorators {i}..{i + 2} gave {right!r} and {left!r}, expected {expected!r}",
        )


@check("decorating leaves the wrapped component unchanged")
def decorator_non_destructive(instances):
    kit = instances.fresh()
    base = kit.base()
    before = kit.evaluate(base)
    component = base
    for decorate in kit.decorators:
        component = decorate(component)
        kit.evaluate(component)
    expect(kit.evaluate(base) == before, "decorating changed the base component")


@check("every facade operation coordinates at least two subsystem calls")
def facade_coordinates(instances):
    facade = instances.fresh()
    operations = dict(facade.operations)
    expect(operations, "facade declares no operations")
    for name, args in operations.items():
        before = len(facade.calls)
        getattr(facade, name)(*args)
        made = len(facade.calls) - before
        expect(made >= 2, f"'{name}' made {made} subsystem call(s)")


def _public_names(module):
    return {n for n in dir(module) if not n.startswith("_")} - _INFRASTRUCTURE


@check("declared public members are all present")
def module_members_present(instances):
    module = instances.fresh()
    missing = [m for m in module.public_members if not hasattr(module, m)]
    expect(not missing, f"missing public members: {', '.join(missing)}")


@check("nothing beyond the declared public members is exposed")
def module_hides_private(instances):
    module = instances.fresh()
    extra = sorted(_public_names(module) - set(module.public_members))
    if extra:
        return CheckOutcome.fail(f"undeclared public attributes: {', '.join(extra)}")
    return CheckOutcome.ok()


@check("repeated requests are served by a single real subject")
def proxy_single_subject(instances):
    proxy = instances.fresh()
    proxy.request()
    subject = proxy.real_subject
    expect(subject is not None, "no real subject after a request")
    proxy.request()
    expect(proxy.real_subject is subject, "real subject replaced between requests")


CONTRACTS = {
    PatternCategory.ADAPTER: build_contract(
        PatternCategory.ADAPTER, (adapter_translates, adapter_deterministic)
    ),
    PatternCategory.BRIDGE: build_contract(
        PatternCategory.BRIDGE, (bridge_delegates, bridge_rebinds)
    ),
    PatternCategory.COMPOSITE: build_contract(
        PatternCategory.COMPOSITE, (composite_reaches_children, composite_remove)
    ),
    PatternCategory.DECORATOR: build_contract(
        PatternCategory.DECORATOR, (decorator_associative, decorator_non_destructive)
    ),
    PatternCategory.FACADE: build_contract(PatternCategory.FACADE, (facade_coordinates,)),
    PatternCategory.MODULE: build_contract(
        PatternCategory.MODULE, (module_members_present, module_hides_private)
    ),
    PatternCategory.PROXY: build_contract(PatternCategory.PROXY, (proxy_single_subject,)),
}
