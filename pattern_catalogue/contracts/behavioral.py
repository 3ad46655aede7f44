"""Default contracts for the behavioral categories."""
from ..categories import PatternCategory
from ..contract import CheckOutcome, build_contract, check, expect
from ..errors import ExhaustedIteratorError
from ..settings import settings
from .probes import Probe, probes

# events a state context is driven through
_STATE_STEPS = 6


@check("each subscribed observer gets exactly one update per notification, in subscription order")
def observer_notifies_in_order(instances):
    subject = instances.fresh()
    log = []
    observers = probes(settings.observer_probe_count, log)
    for observer in observers:
        subject.subscribe(observer)
    subject.notify("probe", 1)
    for observer in observers:
        expect(
            observer.count() == 1,
            f"observer {observer.label} received {observer.count()} updates",
        )
    order = [label for label, _, _ in log]
    expect(order == [o.label for o in observers], f"delivery order was {order}")


@check("an unsubscribed observer receives nothing")
def observer_unsubscribe(instances):
    subject = instances.fresh()
    gone, kept = probes(2)
    subject.subscribe(gone)
    subject.subscribe(kept)
    subject.unsubscribe(gone)
    subject.notify("probe", 1)
    expect(gone.count() == 0, f"unsubscribed observer received {gone.count()} updates")
    expect(kept.count() == 1, f"subscribed observer received {kept.count()} updates")


@check("pressing the button runs the current command exactly once")
def command_runs_once(instances):
    invoker = instances.fresh()
    command = Probe("command")
    invoker.set_command(command)
    invoker.press_button()
    expect(command.count("execute") == 1, f"command executed {command.count('execute')} times")


@check("setting a command replaces the previous one")
def command_replaced(instances):
    invoker = instances.fresh()
    first, second = probes(2)
    invoker.set_command(first)
    invoker.set_command(second)
    invoker.press_button()
    expect(first.count("execute") == 0, "replaced command still executed")
    expect(second.count("execute") == 1, "current command did not execute")


@check("has_next is false only after exactly all elements were produced")
def iterator_exhausts_exactly(instances):
    iterator = instances.fresh()
    total = len(iterator)
    produced = 0
    while iterator.has_next():
        if produced >= settings.iterator_probe_limit:
            return CheckOutcome.fail(f"has_next still true after {produced} elements")
        iterator.next()
        produced += 1
    if produced != total:
        return CheckOutcome.fail(f"produced {produced} of {total} elements")
    return CheckOutcome.ok(f"{produced} elements")


@check("next after exhaustion raises ExhaustedIteratorError")
def iterator_signals_exhaustion(instances):
    iterator = instances.fresh()
    for _ in range(len(iterator)):
        iterator.next()
    try:
        value = iterator.next()
    except ExhaustedIteratorError:
        return CheckOutcome.ok()
    except Exception as e:
        return CheckOutcome.fail(f"raised {type(e).__name__} instead of ExhaustedIteratorError")
    return CheckOutcome.fail(f"returned {value!r} instead of raising")


@check("a message reaches every other colleague once and never its sender")
def mediator_routes(instances):
    mediator = instances.fresh()
    sender, *others = probes(3)
    for colleague in [sender] + others:
        mediator.register(colleague)
    mediator.send("probe", sender)
    expect(sender.count() == 0, "sender received its own message")
    for colleague in others:
        expect(
            colleague.count() == 1,
            f"colleague {colleague.label} received {colleague.count()} messages",
        )


def _drive(context):
    states = [context.current_state()]
    for _ in range(_STATE_STEPS):
        context.change()
        states.append(context.current_state())
    return states


@check("contexts driven through the same events report the same states")
def state_deterministic(instances):
    first = _drive(instances.fresh())
    second = _drive(instances.fresh())
    expect(first == second, f"{first} != {second}")


@check("driving the context changes its state")
def state_changes(instances):
    states = _drive(instances.fresh())
    expect(len(set(states)) > 1, f"state stayed {states[0]!r}")


@check("the context delegates to its current strategy")
def strategy_delegates(instances):
    context = instances.fresh()
    strategy = Probe("strategy")
    context.set_strategy(strategy)
    context.execute()
    expect(strategy.count() >= 1, "strategy was never called")


@check("swapping the strategy changes who does the work")
def strategy_swap(instances):
    context = instances.fresh()
    first, second = probes(2)
    context.set_strategy(first)
    context.execute()
    calls = first.count()
    context.set_strategy(second)
    context.execute()
    expect(first.count() == calls, "old strategy called after the swap")
    expect(second.count() >= 1, "new strategy was never called")


@check("every element is visited exactly once, in structure order")
def visitor_visits_all(instances):
    structure = instances.fresh()
    elements = list(structure.elements)
    visitor = Probe("visitor")
    results = structure.accept(visitor)
    visited = [args[0] for name, args in visitor.calls if name.startswith("visit_") and args]
    expect(len(visited) == len(elements), f"visited {len(visited)} of {len(elements)} elements")
    expect(
        all(a is b for a, b in zip(visited, elements)),
        "elements visited out of order",
    )
    expect(len(list(results)) == len(elements), "accept did not return one result per element")


CONTRACTS = {
    PatternCategory.OBSERVER: build_contract(
        PatternCategory.OBSERVER, (observer_notifies_in_order, observer_unsubscribe)
    ),
    PatternCategory.COMMAND: build_contract(
        PatternCategory.COMMAND, (command_runs_once, command_replaced)
    ),
    PatternCategory.ITERATOR: build_contract(
        PatternCategory.ITERATOR, (iterator_exhausts_exactly, iterator_signals_exhaustion)
    ),
    PatternCategory.MEDIATOR: build_contract(PatternCategory.MEDIATOR, (mediator_routes,)),
    PatternCategory.STATE: build_contract(
        PatternCategory.STATE, (state_deterministic, state_changes)
    ),
    PatternCategory.STRATEGY: build_contract(
        PatternCategory.STRATEGY, (strategy_delegates, strategy_swap)
    ),
    PatternCategory.VISITOR: build_contract(PatternCategory.VISITOR, (visitor_visits_all,)),
}
