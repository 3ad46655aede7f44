"""Default contracts for the architectural categories (flux, mvc, redux)."""
import copy

from ..categories import PatternCategory
from ..contract import build_contract, check, expect
from .probes import Probe

_UNKNOWN_ACTION = {"type": "@@catalogue/UNKNOWN"}


def _recorder(label, log):
    def callback(action):
        log.append((label, action))

    return callback


@check("every registered store callback receives each dispatched action once, in order")
def flux_dispatch_order(instances):
    dispatcher = instances.fresh()
    log = []
    for label in range(3):
        dispatcher.register(_recorder(label, log))
    action = {"type": "PROBE"}
    dispatcher.dispatch(action)
    expect([label for label, _ in log] == [0, 1, 2], f"callbacks ran as {[l for l, _ in log]}")
    expect(all(received is action for _, received in log), "callbacks received another action")


@check("updating the view renders the model's current data")
def mvc_renders_model(instances):
    controller = instances.fresh()
    view = Probe("view")
    controller.view = view
    controller.update_view()
    expect(view.calls, "view was never rendered")
    data = controller.model.get_data()
    _, args = view.calls[-1]
    expect(data in args, f"view rendered {args!r}, model holds {data!r}")


@check("the reducer is pure")
def redux_reducer_pure(instances):
    store = instances.fresh()
    for action in store.actions:
        state = copy.deepcopy(store.initial_state)
        snapshot = copy.deepcopy(state)
        first = store.reducer(state, action)
        expect(state == snapshot, f"reducer mutated its input state on {action!r}")
        second = store.reducer(copy.deepcopy(snapshot), action)
        expect(first == second, f"reducer gave {first!r} then {second!r} for {action!r}")


@check("unknown actions return the state unchanged")
def redux_unknown_action(instances):
    store = instances.fresh()
    state = copy.deepcopy(store.initial_state)
    result = store.reducer(state, dict(_UNKNOWN_ACTION))
    expect(result == store.initial_state, f"unknown action produced {result!r}")


@check("dispatch folds actions through the reducer")
def redux_dispatch_applies_reducer(instances):
    store = instances.fresh()
    expected = copy.deepcopy(store.initial_state)
    for action in store.actions:
        expected = store.reducer(expected, action)
        store.dispatch(action)
    expect(store.get_state() == expected, f"store holds {store.get_state()!r}, expected {expected!r}")


CONTRACTS = {
    PatternCategory.FLUX: build_contract(PatternCategory.FLUX, (flux_dispatch_order,)),
    PatternCategory.MVC: build_contract(PatternCategory.MVC, (mvc_renders_model,)),
    PatternCategory.REDUX: build_contract(
        PatternCategory.REDUX,
        (redux_reducer_pure, redux_unknown_action, redux_dispatch_applies_reducer),
    ),
}
