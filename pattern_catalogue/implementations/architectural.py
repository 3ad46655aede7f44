"""Architectural reference implementations: flux, mvc, redux.

Views render to strings instead of a DOM.
"""
from typing import Any, Callable, Dict, List, Optional, Sequence

from ..categories import PatternCategory

ADD_TODO = "ADD_TODO"
TOGGLE_TODO = "TOGGLE_TODO"
INCREMENT = "INCREMENT"
DECREMENT = "DECREMENT"


def add_todo(text: str) -> Dict[str, Any]:
    return {"type": ADD_TODO, "payload": text}


def toggle_todo(todo_id: int) -> Dict[str, Any]:
    return {"type": TOGGLE_TODO, "id": todo_id}


def increment() -> Dict[str, Any]:
    return {"type": INCREMENT}


def decrement() -> Dict[str, Any]:
    return {"type": DECREMENT}


# --------------------------------------------------------------------- flux

class Dispatcher:
    def __init__(self):
        self.callbacks: List[Callable[[Dict[str, Any]], Any]] = []

    def register(self, callback: Callable[[Dict[str, Any]], Any]) -> None:
        self.callbacks.append(callback)

    def dispatch(self, action: Dict[str, Any]) -> List[Any]:
        return [callback(action) for callback in list(self.callbacks)]


class TodoStore:
    def __init__(self):
        self.todos: List[str] = []

    def handle_action(self, action: Dict[str, Any]) -> None:
        if action.get("type") == ADD_TODO:
            self.todos.append(action["payload"])

    def get_todos(self) -> List[str]:
        return list(self.todos)


class FluxTodoApp(Dispatcher):
    """Dispatcher wired to a todo store and a console-style view."""

    pattern_category = PatternCategory.FLUX

    def __init__(self):
        super().__init__()
        self.store = TodoStore()
        self.register(self.store.handle_action)
        self.register(self.render)

    def render(self, action: Optional[Dict[str, Any]] = None) -> str:
        return f"Todos: {self.store.get_todos()}"

    def add_todo(self, text: str) -> str:
        return self.dispatch(add_todo(text))[-1]


# ---------------------------------------------------------------------- mvc

class TodoModel:
    def __init__(self):
        self.todos: List[str] = []

    def add_todo(self, todo: str) -> None:
        self.todos.append(todo)

    def get_data(self) -> List[str]:
        return list(self.todos)


class TodoView:
    def __init__(self):
        self.rendered: List[str] = []

    def render(self, todos: Sequence[str]) -> str:
        out = "\n".join(f"- {todo}" for todo in todos) or "(no todos)"
        self.rendered.append(out)
        return out


class TodoController:
    pattern_category = PatternCategory.MVC

    def __init__(self):
        self.model = TodoModel()
        self.view = TodoView()

    def add_todo(self, todo: str) -> str:
        self.model.add_todo(todo)
        return self.update_view()

    def update_view(self):
        return self.view.render(self.model.get_data())


class ProductModel:
    def __init__(self):
        self.products: List[Dict[str, Any]] = []

    def add_product(self, product: Dict[str, Any]) -> None:
        self.products.append(dict(product))

    def get_all_products(self) -> List[Dict[str, Any]]:
        return [dict(product) for product in self.products]

    get_data = get_all_products


class ProductView:
    def __init__(self):
        self.rendered: List[str] = []

    def render(self, products: Sequence[Dict[str, Any]]) -> str:
        out = "\n".join(f"{p['name']}: ${p['price']}" for p in products) or "(no products)"
        self.rendered.append(out)
        return out


class ProductController:
    """Online store listing: every added product re-renders the catalogue."""

    pattern_category = PatternCategory.MVC

    def __init__(self):
        self.model = ProductModel()
        self.view = ProductView()

    def add_product(self, product: Dict[str, Any]) -> str:
        self.model.add_product(product)
        return self.update_view()

    def update_view(self):
        return self.view.render(self.model.get_all_products())


# -------------------------------------------------------------------- redux

def counter_reducer(state: int, action: Dict[str, Any]) -> int:
    kind = action.get("type")
    if kind == INCREMENT:
        return state + 1
    if kind == DECREMENT:
        return state - 1
    return state


def todo_reducer(state: List[Dict[str, Any]], action: Dict[str, Any]) -> List[Dict[str, Any]]:
    kind = action.get("type")
    if kind == ADD_TODO:
        return state + [{"id": len(state), "text": action["payload"], "completed": False}]
    if kind == TOGGLE_TODO:
        return [
            dict(todo, completed=not todo["completed"]) if todo["id"] == action["id"] else todo
            for todo in state
        ]
    return state


class Store:
    """Single state tree changed only by dispatching actions through a reducer."""

    pattern_category = PatternCategory.REDUX

    def __init__(self, reducer, initial_state, actions: Sequence[Dict[str, Any]] = ()):
        self.reducer = reducer
        self.initial_state = initial_state
        self.actions = tuple(actions)
        self._state = initial_state
        self._listeners: List[Callable[[], Any]] = []

    def get_state(self):
        return self._state

    def dispatch(self, action) -> Any:
        if isinstance(action, str):
            action = {"type": action}
        self._state = self.reducer(self._state, action)
        for listener in list(self._listeners):
            listener()
        return self._state

    def subscribe(self, listener: Callable[[], Any]) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe


def counter_store() -> Store:
    return Store(counter_reducer, 0, (increment(), increment(), decrement()))


class TodoListStore(Store):
    def __init__(self):
        super().__init__(
            todo_reducer,
            [],
            (add_todo("Buy groceries"), add_todo("Finish project"), toggle_todo(0)),
        )

    def add_todo(self, text: str):
        return self.dispatch(add_todo(text))

    def toggle_todo(self, todo_id: int):
        return self.dispatch(toggle_todo(todo_id))

    def render(self) -> List[str]:
        return [
            f"[{'x' if todo['completed'] else ' '}] {todo['text']}" for todo in self.get_state()
        ]
