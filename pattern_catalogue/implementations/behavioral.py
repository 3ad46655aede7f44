"""Behavioral reference implementations: observer, command, iterator, mediator,
state, strategy, visitor.

Collaborators may be given as objects or by name; names resolve against the
collaborators each context ships with, so a script can say "subscribe display".
"""
import math
from typing import Any, Dict, Iterable, List, Optional, Sequence

from ..categories import PatternCategory
from ..errors import ExhaustedIteratorError


def _resolve(directory: Dict[str, Any], value: Any, what: str) -> Any:
    if isinstance(value, str):
        try:
            return directory[value]
        except KeyError:
            raise ValueError(f"Unknown {what}: {value!r}") from None
    return value


# ----------------------------------------------------------------- observer

class _RecordingObserver:
    def __init__(self):
        self.received: List[tuple] = []


class StockMarketDisplay(_RecordingObserver):
    def __init__(self):
        super().__init__()
        self.stocks: Dict[str, Any] = {}

    def update(self, stock_name, price):
        self.received.append((stock_name, price))
        self.stocks[stock_name] = price
        return f"Stocks: {self.stocks}"


class NewsFeed(_RecordingObserver):
    def update(self, stock_name, price):
        self.received.append((stock_name, price))
        return f"Breaking News: {stock_name} price is {price}"


class TemperatureDisplay(_RecordingObserver):
    def update(self, temperature):
        self.received.append((temperature,))
        return f"Current temperature: {temperature}°C"


class MobileApp(_RecordingObserver):
    def update(self, temperature):
        self.received.append((temperature,))
        return f"Mobile app notification: Temperature is {temperature}°C"


class _Subject:
    pattern_category = PatternCategory.OBSERVER

    def __init__(self, observers: Optional[Dict[str, Any]] = None):
        self.directory: Dict[str, Any] = dict(observers if observers is not None else self._defaults())
        self._observers: List[Any] = []

    def _defaults(self) -> Dict[str, Any]:
        return {}

    @property
    def observers(self) -> List[Any]:
        return list(self._observers)

    def subscribe(self, observer) -> None:
        self._observers.append(_resolve(self.directory, observer, "observer"))

    def unsubscribe(self, observer) -> None:
        observer = _resolve(self.directory, observer, "observer")
        for i, current in enumerate(self._observers):
            if current is observer:
                del self._observers[i]
                return

    def notify(self, *args) -> List[Any]:
        return [observer.update(*args) for observer in list(self._observers)]

    def received(self, name: str) -> List[tuple]:
        return list(self.directory[name].received)


class StockMarket(_Subject):
    def _defaults(self):
        return {"display": StockMarketDisplay(), "news-feed": NewsFeed()}

    def set_stock_price(self, stock_name, price) -> List[Any]:
        return self.notify(stock_name, price)


class WeatherStation(_Subject):
    def _defaults(self):
        return {"display": TemperatureDisplay(), "mobile-app": MobileApp()}

    def set_temperature(self, temperature) -> List[Any]:
        return self.notify(temperature)


# ------------------------------------------------------------------ command

class Light:
    def __init__(self):
        self.is_on = False

    def turn_on(self) -> str:
        self.is_on = True
        return "Light is ON"

    def turn_off(self) -> str:
        self.is_on = False
        return "Light is OFF"


class LightOnCommand:
    def __init__(self, light: Light):
        self.light = light

    def execute(self):
        return self.light.turn_on()


class LightOffCommand:
    def __init__(self, light: Light):
        self.light = light

    def execute(self):
        return self.light.turn_off()


class RemoteControl:
    pattern_category = PatternCategory.COMMAND

    def __init__(self):
        self.light = Light()
        self.commands = {"on": LightOnCommand(self.light), "off": LightOffCommand(self.light)}
        self.command = None

    def set_command(self, command) -> None:
        self.command = _resolve(self.commands, command, "command")

    def press_button(self):
        if self.command is None:
            raise RuntimeError("No command set")
        return self.command.execute()


class Drawing:
    def draw_circle(self, x, y) -> str:
        return f"Drawing circle at ({x}, {y})"

    def draw_rectangle(self, x, y) -> str:
        return f"Drawing rectangle at ({x}, {y})"


class DrawCircleCommand:
    def __init__(self, drawing: Drawing, x, y):
        self.drawing, self.x, self.y = drawing, x, y

    def execute(self):
        return self.drawing.draw_circle(self.x, self.y)


class DrawRectangleCommand:
    def __init__(self, drawing: Drawing, x, y):
        self.drawing, self.x, self.y = drawing, x, y

    def execute(self):
        return self.drawing.draw_rectangle(self.x, self.y)


class DrawingUser:
    """Invoker with history: every pressed command is kept so it can be undone."""

    pattern_category = PatternCategory.COMMAND
    shapes = {"circle": DrawCircleCommand, "rectangle": DrawRectangleCommand}

    def __init__(self):
        self.drawing = Drawing()
        self.command = None
        self.history: List[Any] = []

    def set_command(self, command, *coords) -> None:
        if isinstance(command, str):
            shape = _resolve(self.shapes, command, "shape")
            command = shape(self.drawing, *(coords or (0, 0)))
        self.command = command

    def press_button(self):
        if self.command is None:
            raise RuntimeError("No command set")
        self.history.append(self.command)
        return self.command.execute()

    def execute(self, command, *coords):
        self.set_command(command, *coords)
        return self.press_button()

    def undo(self) -> Optional[str]:
        if not self.history:
            return None
        self.history.pop()
        return "Undoing last command"


# ----------------------------------------------------------------- iterator

class CollectionIterator:
    pattern_category = PatternCategory.ITERATOR

    def __init__(self, items: Sequence[Any]):
        self._items = list(items)
        self._index = 0

    def has_next(self) -> bool:
        return self._index < len(self._items)

    def next(self):
        if not self.has_next():
            raise ExhaustedIteratorError(self._index)
        item = self._items[self._index]
        self._index += 1
        return item

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self):
        return self

    def __next__(self):
        if not self.has_next():
            raise StopIteration
        return self.next()


class Collection:
    def __init__(self, items: Iterable[Any] = ()):
        self.items: List[Any] = list(items)

    def add_item(self, item) -> None:
        self.items.append(item)

    def create_iterator(self) -> CollectionIterator:
        return CollectionIterator(self.items)


class ArrayIterator(CollectionIterator):
    """Walks the aggregate's own list, so items added later are still reached."""

    def __init__(self, items: List[Any]):
        self._items = items
        self._index = 0


class IterableCollection(Collection):
    def create_iterator(self) -> ArrayIterator:
        return ArrayIterator(self.items)


# ----------------------------------------------------------------- mediator

class ChatUser:
    def __init__(self, name: str):
        self.name = name
        self.received: List[str] = []

    def receive(self, message: str) -> str:
        self.received.append(message)
        return f"{self.name} received message: {message}"


class ChatRoom:
    pattern_category = PatternCategory.MEDIATOR

    def __init__(self):
        self._users: List[Any] = []

    @property
    def users(self) -> List[str]:
        return [str(getattr(u, "name", u)) for u in self._users]

    def _find(self, user):
        if not isinstance(user, str):
            return user
        for member in self._users:
            if getattr(member, "name", None) == user:
                return member
        raise ValueError(f"Unknown colleague: {user!r}")

    def register(self, user) -> None:
        if isinstance(user, str):
            user = ChatUser(user)
        self._users.append(user)

    def send(self, message: str, sender) -> List[Any]:
        sender = self._find(sender)
        return [user.receive(message) for user in list(self._users) if user is not sender]


class Aircraft:
    """Colleague that registers itself with the tower it is given."""

    def __init__(self, name: str, tower: "AirTrafficControl"):
        self.name = name
        self.tower = tower
        self.received: List[str] = []
        tower.register(self)

    def receive(self, message: str) -> str:
        self.received.append(message)
        return f"{self.name} received message: {message}"

    def request_landing(self) -> List[str]:
        return [f"{self.name} requesting landing...", self.tower.request_landing(self)]

    def __str__(self) -> str:
        return self.name


class AirTrafficControl(ChatRoom):
    """Tower granting landings to registered aircraft and relaying broadcasts."""

    @property
    def aircraft(self) -> List[str]:
        return self.users

    def register(self, aircraft) -> None:
        if isinstance(aircraft, str):
            Aircraft(aircraft, self)
        elif not any(member is aircraft for member in self._users):
            self._users.append(aircraft)

    def request_landing(self, aircraft) -> str:
        try:
            registered = self._find(aircraft)
        except ValueError:
            return f"Landing denied for {aircraft}"
        if any(member is registered for member in self._users):
            return f"Landing granted for {registered}"
        return f"Landing denied for {registered}"


# -------------------------------------------------------------------- state

class _Light:
    def __init__(self, name: str, next_name: str):
        self.name = name
        self.next_name = next_name


class TrafficLight:
    pattern_category = PatternCategory.STATE

    def __init__(self):
        self.states = {
            "red": _Light("red", "green"),
            "green": _Light("green", "yellow"),
            "yellow": _Light("yellow", "red"),
        }
        self.state = self.states["red"]

    def current_state(self) -> str:
        return self.state.name

    def change(self) -> str:
        self.state = self.states[self.state.next_name]
        return f"Changing light to {self.state.name}"


class _FanState:
    name = ""
    up: Optional[str] = None
    down: Optional[str] = None


class OffState(_FanState):
    name, up = "off", "low"


class LowState(_FanState):
    name, up, down = "low", "medium", "off"


class MediumState(_FanState):
    name, up, down = "medium", "high", "low"


class HighState(_FanState):
    name, down = "high", "medium"


class Fan:
    pattern_category = PatternCategory.STATE

    def __init__(self):
        self.states = {s.name: s() for s in (OffState, LowState, MediumState, HighState)}
        self.state = self.states["off"]

    def current_state(self) -> str:
        return self.state.name

    def increase_speed(self) -> Optional[str]:
        if self.state.up is None:
            return None
        self.state = self.states[self.state.up]
        return f"Increasing fan speed to {self.state.name}"

    def decrease_speed(self) -> Optional[str]:
        if self.state.down is None:
            return None
        self.state = self.states[self.state.down]
        return f"Decreasing fan speed to {self.state.name}"

    def change(self) -> str:
        """Pull the chain: step up one speed, or switch off from high."""
        if self.state.up is None:
            self.state = self.states["off"]
            return "Turning fan off"
        return self.increase_speed()


# ----------------------------------------------------------------- strategy

class CreditCardPayment:
    def pay(self, amount) -> str:
        return f"Paid ${amount} via Credit Card"


class PayPalPayment:
    def pay(self, amount) -> str:
        return f"Paid ${amount} via PayPal"


class BankTransferPayment:
    def pay(self, amount) -> str:
        return f"Paid ${amount} via Bank Transfer"


class ShoppingCart:
    pattern_category = PatternCategory.STRATEGY

    def __init__(self, strategy: str = "credit-card"):
        self.strategies = {
            "credit-card": CreditCardPayment(),
            "paypal": PayPalPayment(),
            "bank-transfer": BankTransferPayment(),
        }
        self.items: List[Dict[str, Any]] = []
        self.strategy = None
        self.set_strategy(strategy)

    def set_strategy(self, strategy) -> None:
        self.strategy = _resolve(self.strategies, strategy, "payment strategy")

    def add_item(self, name: str, price) -> None:
        self.items.append({"name": name, "price": price})

    def total(self):
        return sum(item["price"] for item in self.items)

    def execute(self):
        return self.strategy.pay(self.total())

    checkout = execute


class BubbleSort:
    def sort(self, array: List[Any]) -> List[Any]:
        data = list(array)
        for end in range(len(data) - 1, 0, -1):
            for i in range(end):
                if data[i] > data[i + 1]:
                    data[i], data[i + 1] = data[i + 1], data[i]
        return data


class QuickSort:
    def sort(self, array: List[Any]) -> List[Any]:
        if len(array) <= 1:
            return list(array)
        pivot, *rest = array
        return (
            self.sort([x for x in rest if x < pivot])
            + [pivot]
            + self.sort([x for x in rest if x >= pivot])
        )


class MergeSort:
    def sort(self, array: List[Any]) -> List[Any]:
        if len(array) <= 1:
            return list(array)
        mid = len(array) // 2
        left, right = self.sort(array[:mid]), self.sort(array[mid:])
        merged = []
        while left and right:
            merged.append(left.pop(0) if left[0] <= right[0] else right.pop(0))
        return merged + left + right


class Sorter:
    pattern_category = PatternCategory.STRATEGY
    sample = (5, 2, 9, 1, 5)

    def __init__(self, strategy: str = "bubble"):
        self.strategies = {"bubble": BubbleSort(), "quick": QuickSort(), "merge": MergeSort()}
        self.strategy = None
        self.set_strategy(strategy)

    def set_strategy(self, strategy) -> None:
        self.strategy = _resolve(self.strategies, strategy, "sorting strategy")

    def execute(self, array: Optional[Sequence[Any]] = None):
        return self.strategy.sort(list(self.sample if array is None else array))

    sort = execute


# ------------------------------------------------------------------ visitor

class TextElement:
    def __init__(self, content: str):
        self.content = content

    def accept(self, visitor):
        return visitor.visit_text(self)


class ImageElement:
    def __init__(self, url: str, caption: str):
        self.url = url
        self.caption = caption

    def accept(self, visitor):
        return visitor.visit_image(self)


class HTMLExportVisitor:
    def visit_text(self, text: TextElement) -> str:
        return f"<p>{text.content}</p>"

    def visit_image(self, image: ImageElement) -> str:
        return f'<img src="{image.url}" alt="{image.caption}" />'


class MarkdownExportVisitor:
    def visit_text(self, text: TextElement) -> str:
        return text.content

    def visit_image(self, image: ImageElement) -> str:
        return f"![{image.caption}]({image.url})"


class Document:
    pattern_category = PatternCategory.VISITOR
    visitors = {"html": HTMLExportVisitor(), "markdown": MarkdownExportVisitor()}

    def __init__(self):
        self.elements = [
            TextElement("This is a paragraph."),
            ImageElement("image.jpg", "A beautiful sunset"),
        ]

    def accept(self, visitor) -> List[Any]:
        visitor = _resolve(self.visitors, visitor, "visitor")
        return [element.accept(visitor) for element in self.elements]

    def export(self, fmt: str) -> str:
        return "\n".join(self.accept(fmt))


class CircleShape:
    def __init__(self, radius: float):
        self.radius = radius

    def accept(self, visitor):
        return visitor.visit_circle(self)


class RectangleShape:
    def __init__(self, width: float, height: float):
        self.width = width
        self.height = height

    def accept(self, visitor):
        return visitor.visit_rectangle(self)


class AreaCalculatorVisitor:
    def visit_circle(self, circle: CircleShape) -> float:
        return math.pi * circle.radius ** 2

    def visit_rectangle(self, rectangle: RectangleShape) -> float:
        return rectangle.width * rectangle.height


class ShapeCollection:
    pattern_category = PatternCategory.VISITOR
    visitors = {"area": AreaCalculatorVisitor()}

    def __init__(self):
        self.elements = [CircleShape(5), RectangleShape(4, 6)]

    def accept(self, visitor) -> List[Any]:
        visitor = _resolve(self.visitors, visitor, "visitor")
        return [element.accept(visitor) for element in self.elements]

    def total_area(self) -> float:
        return sum(self.accept("area"))
