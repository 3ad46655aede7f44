"""Structural reference implementations: adapter, bridge, composite, decorator,
facade, module, proxy."""
from types import SimpleNamespace
from typing import Any, Callable, Dict, List, Optional, Tuple

from ..categories import PatternCategory


# ------------------------------------------------------------------ adapter

class Adaptee:
    def specific_request(self) -> str:
        return "Adaptee specific request"


class Adapter:
    pattern_category = PatternCategory.ADAPTER

    def __init__(self, adaptee: Optional[Adaptee] = None):
        self.adaptee = adaptee or Adaptee()

    def request(self) -> List[str]:
        return ["Adapter is translating request...", self.adaptee.specific_request()]


class LegacyApi:
    api_kind = "legacy"

    def fetch_data(self) -> Dict[str, Any]:
        return {"result": "Legacy Data"}


class ModernApi:
    api_kind = "modern"

    def fetch(self) -> Dict[str, Any]:
        return {"data": "Modern Data"}


class DataAdapter:
    """Presents any supported API as `{"result": ...}`.

    The wrapped API is picked by its declared `api_kind`, not by its class.
    """

    pattern_category = PatternCategory.ADAPTER
    apis = {"legacy": LegacyApi, "modern": ModernApi}

    def __init__(self, api: str = "legacy"):
        self.adaptee = None
        self.use(api)

    def use(self, api) -> str:
        if isinstance(api, str):
            if api not in self.apis:
                raise ValueError(f"Unknown API kind: {api!r}")
            api = self.apis[api]()
        self.adaptee = api
        return api.api_kind

    def request(self) -> Dict[str, Any]:
        kind = getattr(self.adaptee, "api_kind", None)
        if kind == "legacy":
            return {"result": self.adaptee.fetch_data()["result"]}
        if kind == "modern":
            return {"result": self.adaptee.fetch()["data"]}
        raise ValueError(f"Unsupported API kind: {kind!r}")

    fetch_data = request


# ------------------------------------------------------------------- bridge

class Device:
    def __init__(self):
        self.status = False

    def is_enabled(self) -> bool:
        return self.status

    def enable(self) -> None:
        self.status = True

    def disable(self) -> None:
        self.status = False


class TV(Device):
    def __init__(self):
        super().__init__()
        self.channel = 1

    def tune(self, channel) -> str:
        self.channel = channel
        return f"TV channel set to {channel}"


class Radio(Device):
    def __init__(self):
        super().__init__()
        self.frequency = 90.0

    def tune(self, frequency) -> str:
        self.frequency = frequency
        return f"Radio frequency set to {frequency}"


class AdvancedRemoteControl:
    pattern_category = PatternCategory.BRIDGE

    def __init__(self, implementation: Device):
        self.implementation = implementation

    def toggle_power(self) -> str:
        if self.implementation.is_enabled():
            self.implementation.disable()
            return "Power OFF"
        self.implementation.enable()
        return "Power ON"

    operation = toggle_power

    def tune(self, value):
        return self.implementation.tune(value)


# ---------------------------------------------------------------- composite

def _lines(result) -> List[Any]:
    return list(result) if isinstance(result, list) else [result]


class File:
    def __init__(self, name: str):
        self.name = name

    def operation(self) -> List[str]:
        return [f"File: {self.name}"]


class Directory:
    pattern_category = PatternCategory.COMPOSITE

    def __init__(self, name: str):
        self.name = name
        self.children: List[Any] = []

    def add(self, node) -> None:
        if isinstance(node, str):
            node = File(node)
        self.children.append(node)

    def remove(self, node) -> None:
        for i, child in enumerate(self.children):
            if child is node or (isinstance(node, str) and getattr(child, "name", None) == node):
                del self.children[i]
                return

    def operation(self) -> List[Any]:
        lines = [f"Directory: {self.name}"]
        for child in list(self.children):
            lines.extend(_lines(child.operation()))
        return lines

    display = operation


class Line:
    def operation(self) -> str:
        return "Drawing Line"


class Circle:
    def operation(self) -> str:
        return "Drawing Circle"


class Picture:
    pattern_category = PatternCategory.COMPOSITE
    graphics = {"line": Line, "circle": Circle}

    def __init__(self):
        self.children: List[Any] = []

    def add(self, graphic) -> None:
        if isinstance(graphic, str):
            graphic = self.graphics[graphic]()
        self.children.append(graphic)

    def remove(self, graphic) -> None:
        for i, child in enumerate(self.children):
            if child is graphic:
                del self.children[i]
                return

    def operation(self) -> List[Any]:
        lines = ["Drawing Picture:"]
        for child in list(self.children):
            lines.extend(_lines(child.operation()))
        return lines

    draw = operation


def directory_tree() -> Directory:
    root = Directory("root")
    dir1 = Directory("dir1")
    dir1.add(Directory("dir2"))
    root.add(dir1)
    root.add(File("file1.txt"))
    root.add(File("file2.txt"))
    return root


def picture() -> Picture:
    pic = Picture()
    pic.add(Line())
    pic.add(Circle())
    return pic


# ---------------------------------------------------------------- decorator

class UIComponent:
    def render(self) -> str:
        return "Basic UI Component"


class BorderDecorator:
    def __init__(self, component):
        self.component = component

    def render(self) -> str:
        return f"Border + {self.component.render()}"


class ColorDecorator:
    def __init__(self, component, color: str):
        self.component = component
        self.color = color

    def render(self) -> str:
        return f"Color({self.color}) + {self.component.render()}"


class Coffee:
    def cost(self):
        return 5


class MilkDecorator:
    def __init__(self, coffee):
        self.coffee = coffee

    def cost(self):
        return self.coffee.cost() + 2


class SugarDecorator:
    def __init__(self, coffee):
        self.coffee = coffee

    def cost(self):
        return self.coffee.cost() + 1


class _DecoratorKit:
    """A base component plus an ordered list of named decorators."""

    pattern_category = PatternCategory.DECORATOR
    available: Dict[str, Callable[[Any], Any]] = {}

    def __init__(self, names: Optional[Tuple[str, ...]] = None):
        self.names = tuple(names if names is not None else self.available)
        self.decorators = tuple(self.available[n] for n in self.names)

    def base(self):
        raise NotImplementedError

    def evaluate(self, component):
        raise NotImplementedError

    def compose(self, *names: str):
        """Evaluate the base wrapped by the named decorators, innermost first."""
        component = self.base()
        for name in names:
            component = self.available[name](component)
        return self.evaluate(component)


class UIComponentKit(_DecoratorKit):
    available = {
        "border": BorderDecorator,
        "color": lambda component: ColorDecorator(component, "red"),
    }

    def base(self):
        return UIComponent()

    def evaluate(self, component) -> str:
        return component.render()


class CoffeeKit(_DecoratorKit):
    available = {"milk": MilkDecorator, "sugar": SugarDecorator}

    def base(self):
        return Coffee()

    def evaluate(self, component):
        return component.cost()


# ------------------------------------------------------------------- facade

class _Subsystem:
    def __init__(self, calls: List[str]):
        self._calls = calls

    def _say(self, line: str) -> str:
        self._calls.append(line)
        return line


class DVDPlayer(_Subsystem):
    def on(self):
        return self._say("DVD Player is on")

    def play(self, movie):
        return self._say(f"Playing movie: {movie}")

    def off(self):
        return self._say("DVD Player is off")


class SoundSystem(_Subsystem):
    def on(self):
        return self._say("Sound System is on")

    def set_volume(self, volume):
        return self._say(f"Setting volume to {volume}")

    def off(self):
        return self._say("Sound System is off")


class Projector(_Subsystem):
    def on(self):
        return self._say("Projector is on")

    def set_input(self, source):
        return self._say(f"Setting input to {source}")

    def off(self):
        return self._say("Projector is off")


class HomeTheaterFacade:
    pattern_category = PatternCategory.FACADE
    operations = {"watch_movie": ("Inception",), "end_movie": ()}

    def __init__(self):
        self.calls: List[str] = []
        self.dvd_player = DVDPlayer(self.calls)
        self.sound_system = SoundSystem(self.calls)
        self.projector = Projector(self.calls)

    def watch_movie(self, movie: str) -> List[str]:
        return [
            "Get ready to watch a movie...",
            self.projector.on(),
            self.projector.set_input("DVD"),
            self.sound_system.on(),
            self.sound_system.set_volume(10),
            self.dvd_player.on(),
            self.dvd_player.play(movie),
        ]

    def end_movie(self) -> List[str]:
        return [
            "Shutting down the theater...",
            self.dvd_player.off(),
            self.sound_system.off(),
            self.projector.off(),
        ]


class InventorySystem(_Subsystem):
    def check_stock(self, item):
        return self._say(f"Checking stock for {item}")

    def reserve(self, item):
        return self._say(f"Reserving {item}")


class PaymentGateway(_Subsystem):
    def process_payment(self, amount):
        return self._say(f"Processing payment of ${amount}")


class ShippingService(_Subsystem):
    def ship(self, item):
        return self._say(f"Shipping {item}")


class OnlineShoppingFacade:
    pattern_category = PatternCategory.FACADE
    operations = {"purchase": ("Smartphone", 500)}

    def __init__(self):
        self.calls: List[str] = []
        self.inventory = InventorySystem(self.calls)
        self.payment = PaymentGateway(self.calls)
        self.shipping = ShippingService(self.calls)

    def purchase(self, item: str, amount) -> List[str]:
        return [
            "Initiating online shopping...",
            self.inventory.check_stock(item),
            self.inventory.reserve(item),
            self.payment.process_payment(amount),
            self.shipping.ship(item),
            f"Successfully purchased {item} for ${amount}",
        ]


# ------------------------------------------------------------------- module

def counter_module(start: int = 0) -> SimpleNamespace:
    """Revealing module: `count` lives in the closure, only the functions are public."""
    count = start

    def increment() -> int:
        nonlocal count
        count += 1
        return count

    def decrement() -> int:
        nonlocal count
        count -= 1
        return count

    def get_count() -> int:
        return count

    public = {"increment": increment, "decrement": decrement, "get_count": get_count}
    return SimpleNamespace(
        pattern_category=PatternCategory.MODULE,
        public_members=tuple(public),
        **public,
    )


def namespace_module() -> SimpleNamespace:
    def private_function() -> str:
        return "This is a private function."

    def public_function_1() -> str:
        return "Public function 1."

    def public_function_2() -> List[str]:
        return [private_function(), "Public function 2."]

    public = {"public_function_1": public_function_1, "public_function_2": public_function_2}
    return SimpleNamespace(
        pattern_category=PatternCategory.MODULE,
        public_members=tuple(public),
        **public,
    )


# -------------------------------------------------------------------- proxy

class Image:
    def __init__(self, filename: str, log: List[str]):
        self.filename = filename
        log.append(f"Loading image: {filename}")

    def display(self) -> str:
        return f"Displaying image: {self.filename}"


class ImageProxy:
    """Virtual proxy: the image is loaded on the first request."""

    pattern_category = PatternCategory.PROXY

    def __init__(self, filename: str = "nature.jpg"):
        self.filename = filename
        self.real_subject: Optional[Image] = None
        self.log: List[str] = []

    def request(self) -> str:
        if self.real_subject is None:
            self.real_subject = Image(self.filename, self.log)
        return self.real_subject.display()

    display = request


class BankAccount:
    def __init__(self, balance):
        self.balance = balance

    def get_balance(self):
        return self.balance

    def withdraw(self, amount) -> str:
        if self.balance >= amount:
            self.balance -= amount
            return f"Withdrew ${amount}"
        return "Insufficient balance"


class BankAccountProxy:
    """Protection proxy: single withdrawals above `limit` never reach the account."""

    pattern_category = PatternCategory.PROXY

    def __init__(self, balance=2000, limit=1000):
        self.real_subject = BankAccount(balance)
        self.limit = limit

    def request(self):
        return self.real_subject.get_balance()

    get_balance = request

    def withdraw(self, amount) -> str:
        if amount > self.limit:
            return "Withdrawal limit exceeded"
        return self.real_subject.withdraw(amount)
