"""Built-in catalogue: every entry passes its default contract and reproduces the
documented example output."""
import math

import pytest

from pattern_catalogue.categories import PatternCategory
from pattern_catalogue.errors import ExhaustedIteratorError
from pattern_catalogue.implementations import behavioral, builtin_entries, default_registry
from pattern_catalogue.runner import ExampleRunner
from pattern_catalogue.verifier import Verifier

BUILTIN_KEYS = [(str(category), name) for category, name, *_ in builtin_entries()]


@pytest.mark.parametrize("category,name", BUILTIN_KEYS)
def test_builtin_entry_passes_default_contract(catalogue, category, name):
    report = Verifier(catalogue).verify(category, name)
    failed = {r.description: r.detail for r in report.failed}
    assert report.passed, f"{category}/{name} failed: {failed}"


def test_catalogue_covers_every_category(catalogue):
    assert catalogue.categories() == list(PatternCategory)
    assert len(catalogue) == len(BUILTIN_KEYS) == 45


def test_registries_do_not_share_singletons():
    first, second = default_registry(), default_registry()
    logger_a = first.get("singleton", "logger").instantiate()
    logger_b = second.get("singleton", "logger").instantiate()
    assert logger_a is not logger_b
    assert first.get("singleton", "logger").instantiate() is logger_a


def _run(catalogue, category, name, script):
    run = ExampleRunner(catalogue).run(category, name, script)
    assert run.ok, f"{category}/{name} stopped at step {run.failed_step}: {run.error!r}"
    return list(run.outputs)


def test_singleton_logger_accumulates(catalogue):
    registry_logger = catalogue.get("singleton", "logger")
    registry_logger.instantiate().log("Message 1")
    outputs = _run(catalogue, "singleton", "logger", [("log", "Message 2"), "display_logs"])
    assert outputs == ["Log: Message 2", ["Message 1", "Message 2"]]


def test_factory_examples(catalogue):
    assert _run(catalogue, "factory", "shape", [("draw", "triangle", 3, 6)]) == [
        "Drawing a triangle with base 3 and height 6"
    ]
    animal = catalogue.get("factory", "animal").instantiate()
    assert animal.create("dog", "Buddy").speak() == "Woof!"
    assert animal.create("cat", "Whiskers").speak() == "Meow!"
    with pytest.raises(ValueError):
        animal.create("parrot")


def test_abstract_factory_furnish(catalogue):
    assert _run(catalogue, "abstract-factory", "vintage-furniture", ["furnish"]) == [
        ["Sitting on a vintage chair", "Sitting on a vintage sofa"]
    ]


def test_builder_partial_meal(catalogue):
    outputs = _run(
        catalogue, "builder", "meal",
        [("add_burger", "Cheeseburger"), ("add_fries", "Curly Fries"), "display"],
    )
    assert outputs[-1] == ["Burger: Cheeseburger", "Fries: Curly Fries", "Drink: None"]


def test_connection_pool_reuses_connection(catalogue):
    pool = catalogue.get("object-pool", "database-connection").instantiate()
    assert pool.query("SELECT * FROM users") == "Executing query: SELECT * FROM users"
    assert pool.query("INSERT INTO orders ...") == "Executing query: INSERT INTO orders ..."
    assert pool.created == 1
    assert pool.log.count("Creating a new database connection") == 1


def test_image_pool_rebinds_source(catalogue):
    pool = catalogue.get("object-pool", "image").instantiate()
    first = pool.get_image("image1.jpg")
    pool.release_image(first)
    second = pool.get_image("image2.jpg")
    assert second is first
    assert second.display() == "Displaying image: image2.jpg"


def test_observer_weather_station(catalogue):
    outputs = _run(
        catalogue, "observer", "weather-station",
        [("subscribe", "display"), ("subscribe", "mobile-app"), ("set_temperature", 25)],
    )
    assert outputs[-1] == [
        "Current temperature: 25°C",
        "Mobile app notification: Temperature is 25°C",
    ]


def test_command_examples(catalogue):
    assert _run(
        catalogue, "command", "light-switch",
        [("set_command", "on"), "press_button", ("set_command", "off"), "press_button"],
    ) == [None, "Light is ON", None, "Light is OFF"]
    assert _run(
        catalogue, "command", "drawing",
        [("execute", "circle", 10, 20), ("execute", "rectangle", 30, 40), "undo", "undo", "undo"],
    ) == [
        "Drawing circle at (10, 20)",
        "Drawing rectangle at (30, 40)",
        "Undoing last command",
        "Undoing last command",
        None,
    ]


def test_collection_iterator_supports_for_loops(catalogue):
    iterator = catalogue.get("iterator", "collection").instantiate()
    assert list(iterator) == ["Item 1", "Item 2", "Item 3"]
    assert not iterator.has_next()


def test_array_iterator_sees_items_added_after_creation():
    collection = behavioral.IterableCollection(["Item 1", "Item 2"])
    iterator = collection.create_iterator()
    collection.add_item("Item 3")
    assert len(iterator) == 3
    assert [iterator.next() for _ in range(3)] == ["Item 1", "Item 2", "Item 3"]
    with pytest.raises(ExhaustedIteratorError):
        iterator.next()


def test_array_iterator_example(catalogue):
    assert _run(catalogue, "iterator", "array", ["has_next", "next", "next", "next", "has_next"]) == [
        True, "Item 1", "Item 2", "Item 3", False,
    ]


def test_air_traffic_control_grants_registered_aircraft(catalogue):
    assert _run(
        catalogue, "mediator", "air-traffic-control",
        [("register", "Flight 123"), ("register", "Flight 456"), "aircraft",
         ("request_landing", "Flight 123"), ("request_landing", "Flight 789"),
         ("send", "Runway 2 closed", "Flight 456")],
    ) == [
        None, None, ["Flight 123", "Flight 456"],
        "Landing granted for Flight 123", "Landing denied for Flight 789",
        ["Flight 123 received message: Runway 2 closed"],
    ]


def test_aircraft_registers_itself_with_the_tower():
    tower = behavioral.AirTrafficControl()
    flight = behavioral.Aircraft("Flight 123", tower)
    tower.register(flight)
    assert tower.aircraft == ["Flight 123"]
    assert flight.request_landing() == ["Flight 123 requesting landing...", "Landing granted for Flight 123"]
    stranger = behavioral.Aircraft("Flight 456", behavioral.AirTrafficControl())
    assert tower.request_landing(stranger) == "Landing denied for Flight 456"


def test_state_examples(catalogue):
    assert _run(catalogue, "state", "traffic-light", ["change", "change", "change"]) == [
        "Changing light to green",
        "Changing light to yellow",
        "Changing light to red",
    ]
    assert _run(
        catalogue, "state", "fan",
        ["increase_speed", "increase_speed", "decrease_speed", "decrease_speed", "decrease_speed"],
    ) == [
        "Increasing fan speed to low",
        "Increasing fan speed to medium",
        "Decreasing fan speed to low",
        "Decreasing fan speed to off",
        None,
    ]


def test_strategy_examples(catalogue):
    assert _run(
        catalogue, "strategy", "payment",
        [("add_item", "Item 3", 25), ("add_item", "Item 4", 40), ("set_strategy", "paypal"), "checkout"],
    )[-1] == "Paid $65 via PayPal"
    for algorithm in ("bubble", "quick", "merge"):
        assert _run(
            catalogue, "strategy", "sorting", [("set_strategy", algorithm), ("sort", [8, 3, 7, 2, 6])]
        )[-1] == [2, 3, 6, 7, 8], algorithm


def test_visitor_examples(catalogue):
    assert _run(catalogue, "visitor", "document-export", [("export", "markdown")]) == [
        "This is a paragraph.\n![A beautiful sunset](image.jpg)"
    ]
    area = _run(catalogue, "visitor", "shape-area", ["total_area"])[0]
    assert area == pytest.approx(math.pi * 25 + 24)


def test_adapter_dispatches_on_declared_kind(catalogue):
    assert _run(catalogue, "adapter", "data-fetching", ["request", ("use", "modern"), "request"]) == [
        {"result": "Legacy Data"},
        "modern",
        {"result": "Modern Data"},
    ]


def test_bridge_radio(catalogue):
    assert _run(catalogue, "bridge", "remote-radio", ["toggle_power", ("tune", 101.5), "toggle_power"]) == [
        "Power ON",
        "Radio frequency set to 101.5",
        "Power OFF",
    ]


def test_composite_directory(catalogue):
    assert _run(catalogue, "composite", "directory", ["display"]) == [
        ["Directory: root", "Directory: dir1", "Directory: dir2", "File: file1.txt", "File: file2.txt"]
    ]


def test_decorator_examples(catalogue):
    assert _run(catalogue, "decorator", "ui-component", [("compose", "border", "color")]) == [
        "Color(red) + Border + Basic UI Component"
    ]
    assert _run(catalogue, "decorator", "coffee", ["compose", ("compose", "milk"), ("compose", "milk", "sugar")]) == [5, 7, 8]


def test_facade_home_theater_calls(catalogue):
    facade = catalogue.get("facade", "home-theater").instantiate()
    facade.watch_movie("Inception")
    assert facade.calls[-1] == "Playing movie: Inception"
    assert len(facade.calls) == 6


def test_module_counter_hides_count(catalogue):
    assert _run(catalogue, "module", "counter", ["increment", "increment", "decrement", "get_count"])[-1] == 1
    run = ExampleRunner(catalogue).run("module", "counter", ["count"])
    assert run.error is not None and run.error.code == "unknown_operation"


def test_proxy_examples(catalogue):
    proxy = catalogue.get("proxy", "virtual-image").instantiate()
    assert proxy.real_subject is None, "image must not load before the first display"
    assert proxy.display() == "Displaying image: nature.jpg"
    proxy.display()
    assert proxy.log == ["Loading image: nature.jpg"]
    assert _run(
        catalogue, "proxy", "protection-bank-account",
        ["get_balance", ("withdraw", 800), ("withdraw", 1500), "get_balance"],
    ) == [2000, "Withdrew $800", "Withdrawal limit exceeded", 1200]


def test_architectural_examples(catalogue):
    assert _run(catalogue, "flux", "todo", [("add_todo", "Buy groceries")]) == [
        "Todos: ['Buy groceries']"
    ]
    assert _run(catalogue, "mvc", "todo", [("add_todo", "Buy groceries"), ("add_todo", "Finish project")])[-1] == (
        "- Buy groceries\n- Finish project"
    )
    store = _run(
        catalogue, "mvc", "product-store",
        ["update_view",
         {"operation": "add_product", "args": {"name": "Smartphone", "price": 500}},
         {"operation": "add_product", "args": {"name": "Laptop", "price": 1000}},
         "update_view"],
    )
    assert store[0] == "(no products)"
    assert store[-1] == "Smartphone: $500\nLaptop: $1000"
    assert _run(
        catalogue, "redux", "counter",
        [("dispatch", "INCREMENT"), ("dispatch", "INCREMENT"), ("dispatch", "DECREMENT"), "get_state"],
    ) == [1, 2, 1, 1]
    todos = _run(catalogue, "redux", "todo", [("add_todo", "Buy groceries"), ("toggle_todo", 0), "render"])
    assert todos[-1] == ["[x] Buy groceries"]
