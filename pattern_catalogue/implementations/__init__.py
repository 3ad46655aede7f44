"""Built-in catalogue: the reference implementation of every pattern example.

`register_defaults` registers them under their default contracts;
`default_registry` returns a new registry holding all of them.
"""
from typing import Any, Callable, Dict, List, Tuple

from ..categories import PatternCategory
from ..registry import PatternRegistry
from . import architectural, behavioral, creational, structural

Builtin = Tuple[PatternCategory, str, Callable[..., Any], Dict[str, Any], str]


def _connect():
    return creational.DatabaseConnection(creational.DEFAULT_DB_CONFIG)


def _collection_iterator(items):
    return behavioral.Collection(items).create_iterator()


def _array_iterator(items):
    collection = behavioral.IterableCollection()
    for item in items:
        collection.add_item(item)
    return collection.create_iterator()


def _tv_remote():
    return structural.AdvancedRemoteControl(structural.TV())


def _radio_remote():
    return structural.AdvancedRemoteControl(structural.Radio())


def builtin_entries() -> List[Builtin]:
    """(category, name, factory, config, description) for every built-in entry.

    Built on each call: singleton factories own their instance, so two registries
    never share one.
    """
    return [
        (PatternCategory.SINGLETON, "default", creational.singleton_factory(creational.DefaultInstance), {}, "Lazily created shared instance"),
        (PatternCategory.SINGLETON, "database-connection", creational.singleton_factory(_connect), {}, "One connection per process"),
        (PatternCategory.SINGLETON, "logger", creational.singleton_factory(creational.Logger), {}, "Shared log sink"),
        (PatternCategory.FACTORY, "animal", creational.AnimalFactory, {}, "Dogs and cats by kind"),
        (PatternCategory.FACTORY, "shape", creational.ShapeFactory, {}, "Circles, squares and triangles"),
        (PatternCategory.ABSTRACT_FACTORY, "modern-furniture", creational.ModernFurnitureFactory, {}, "Modern chair and sofa"),
        (PatternCategory.ABSTRACT_FACTORY, "vintage-furniture", creational.VintageFurnitureFactory, {}, "Vintage chair and sofa"),
        (PatternCategory.BUILDER, "meal", creational.MealBuilder, {}, "Burger, fries and drink, step by step"),
        (PatternCategory.OBJECT_POOL, "database-connection", creational.ConnectionPool, {}, "Reusable database connections"),
        (PatternCategory.OBJECT_POOL, "image", creational.ImagePool, {}, "Reusable image objects"),
        (PatternCategory.PROTOTYPE, "circle", creational.CirclePrototype, {}, "Cloneable circle"),
        (PatternCategory.PROTOTYPE, "vehicle", creational.Vehicle, {"type": "Car"}, "Cloneable vehicle"),
        (PatternCategory.OBSERVER, "stock-market", behavioral.StockMarket, {}, "Stock prices pushed to a display and a news feed"),
        (PatternCategory.OBSERVER, "weather-station", behavioral.WeatherStation, {}, "Temperatures pushed to a display and a mobile app"),
        (PatternCategory.COMMAND, "light-switch", behavioral.RemoteControl, {}, "Remote turning a light on and off"),
        (PatternCategory.COMMAND, "drawing", behavioral.DrawingUser, {}, "Drawing commands with undo"),
        (PatternCategory.ITERATOR, "collection", _collection_iterator, {"items": ("Item 1", "Item 2", "Item 3")}, "Iterator over a collection"),
        (PatternCategory.ITERATOR, "array", _array_iterator, {"items": ("Item 1", "Item 2", "Item 3")}, "Iterator sharing the aggregate's array"),
        (PatternCategory.MEDIATOR, "chat-room", behavioral.ChatRoom, {}, "Chat room relaying messages between users"),
        (PatternCategory.MEDIATOR, "air-traffic-control", behavioral.AirTrafficControl, {}, "Control tower granting landings to aircraft"),
        (PatternCategory.STATE, "traffic-light", behavioral.TrafficLight, {}, "Red, green, yellow cycle"),
        (PatternCategory.STATE, "fan", behavioral.Fan, {}, "Fan speeds"),
        (PatternCategory.STRATEGY, "payment", behavioral.ShoppingCart, {}, "Cart checkout by payment method"),
        (PatternCategory.STRATEGY, "sorting", behavioral.Sorter, {}, "Interchangeable sorting algorithms"),
        (PatternCategory.VISITOR, "document-export", behavioral.Document, {}, "HTML and Markdown export"),
        (PatternCategory.VISITOR, "shape-area", behavioral.ShapeCollection, {}, "Area calculation"),
        (PatternCategory.ADAPTER, "legacy-adaptee", structural.Adapter, {}, "Target request over a legacy interface"),
        (PatternCategory.ADAPTER, "data-fetching", structural.DataAdapter, {"api": "legacy"}, "Legacy and modern APIs behind one fetch"),
        (PatternCategory.BRIDGE, "remote-tv", _tv_remote, {}, "Remote control over a TV"),
        (PatternCategory.BRIDGE, "remote-radio", _radio_remote, {}, "Remote control over a radio"),
        (PatternCategory.COMPOSITE, "directory", structural.directory_tree, {}, "Directory tree"),
        (PatternCategory.COMPOSITE, "graphic", structural.picture, {}, "Picture made of graphics"),
        (PatternCategory.DECORATOR, "ui-component", structural.UIComponentKit, {}, "Border and color around a UI component"),
        (PatternCategory.DECORATOR, "coffee", structural.CoffeeKit, {}, "Milk and sugar on a coffee"),
        (PatternCategory.FACADE, "home-theater", structural.HomeTheaterFacade, {}, "One call to start a movie"),
        (PatternCategory.FACADE, "online-shopping", structural.OnlineShoppingFacade, {}, "One call to purchase"),
        (PatternCategory.MODULE, "counter", structural.counter_module, {}, "Revealing module counter"),
        (PatternCategory.MODULE, "namespace", structural.namespace_module, {}, "Namespace with a private helper"),
        (PatternCategory.PROXY, "virtual-image", structural.ImageProxy, {}, "Image loaded on first display"),
        (PatternCategory.PROXY, "protection-bank-account", structural.BankAccountProxy, {}, "Withdrawal limit in front of an account"),
        (PatternCategory.FLUX, "todo", architectural.FluxTodoApp, {}, "Dispatcher, todo store and view"),
        (PatternCategory.MVC, "todo", architectural.TodoController, {}, "Todo model, view and controller"),
        (PatternCategory.MVC, "product-store", architectural.ProductController, {}, "Online store product listing"),
        (PatternCategory.REDUX, "counter", architectural.counter_store, {}, "Counter reducer"),
        (PatternCategory.REDUX, "todo", architectural.TodoListStore, {}, "Todo list reducer"),
    ]


def register_defaults(registry: PatternRegistry) -> PatternRegistry:
    for category, name, factory, config, description in builtin_entries():
        registry.register(
            category,
            name,
            factory,
            config=config,
            description=description,
        )
    return registry


def default_registry() -> PatternRegistry:
    return register_defaults(PatternRegistry())


__all__ = ["builtin_entries", "register_defaults", "default_registry"]
