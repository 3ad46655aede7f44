"""Default contracts for the creational categories."""
import copy

from ..categories import PatternCategory
from ..contract import CheckOutcome, Contract, build_contract, check, expect

_MUTABLE = (list, dict, set, bytearray)


@check("factory returns the same instance on every call")
def singleton_identity(instances):
    for attempt in range(1, 3):
        again = instances.fresh()
        if again is not instances.primary:
            return CheckOutcome.fail(
                f"call {attempt + 1} returned a different {type(again).__name__} object"
            )
    return CheckOutcome.ok()


@check("every advertised kind builds a product")
def factory_builds_every_kind(instances):
    factory = instances.primary
    kinds = tuple(factory.kinds)
    expect(kinds, "factory advertises no kinds")
    for kind in kinds:
        product = factory.create(kind)
        expect(product is not None, f"kind '{kind}' built None")


@check("distinct kinds build distinct product types")
def factory_distinct_products(instances):
    factory = instances.primary
    types = {}
    for kind in factory.kinds:
        product_type = type(factory.create(kind))
        if product_type in types:
            return CheckOutcome.fail(f"'{kind}' and '{types[product_type]}' build the same type")
        types[product_type] = kind
    return CheckOutcome.ok()


@check("unknown kinds are rejected instead of defaulted")
def factory_rejects_unknown(instances):
    try:
        product = instances.primary.create("__no-such-kind__")
    except Exception:
        return CheckOutcome.ok()
    return CheckOutcome.fail(f"unknown kind built {product!r}")


@check("all products of a factory belong to its family")
def abstract_factory_family(instances):
    factory = instances.primary
    products = tuple(factory.products)
    expect(products, "factory declares no products")
    for product_name in products:
        product = getattr(factory, f"create_{product_name}")()
        family = getattr(product, "family", None)
        expect(
            family == factory.family,
            f"{product_name} belongs to family {family!r}, factory is {factory.family!r}",
        )


@check("each create call builds a new product")
def abstract_factory_new_products(instances):
    factory = instances.primary
    for product_name in factory.products:
        create = getattr(factory, f"create_{product_name}")
        expect(create() is not create(), f"create_{product_name} returned a shared object")


@check("an untouched builder still builds a product")
def builder_builds(instances):
    expect(instances.fresh().build() is not None, "build() returned None")


@check("separate builders produce separate products")
def builder_independent(instances):
    first = instances.fresh().build()
    second = instances.fresh().build()
    expect(first is not second, "two builders returned the same product object")


@check("acquiring more objects than pooled creates new ones")
def pool_creates_on_demand(instances):
    pool = instances.fresh()
    pooled = pool.available
    created = pool.created
    acquired = [pool.acquire() for _ in range(pooled + 1)]
    expect(
        pool.created == created + 1,
        f"acquiring {pooled + 1} with {pooled} pooled created {pool.created - created}",
    )
    expect(len({id(o) for o in acquired}) == len(acquired), "acquire handed out one object twice")


@check("a released object is reused by the next acquire")
def pool_reuses_released(instances):
    pool = instances.fresh()
    obj = pool.acquire()
    pool.release(obj)
    created = pool.created
    again = pool.acquire()
    expect(again is obj, "acquire after release returned another object")
    expect(pool.created == created, "acquire after release constructed a new object")


@check("released objects beyond max_size are discarded")
def pool_bounded(instances):
    pool = instances.fresh()
    limit = pool.max_size
    objs = [pool.acquire() for _ in range(limit + 2)]
    for obj in objs:
        pool.release(obj)
    expect(pool.available == limit, f"pool retains {pool.available} objects, max_size is {limit}")


@check("after max_size objects cycle through the pool, one more acquire constructs")
def pool_overflow_constructs(instances):
    pool = instances.fresh()
    limit = pool.max_size
    objs = [pool.acquire() for _ in range(limit)]
    for obj in objs:
        pool.release(obj)
    created = pool.created
    reused = [pool.acquire() for _ in range(limit)]
    expect(pool.created == created, f"{pool.created - created} of {limit} acquires constructed")
    expect({id(o) for o in reused} == {id(o) for o in objs}, "pooled objects were not reused")
    pool.acquire()
    expect(pool.created == created + 1, "acquire beyond max_size did not construct")


@check("releasing an object twice pools it once")
def pool_double_release(instances):
    pool = instances.fresh()
    if pool.max_size < 2:
        return
    obj = pool.acquire()
    pool.release(obj)
    pool.release(obj)
    first, second = pool.acquire(), pool.acquire()
    expect(first is not second, "acquire handed out a twice-released object twice")


@check("a clone is a distinct object with equal state")
def prototype_clone_equal(instances):
    prototype = instances.primary
    clone = prototype.clone()
    expect(clone is not prototype, "clone() returned the prototype itself")
    expect(
        type(clone) is type(prototype),
        f"clone is {type(clone).__name__}, prototype is {type(prototype).__name__}",
    )
    expect(_state(clone) == _state(prototype), "clone state differs from prototype")


@check("a clone shares no mutable state with its prototype")
def prototype_clone_independent(instances):
    prototype = instances.fresh()
    before = copy.deepcopy(_state(prototype))
    clone = prototype.clone()
    for key, value in _state(clone).items():
        if isinstance(value, _MUTABLE):
            expect(value is not _state(prototype).get(key), f"'{key}' is shared with the prototype")
        setattr(clone, key, object())
    expect(_state(prototype) == before, "mutating the clone changed the prototype")


def _state(obj) -> dict:
    return dict(getattr(obj, "__dict__", {}))


CONTRACTS = {
    PatternCategory.SINGLETON: Contract(PatternCategory.SINGLETON, (singleton_identity,)),
    PatternCategory.FACTORY: build_contract(
        PatternCategory.FACTORY,
        (factory_builds_every_kind, factory_distinct_products, factory_rejects_unknown),
    ),
    PatternCategory.ABSTRACT_FACTORY: build_contract(
        PatternCategory.ABSTRACT_FACTORY, (abstract_factory_family, abstract_factory_new_products)
    ),
    PatternCategory.BUILDER: build_contract(
        PatternCategory.BUILDER, (builder_builds, builder_independent)
    ),
    PatternCategory.OBJECT_POOL: build_contract(
        PatternCategory.OBJECT_POOL,
        (pool_creates_on_demand, pool_reuses_released, pool_bounded, pool_overflow_constructs,
         pool_double_release),
    ),
    PatternCategory.PROTOTYPE: build_contract(
        PatternCategory.PROTOTYPE, (prototype_clone_equal, prototype_clone_independent)
    ),
}
