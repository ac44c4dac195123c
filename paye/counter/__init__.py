from paye.counter.store import CounterStore, NullCounterStore, RedisCounterStore, build_counter_store

__all__ = ["CounterStore", "NullCounterStore", "RedisCounterStore", "build_counter_store"]
