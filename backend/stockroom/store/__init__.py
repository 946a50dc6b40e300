from stockroom.store.reducer import reduce
from stockroom.store.store import Store

__all__ = ["Store", "reduce"]
