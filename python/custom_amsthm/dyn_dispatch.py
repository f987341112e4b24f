from typing import Any, Callable, Concatenate, Dict, Generic, ParamSpec, Type, TypeVar

T = TypeVar("T")
P = ParamSpec("P")
TReturn = TypeVar("TReturn")


class DynDispatch(Generic[P, TReturn]):
    """Maps pandoc node types to handler functions.

    A node's exact type is looked up first, then the registered types are tried in registration order with isinstance(),
    so a handler for an abstract type like `Block` catches every block without a more specific handler.
    `DynDispatch[[X], R]` holds handlers of the form `Callable[[Node, X], R]`."""

    # Handlers are only ever stored against the type they accept,
    # so storing them as taking Any loses nothing.
    _table: Dict[Type[Any], Callable[Concatenate[Any, P], TReturn]]

    def __init__(self) -> None:
        self._table = {}

    def register_handler(
        self,
        t: Type[T],
        f: Callable[Concatenate[T, P], TReturn],
    ) -> None:
        if t in self._table:
            raise RuntimeError(f"Conflict: registered two handlers for {t}")
        self._table[t] = f

    def get_handler(self, obj: T) -> Callable[Concatenate[T, P], TReturn] | None:
        exact = self._table.get(type(obj))
        if exact is not None:
            return exact
        return next((f for t, f in self._table.items() if isinstance(obj, t)), None)
