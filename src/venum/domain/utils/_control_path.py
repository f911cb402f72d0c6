"""
State-based method dispatch ("control paths") via decorators.

A class declares a *base* method whose signature is canonical. Several
implementations ("control paths") are then registered for it, each keyed by

    (ClassName, MethodName, State)

and at call time a dispatcher installed on the class reads the instance's
state attribute and forwards the call to the implementation registered for
that state.

Intended use
------------
The tensor layer registers one implementation per memory `Layout`: a linear
scan for contiguous tensors and an index-generator walk for strided ones.
Callers only ever see the single public method.

Important notes
---------------
- Registering the first control path for a method replaces the method on the
  class with a dispatcher; later registrations only add to the registry.
- Implementations are called like instance methods: ``impl(self, *args, **kw)``.
- Each builder owns its own registry; builders never share paths.
"""

from collections import namedtuple
from functools import wraps
from typing import Any, Callable, Dict, Hashable, Optional, Type, Union

from typing_extensions import ParamSpec, TypeVar

P = ParamSpec("P")
R = TypeVar("R")

PathKey = namedtuple("PathKey", ["class_name", "method_name", "state"])
"""Registry key identifying one control path."""

TrapHook = Callable[[Callable[..., Any], Hashable], None]


def create_path_builder(
    state_attribute: str = "_state",
) -> Callable[
    [Type, Callable[P, R], Hashable, Optional[Union[BaseException, TrapHook]]],
    Callable[[Callable[P, R]], Callable[P, R]],
]:
    """
    Create a decorator factory that registers state-specific implementations.

    Usage::

        layout_paths = create_path_builder("_state")

        class Mixin:
            def data(self): ...

        @layout_paths(Mixin, Mixin.data, Layout.CONTIGUOUS)
        def data_fast(self): ...

        @layout_paths(Mixin, Mixin.data, Layout.STRIDED)
        def data_slow(self): ...

    Parameters
    ----------
    state_attribute : str, optional
        Name of the instance attribute (usually a property) holding the
        dispatch state. Defaults to ``"_state"``.

    Returns
    -------
    Callable
        ``templator(cls, method, state, trap_exception=None)`` returning a
        decorator that registers the decorated function for ``state``.
    """
    registry: Dict[PathKey, Callable[..., Any]] = {}

    def templator(
        cls: Type,
        method: Callable[P, R],
        state: Hashable,
        trap_exception: Optional[Union[BaseException, TrapHook]] = None,
    ) -> Callable[[Callable[P, R]], Callable[P, R]]:
        """
        Build a decorator registering one control path of `cls.method`.

        Parameters
        ----------
        cls : Type
            Class on which the dispatcher is installed.
        method : Callable
            The base method; its name and metadata are kept by the dispatcher.
        state : Hashable
            State value selecting the decorated implementation.
        trap_exception : Optional[Union[BaseException, Callable]]
            What to do when no path matches the runtime state. None raises
            `NotImplementedError`; an exception instance is raised as is; a
            callable is invoked as ``trap_exception(method, state)`` before
            `NotImplementedError` is raised.

        Raises
        ------
        TypeError
            If `state` is not hashable.
        """
        try:
            hash(state)
        except TypeError:
            raise TypeError(f"Control-path state must be hashable, got {state!r}") from None

        method_name = method.__name__
        key = PathKey(cls.__name__, method_name, state)

        def decorator(sub_method: Callable[P, R]) -> Callable[P, R]:
            registry[key] = sub_method

            @wraps(method)
            def dispatcher(self: Any, *args: Any, **kwargs: Any) -> Any:
                try:
                    current = getattr(self, state_attribute)
                except AttributeError:
                    raise NotImplementedError(
                        f"{type(self).__name__} has no {state_attribute!r} "
                        f"attribute to dispatch {method_name!r} on"
                    ) from None

                impl = registry.get(PathKey(cls.__name__, method_name, current))
                if impl is not None:
                    return impl(self, *args, **kwargs)

                if isinstance(trap_exception, BaseException):
                    raise trap_exception
                if trap_exception is not None:
                    trap_exception(method, current)
                raise NotImplementedError(
                    f"Missing control path (state={current!r}) for "
                    f"{cls.__name__}.{method_name}"
                )

            setattr(cls, method_name, dispatcher)
            return sub_method

        return decorator

    return templator
