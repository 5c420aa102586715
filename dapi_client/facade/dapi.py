"""Command facade: binds pure command functions to an object.

Every call reads the dependency store at call time and passes the current bundle
as the first argument, so a change made between two calls (a new client, a
close) is visible to the second. Decorators and pre/post hooks wrap that call.
"""
from __future__ import annotations

import inspect
from functools import partial
from typing import Any, Callable, Iterable, Mapping

from dapi_client.domain.models import CommandFn, Dependencies
from dapi_client.errors import InvalidDefinition
from dapi_client.ports.dependency_store import DependencyStore

Decorator = Callable[..., Any]
PreHook = Callable[..., Any]
PostHook = Callable[..., Any]


def _run_post_hooks(
    hooks: Iterable[PostHook],
    result: Any,
    deps: Dependencies,
    args: tuple[Any, ...],
    kwargs: dict[str, Any],
) -> None:
    for hook in hooks:
        hook(result, deps, *args, **kwargs)


async def _post_hooks_after(
    pending: Any,
    hooks: tuple[PostHook, ...],
    deps: Dependencies,
    args: tuple[Any, ...],
    kwargs: dict[str, Any],
) -> Any:
    result = await pending
    _run_post_hooks(hooks, result, deps, args, kwargs)
    return result


class Dapi:
    """Facade exposing commands as methods over a dependency store.

    Commands named in `fns` become attributes of the instance. `operations` are
    dispatched the same way (decorators and hooks apply) but are exposed through
    methods defined on the facade class itself.

    Attributes not found on the facade are looked up on `base`, when given.
    """

    def __init__(
        self,
        *,
        type: str,
        fns: Mapping[str, CommandFn],
        store: DependencyStore,
        base: Any = None,
        operations: Mapping[str, CommandFn] | None = None,
    ) -> None:
        if not isinstance(type, str) or not type.strip():
            raise InvalidDefinition("Definition must have a type", details={"type": type})
        operations = dict(operations or {})
        self._check_command_names(fns, operations)

        self._type = type
        self._store = store
        self._base = base
        self._fns: dict[str, CommandFn] = {**fns, **operations}
        self._decorators: dict[str, list[Decorator]] = {name: [] for name in self._fns}
        self._pre_hooks: dict[str, list[PreHook]] = {name: [] for name in self._fns}
        self._post_hooks: dict[str, list[PostHook]] = {name: [] for name in self._fns}

        for name in fns:
            setattr(self, name, self._bind(name))

    def _check_command_names(self, fns: Mapping[str, CommandFn], operations: Mapping[str, CommandFn]) -> None:
        taken = {member for member in dir(type(self)) if not member.startswith("_")} | set(operations)
        invalid = sorted(name for name in fns if not name.isidentifier() or name.startswith("_"))
        if invalid:
            raise InvalidDefinition(
                "Command names must be public identifiers",
                details={"names": invalid},
            )
        clashing = sorted(name for name in fns if name in taken)
        if clashing:
            raise InvalidDefinition(
                "Command names cannot shadow facade members",
                details={"names": clashing},
            )

    def _bind(self, name: str) -> Callable[..., Any]:
        def command(*args: Any, **kwargs: Any) -> Any:
            return self.invoke(name, *args, **kwargs)

        command.__name__ = command.__qualname__ = name
        command.__doc__ = getattr(self._fns[name], "__doc__", None)
        return command

    def __getattr__(self, name: str) -> Any:
        base = self.__dict__.get("_base")
        if base is None or name.startswith("__"):
            raise AttributeError(f"{type(self).__name__!r} object has no attribute {name!r}")
        return getattr(base, name)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(type={self._type!r}, commands={list(self._fns)!r})"

    @property
    def type(self) -> str:
        return self._type

    @property
    def base(self) -> Any:
        return self._base

    @property
    def commands(self) -> tuple[str, ...]:
        return tuple(self._fns)

    def invoke(self, name: str, *args: Any, **kwargs: Any) -> Any:
        """Run command `name` with the current bundle, through its decorators and hooks.

        The command's own return value is passed back untouched: a sync command
        returns a plain value, an async one an awaitable. Post hooks on an async
        command run once the awaitable completes.
        """
        fn = self._command(name)
        deps = self._store.get()

        call: Callable[..., Any] = fn
        for decorator in tuple(self._decorators[name]):
            call = partial(decorator, call)

        for hook in tuple(self._pre_hooks[name]):
            hook(deps, *args, **kwargs)

        result = call(deps, *args, **kwargs)

        post_hooks = tuple(self._post_hooks[name])
        if not post_hooks:
            return result
        if inspect.isawaitable(result):
            return _post_hooks_after(result, post_hooks, deps, args, kwargs)
        _run_post_hooks(post_hooks, result, deps, args, kwargs)
        return result

    def _command(self, name: str) -> CommandFn:
        try:
            return self._fns[name]
        except KeyError:
            raise KeyError(f"unknown command: {name}") from None

    def get_dependencies(self) -> Dependencies:
        return self._store.get()

    def set_dependencies(self, dependencies: Dependencies) -> None:
        self._store.set(dependencies)

    def update_dependencies(self, partial_dependencies: Dependencies) -> None:
        self._store.update(partial_dependencies)

    def get_client(self) -> Any:
        return self._store.get_client()

    def set_client(self, client: Any) -> None:
        self._store.set_client(client)

    def add_decorator(self, name: str, decorator: Decorator) -> None:
        """Wrap command `name`; called as decorator(next, deps, *args, **kwargs).

        The decorator added last is the outermost one.
        """
        self._command(name)
        self._decorators[name].append(decorator)

    def remove_decorator(self, name: str, decorator: Decorator) -> None:
        self._command(name)
        self._decorators[name].remove(decorator)

    def add_pre_hook(self, name: str, hook: PreHook) -> None:
        """Run hook(deps, *args, **kwargs) before every call to `name`."""
        self._command(name)
        self._pre_hooks[name].append(hook)

    def remove_pre_hook(self, name: str, hook: PreHook) -> None:
        self._command(name)
        self._pre_hooks[name].remove(hook)

    def add_post_hook(self, name: str, hook: PostHook) -> None:
        """Run hook(result, deps, *args, **kwargs) after every successful call to `name`."""
        self._command(name)
        self._post_hooks[name].append(hook)

    def remove_post_hook(self, name: str, hook: PostHook) -> None:
        self._command(name)
        self._post_hooks[name].remove(hook)
