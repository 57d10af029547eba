# SPDX-License-Identifier: BSD-3-Clause
# Part of the JaxVdW project
"""
String-keyed registries for the pluggable pieces of the kernel: combining
rules, domains, colliders and force objects.
"""
from __future__ import annotations

import jax

from abc import ABC
from dataclasses import dataclass
from functools import partial
from typing import Any, Callable, ClassVar, Dict, List, Type, TypeVar, cast
from inspect import signature

from .errors import InvalidConfiguration

RootT = TypeVar("RootT", bound="Factory")
SubT = TypeVar("SubT", bound="Factory")


@partial(jax.tree_util.register_dataclass, drop_fields=["_registry"])
@dataclass(frozen=True)
class Factory(ABC):
    """
    Base class for components selected by name.

    Every direct subclass of `Factory` owns a private registry. Keys are
    matched case-insensitively, so ``"CUBIC-MEAN"`` and ``"cubic-mean"`` select
    the same rule.

    Example
    -------
    >>> class Rule(Factory, ABC):
    >>>     ...
    >>>
    >>> @Rule.register("arithmetic")
    >>> class Arithmetic(Rule):
    >>>     ...
    >>>
    >>> Rule.create("Arithmetic")
    """

    __slots__ = ()
    _registry: ClassVar[Dict[str, Type["Factory"]]] = {}

    def __init_subclass__(cls, **kw: Any) -> None:
        super().__init_subclass__(**kw)
        cls._registry = {}

        if "create" in cls.__dict__:
            raise TypeError(
                f"{cls.__name__} is not allowed to override the `create` method. "
                "Use `Create` instead for custom instantiation logic."
            )

    @classmethod
    def register(
        cls: Type[RootT], key: str | None = None
    ) -> Callable[[Type[SubT]], Type[SubT]]:
        """
        Return a class decorator that registers a subclass under ``key``.

        Parameters
        ----------
        key : str or None, optional
            Registration key. Defaults to the lowercase class name.

        Raises
        ------
        ValueError
            If the key is already taken in this registry.
        """

        def decorator(sub_cls: Type[SubT]) -> Type[SubT]:
            k = (key or sub_cls.__name__).lower()
            if k in cls._registry:
                raise ValueError(
                    f"{cls.__name__}: key '{k}' already registered for {cls._registry[k].__name__}"
                )
            cls._registry[k] = sub_cls
            setattr(sub_cls, "__registry_name__", k)

            if not hasattr(sub_cls, "registry_name"):

                @classmethod
                def registry_name(c) -> str:
                    name = getattr(c, "__registry_name__", None)
                    if name is None:
                        raise KeyError(
                            f"{c.__name__} is not registered in {cls.__name__}."
                        )
                    return name

                sub_cls.registry_name = registry_name

            if not hasattr(sub_cls, "type_name"):

                @property
                def type_name(self) -> str:
                    return type(self).registry_name()

                sub_cls.type_name = type_name  # type: ignore[attr-defined]

            return sub_cls

        return decorator

    @classmethod
    def available(cls) -> List[str]:
        """Registered keys, in registration order."""
        return list(cls._registry)

    @classmethod
    def create(cls: Type[RootT], key: str, /, **kw: Any) -> RootT:
        """
        Instantiate the subclass registered under ``key``.

        If the subclass defines ``Create`` it is called instead of the
        constructor, so it can validate or preprocess its arguments.

        Raises
        ------
        InvalidConfiguration
            If ``key`` is not a string or is not registered.
        TypeError
            If ``kw`` does not match the constructor signature.
        """
        if not isinstance(key, str):
            raise InvalidConfiguration(
                f"{cls.__name__} key must be a string, got {key!r}"
            )
        try:
            sub_cls = cls._registry[key.strip().lower()]
        except KeyError:
            raise InvalidConfiguration(
                f"Unknown {cls.__name__} '{key}'. Available: {list(cls._registry)}"
            ) from None

        create_or_ctor = getattr(sub_cls, "Create", None) or sub_cls
        factory_callable = cast(Callable[..., RootT], create_or_ctor)

        sig = signature(create_or_ctor)
        try:
            sig.bind_partial(**kw)
        except TypeError as err:
            raise TypeError(
                f"Invalid keyword(s) for {sub_cls.__name__}: {err}. "
                f"Expected signature: {sub_cls.__name__}.{create_or_ctor.__name__}{sig}"
            ) from None

        return factory_callable(**kw)


__all__ = ["Factory"]
