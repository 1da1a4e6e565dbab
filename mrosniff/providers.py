"""Reflection providers: where parents and own methods of a class come from.

The builder only ever talks to a provider by class name.  Two providers ship:

- ``DeclarativeProvider`` — a hand-built hierarchy (tests, non-Python models).
- ``RuntimeProvider`` — live Python classes, read through ``inspect``.

Unknown names never raise; they simply have no parents and no methods.
"""

from __future__ import annotations

import importlib
import inspect
import logging
import sys
from collections.abc import Iterable, Iterator, Mapping

from .errors import InvalidArgument

logger = logging.getLogger(__name__)

UNIVERSAL = "UNIVERSAL"


class ReflectionProvider:
    """Contract consumed by :class:`mrosniff.builder.HierarchyBuilder`."""

    universal_root: str = UNIVERSAL

    def direct_parents(self, name: str) -> list[str]:
        raise NotImplementedError

    def own_methods(self, name: str) -> list[str]:
        raise NotImplementedError

    def exported_methods(self, name: str) -> dict[str, str]:
        """Methods visible on ``name`` but implemented elsewhere: {method: origin}."""
        return {}

    def loaded_classes(self) -> Iterable[str]:
        """Every class name the provider can enumerate (batch mode)."""
        return []


class DeclarativeProvider(ReflectionProvider):
    """Provider over a plain mapping.

    Accepts either the long form::

        {"Child": {"parents": ["Base"], "methods": ["foo"], "exported": {"dump": "json"}}}

    or the ``(parents, methods)`` shorthand::

        {"Child": (["Base"], ["foo"])}
    """

    def __init__(self, hierarchy: Mapping[str, object], *, universal_root: str = UNIVERSAL):
        self.universal_root = universal_root
        self._classes: dict[str, dict] = {}
        for name, spec in hierarchy.items():
            if isinstance(spec, Mapping):
                entry = {
                    "parents": list(spec.get("parents", ())),
                    "methods": list(spec.get("methods", ())),
                    "exported": dict(spec.get("exported", {})),
                }
            else:
                parents, methods = spec
                entry = {"parents": list(parents), "methods": list(methods), "exported": {}}
            self._classes[name] = entry

    def __contains__(self, name: object) -> bool:
        return name in self._classes

    def loaded_classes(self) -> list[str]:
        return list(self._classes)

    def direct_parents(self, name: str) -> list[str]:
        return list(self._classes.get(name, {}).get("parents", ()))

    def own_methods(self, name: str) -> list[str]:
        return list(self._classes.get(name, {}).get("methods", ()))

    def exported_methods(self, name: str) -> dict[str, str]:
        return dict(self._classes.get(name, {}).get("exported", {}))


def _is_method(value: object) -> bool:
    return inspect.isroutine(value) or isinstance(value, (classmethod, staticmethod, property))


def _function_of(value: object):
    """Underlying plain function of a class attribute, or None."""
    if isinstance(value, (classmethod, staticmethod)):
        value = value.__func__
    return value if inspect.isfunction(value) else None


def _owner_of(func) -> str:
    """Module- or class-qualified owner of a plain function."""
    owner, _, _ = func.__qualname__.rpartition(".")
    module = func.__module__ or ""
    if not owner:
        return module
    if module in ("", "builtins"):
        return owner
    return f"{module}.{owner}"


class RuntimeProvider(ReflectionProvider):
    """Provider over classes already loaded into this interpreter.

    Classes are named ``module.QualName`` (bare name for builtins).  The
    provider keeps a catalog of every class it has named so later lookups by
    name resolve back to the class object.
    """

    universal_root = "object"

    def __init__(self) -> None:
        self._catalog: dict[str, type] = {"object": object}

    @staticmethod
    def name_of(cls: type) -> str:
        if cls.__module__ == "builtins":
            return cls.__qualname__
        return f"{cls.__module__}.{cls.__qualname__}"

    def class_name(self, cls: type) -> str:
        """Name ``cls`` and remember it for later lookups."""
        name = self.name_of(cls)
        self._catalog.setdefault(name, cls)
        return name

    def lookup(self, name: str) -> type | None:
        return self._catalog.get(name)

    def resolve(self, spec: object) -> str:
        """Register a class given as object, ``pkg.mod:Qual.Name`` or ``pkg.mod.Name``."""
        if isinstance(spec, type):
            return self.class_name(spec)
        if not isinstance(spec, str) or not spec:
            raise InvalidArgument(f"Cannot resolve class from {spec!r}")
        if spec in self._catalog:
            return spec
        cls = _import_class(spec)
        return self.class_name(cls)

    def direct_parents(self, name: str) -> list[str]:
        cls = self._catalog.get(name)
        if cls is None or cls is object:
            return []
        return [self.class_name(base) for base in cls.__bases__ if base is not object]

    def own_methods(self, name: str) -> list[str]:
        cls = self._catalog.get(name)
        if cls is None:
            return []
        return [attr for attr, value in vars(cls).items() if _is_method(value)]

    def exported_methods(self, name: str) -> dict[str, str]:
        cls = self._catalog.get(name)
        if cls is None:
            return {}
        exported: dict[str, str] = {}
        for attr, value in vars(cls).items():
            func = _function_of(value)
            if func is None:
                continue
            origin = _owner_of(func)
            if origin != name:
                exported[attr] = origin
        return exported

    def loaded_classes(self) -> Iterator[str]:
        """Name every class defined in an already-imported module."""
        seen: set[type] = set()
        for module_name, module in list(sys.modules.items()):
            if module is None:
                continue
            try:
                members = list(vars(module).values())
            except TypeError as exc:
                logger.debug("Skipping module without namespace %s: %s", module_name, exc)
                continue
            for value in members:
                if not isinstance(value, type) or value in seen:
                    continue
                if getattr(value, "__module__", None) != module_name:
                    continue
                seen.add(value)
                yield self.class_name(value)

    @staticmethod
    def mro_path(cls: type) -> list[str]:
        """The interpreter's own (C3) lookup order as a single search path."""
        return [RuntimeProvider.name_of(klass) for klass in cls.__mro__]


def _import_class(spec: str) -> type:
    if ":" in spec:
        module_name, _, qualname = spec.partition(":")
    else:
        module_name, _, qualname = spec.rpartition(".")
    if not module_name or not qualname:
        raise InvalidArgument(f"Expected 'module:Class' or 'module.Class', got {spec!r}")
    try:
        obj = importlib.import_module(module_name)
    except ImportError as exc:
        raise InvalidArgument(f"Cannot import module {module_name!r}: {exc}") from exc
    for part in qualname.split("."):
        try:
            obj = getattr(obj, part)
        except AttributeError:
            raise InvalidArgument(f"{module_name!r} has no class {qualname!r}") from None
    if not isinstance(obj, type):
        raise InvalidArgument(f"{spec!r} is not a class")
    return obj


__all__ = [
    "DeclarativeProvider",
    "ReflectionProvider",
    "RuntimeProvider",
    "UNIVERSAL",
]
