"""Aggregation capability — the contract every operator rule satisfies.

An operator is a rule composed of clauses (nested rules) plus an aggregator
that folds the clause outcomes into one boolean. Anything implementing
:class:`Aggregatable` is evaluated as an operator by the engine; nothing in
the dispatcher needs to know about concrete operator kinds.

Most operators only differ in their aggregator, so :class:`Operator` does
the rest::

    class ExactlyOne(Operator, aggregator=lambda bs: sum(bs) == 1):
        \"\"\"Passes when exactly one clause passes.\"\"\"
"""

from __future__ import annotations

import abc
import importlib
import inspect
from types import ModuleType
from typing import Any, Callable, ClassVar, Iterable, List, Optional, Tuple, Type, Union

Aggregator = Callable[[Iterable[bool]], bool]
Rule = Any
Clauses = List[Rule]


class UnsupportedCapabilityError(TypeError):
    """Raised when an aggregation operation is used on a non-operator."""

    def __init__(self, value: Any, capability: str) -> None:
        self.value = value
        self.capability = capability
        super().__init__(
            f"{capability}: {value!r} does not implement the aggregation capability"
        )


class Aggregatable(abc.ABC):
    """Capability contract for composite (operator) rules."""

    @property
    @abc.abstractmethod
    def clauses(self) -> Clauses:
        """The ordered sub-rules of this operator."""

    @abc.abstractmethod
    def aggregator(self) -> Aggregator:
        """Return the function folding clause outcomes into one boolean."""

    @classmethod
    @abc.abstractmethod
    def new(cls, clauses: Iterable[Rule]) -> "Aggregatable":
        """Build a fresh instance of this kind holding *clauses*."""


class Operator(Aggregatable):
    """Reusable operator base: holds clauses, synthesises the contract.

    Subclasses pass ``aggregator=`` at class definition: a callable, the
    name of a static/class method defined on the class, or an importable
    ``"package.module:function"`` path resolved on first use. Intermediate
    bases without an aggregator must say ``abstract=True``.
    """

    _aggregator: ClassVar[Optional[Union[Aggregator, str]]] = None

    def __init_subclass__(
        cls,
        aggregator: Optional[Union[Aggregator, str]] = None,
        abstract: bool = False,
        **kwargs: Any,
    ) -> None:
        super().__init_subclass__(**kwargs)
        if aggregator is not None:
            if isinstance(aggregator, str):
                if ":" not in aggregator and not callable(getattr(cls, aggregator, None)):
                    raise TypeError(
                        f"{cls.__name__}: aggregator {aggregator!r} is not a "
                        f"callable attribute of the class"
                    )
                cls._aggregator = aggregator
            elif callable(aggregator):
                cls._aggregator = staticmethod(aggregator)  # type: ignore[assignment]
            else:
                raise TypeError(f"{cls.__name__}: invalid aggregator {aggregator!r}")
        elif cls._aggregator is None and not abstract:
            raise TypeError(f"{cls.__name__}: operators must declare an aggregator")

    def __init__(self, *rules: Rule, clauses: Optional[Iterable[Rule]] = None) -> None:
        if clauses is not None:
            if rules:
                raise TypeError("pass clauses positionally or as clauses=, not both")
            items = list(clauses)
        elif len(rules) == 1 and isinstance(rules[0], (list, tuple)):
            items = list(rules[0])
        else:
            items = list(rules)
        self._clauses: Tuple[Rule, ...] = tuple(items)

    @property
    def clauses(self) -> Clauses:
        return list(self._clauses)

    def aggregator(self) -> Aggregator:
        agg = type(self)._aggregator
        if isinstance(agg, str):
            if ":" in agg:
                return _import_aggregator(agg)
            return getattr(self, agg)
        if agg is None:
            raise UnsupportedCapabilityError(self, "aggregator")
        return agg  # type: ignore[return-value]

    @classmethod
    def new(cls, clauses: Iterable[Rule]) -> "Operator":
        return cls(clauses=clauses)

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self._clauses == other._clauses  # type: ignore[attr-defined]

    def __hash__(self) -> int:
        return hash((type(self), len(self._clauses)))

    def __repr__(self) -> str:
        inner = ", ".join(rule_label(c) for c in self._clauses)
        return f"{type(self).__name__}({inner})"


def _import_aggregator(path: str) -> Aggregator:
    module_name, _, attr_path = path.partition(":")
    obj: Any = importlib.import_module(module_name)
    for part in attr_path.split("."):
        obj = getattr(obj, part)
    if not callable(obj):
        raise TypeError(f"aggregator {path!r} is not callable")
    return obj


def rule_label(rule: Rule) -> str:
    """Short human label: the qualified name of callables, repr otherwise."""
    name = getattr(rule, "__qualname__", None) or getattr(rule, "__name__", None)
    if name and isinstance(rule, ModuleType):
        return name
    if name and callable(rule) and not isinstance(rule, Aggregatable):
        return name
    return repr(rule)


def _kind_of(kind: Any) -> Type[Aggregatable]:
    if is_operator_kind(kind) and not inspect.isabstract(kind):
        return kind
    if isinstance(kind, Aggregatable):
        return type(kind)
    raise UnsupportedCapabilityError(kind, "new")


def new_operator(kind: Any, rules: Iterable[Rule]) -> Aggregatable:
    """Return a new operator of *kind* holding *rules*.

    *kind* is an Aggregatable class, or an instance whose class is used.
    """
    return _kind_of(kind).new(list(rules))


def clauses(operator: Any) -> Clauses:
    """Return the clauses of *operator*; raise if it is not an operator."""
    if not isinstance(operator, Aggregatable):
        raise UnsupportedCapabilityError(operator, "clauses")
    return operator.clauses


def clauses_or_none(value: Any) -> Optional[Clauses]:
    """Return the clauses of *value*, or None when it is not an operator."""
    if isinstance(value, Aggregatable):
        return value.clauses
    return None


def aggregator(operator: Any) -> Aggregator:
    """Return the aggregator of *operator*; raise if it is not an operator."""
    if not isinstance(operator, Aggregatable):
        raise UnsupportedCapabilityError(operator, "aggregator")
    return operator.aggregator()


def is_operator_kind(kind: Any) -> bool:
    return isinstance(kind, type) and issubclass(kind, Aggregatable)

