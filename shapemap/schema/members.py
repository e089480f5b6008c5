"""
Type reference helpers.

A type reference is anything callable with no arguments that returns a
sample instance of a shape: usually the class itself, or a factory
function for classes that need constructor arguments.

Members of a shape are the names physically present on such a sample
instance (its own attributes). Class attributes, properties and methods
never count.
"""
from collections.abc import Mapping
from typing import Any, List, Optional


def get_class_name(type_ref: Any) -> Optional[str]:
    """
    Get display name of a type reference.

    Args:
        type_ref: Class or factory callable

    Returns:
        Optional[str]: Qualified name, or None when it cannot be resolved
    """
    if type_ref is None:
        return None

    name = getattr(type_ref, "__qualname__", None) or getattr(type_ref, "__name__", None)
    if isinstance(name, str) and name:
        return name

    return None


def get_type_path(type_ref: Any) -> Optional[str]:
    """Get ``module:QualName`` import string of a type reference."""
    name = get_class_name(type_ref)
    module = getattr(type_ref, "__module__", None)

    if name is None or not module:
        return name

    return f"{module}:{name}"


def create_instance(type_ref: Any) -> Any:
    """Build a sample instance with zero-argument construction."""
    return type_ref()


def get_own_members(instance: Any) -> List[str]:
    """
    List own members of a sample instance, in definition order.

    Mapping samples contribute their keys. Other objects contribute their
    instance ``__dict__`` followed by any assigned ``__slots__``.
    """
    if isinstance(instance, Mapping):
        return [str(key) for key in instance.keys()]

    members = list(vars(instance)) if hasattr(instance, "__dict__") else []

    for klass in reversed(type(instance).__mro__):
        slots = klass.__dict__.get("__slots__", ())
        if isinstance(slots, str):
            slots = (slots,)

        for slot in slots:
            if slot in ("__dict__", "__weakref__") or slot in members:
                continue
            if hasattr(instance, slot):
                members.append(slot)

    return members
