"""Task loader — resolves a `module:attribute` reference to a TaskDefinition."""

import importlib

from eval_express.task.domain.task import TaskDefinition
from eval_express.task.infrastructure.errors import TaskLoadError


def load_task(reference: str) -> TaskDefinition:
    """Import the module and return the TaskDefinition it exposes.

    The attribute may be a dotted path (``module:group.task``).

    Raises:
        TaskLoadError: if the reference is malformed, the module cannot be
            imported, the attribute is missing, or it is not a TaskDefinition.
    """
    module_name, sep, attribute = reference.partition(":")
    if not sep or not module_name or not attribute:
        raise TaskLoadError(
            reference=reference, reason="expected the form 'package.module:attribute'"
        )

    try:
        module = importlib.import_module(module_name)
    except ImportError as exc:
        raise TaskLoadError(
            reference=reference, reason=f"cannot import module: {exc}"
        ) from exc

    target: object = module
    for part in attribute.split("."):
        try:
            target = getattr(target, part)
        except AttributeError as exc:
            raise TaskLoadError(
                reference=reference, reason=f"attribute '{attribute}' not found"
            ) from exc

    if not isinstance(target, TaskDefinition):
        raise TaskLoadError(
            reference=reference,
            reason=f"expected a TaskDefinition, got {type(target).__name__}",
        )
    return target
