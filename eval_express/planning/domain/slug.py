"""Deterministic id derivation for eval cases and plan entries."""

import re

from eval_express.task.domain.eval_case import EvalCase

_NON_ALNUM_RUN = re.compile(r"[^a-z0-9]+")


def slugify(value: str) -> str:
    """Lowercase, trim, hyphenate non-alphanumeric runs, strip edge hyphens."""
    return _NON_ALNUM_RUN.sub("-", value.lower().strip()).strip("-")


def create_eval_id(eval_case: EvalCase, index: int) -> str:
    """Explicit id, else the slugified name, else ``eval-{index + 1}``."""
    if eval_case.id:
        return eval_case.id
    if eval_case.name:
        slug = slugify(eval_case.name)
        if slug:
            return slug
    return f"eval-{index + 1}"


def create_plan_id(task_name: str, eval_id: str, combination_index: int) -> str:
    """Build ``plan-{task_slug}-{eval_slug}-{combination_index + 1}``."""
    task_slug = slugify(task_name) or "task"
    eval_slug = slugify(eval_id) or f"eval-{combination_index + 1}"
    return f"plan-{task_slug}-{eval_slug}-{combination_index + 1}"
