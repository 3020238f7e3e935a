"""Importable task definitions used by loader and CLI tests."""

from typing import Any

from eval_express.task.domain.task import define_task


@define_task(
    name="greeter",
    description="Greets people by name",
    scorer="string_exact_match",
    defaults={"greeting": "Hello"},
    evals=[
        {"name": "Ada", "input": "Ada", "expected_output": "Hello, Ada"},
        {
            "name": "Grace",
            "input": "Grace",
            "expected_output": "Hi, Grace",
            "greeting": "Hi",
        },
        {"name": "Broken", "input": None, "expected_output": "Hello, nobody"},
    ],
)
def greeting_task(
    eval_id: str, input: Any, params: dict[str, Any], set_run_fields: Any
) -> str:
    if input is None:
        raise ValueError("no name given")
    set_run_fields({"length": len(input)})
    return f"{params['greeting']}, {input}"


class Catalog:
    greeting = greeting_task


not_a_task = "just a string"
