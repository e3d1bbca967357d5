from src.services import (
    assignment_generator,
    assignment_repository,
    assignment_service,
    idempotency,
    rotation_service,
    rule_expander,
)


__all__ = [
    "assignment_generator",
    "assignment_repository",
    "assignment_service",
    "idempotency",
    "rotation_service",
    "rule_expander",
]
