"""Ordered steps with compensating actions.

Steps run in order. When one fails, the compensations of the steps that
already completed run in reverse order, then the failure propagates as a
StackError naming the failed step.

Examples:
    Leave the swarm if the overlay network can't be created::

        actions = CompensatingActions()
        actions.add("docker swarm creation has failed", init_swarm, compensation=leave_swarm)
        actions.add("create overlay network failed", create_overlay)
        actions.run()
"""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from elastic_package.errors import StackError
from elastic_package.utils.logger import get_logger

logger = get_logger("stack")


@dataclass
class Step:
    description: str
    action: Callable[[], Any]
    compensation: Callable[[], Any] | None = None


class CompensatingActions:
    def __init__(self):
        self.steps: list[Step] = []

    def add(
        self,
        description: str,
        action: Callable[[], Any],
        compensation: Callable[[], Any] | None = None,
    ) -> "CompensatingActions":
        """Append a step.

        Args:
            description: Reported as the stage of the StackError on failure
            action: Performs the step; its return value is collected
            compensation: Undoes the step after a later step fails
        """
        self.steps.append(Step(description, action, compensation))
        return self

    def run(self) -> list[Any]:
        """Run all steps and return their results in order.

        Raises:
            StackError: A step failed; completed steps have been compensated
        """
        completed: list[Step] = []
        results = []

        for step in self.steps:
            try:
                results.append(step.action())
            except Exception as e:
                self._compensate(completed)
                raise StackError(step.description, e) from e
            completed.append(step)

        return results

    def _compensate(self, completed: list[Step]) -> None:
        for step in reversed(completed):
            if step.compensation is None:
                continue
            logger.debug(f"Compensating: {step.description}")
            try:
                step.compensation()
            except Exception as e:
                # The original failure is what gets reported
                logger.warning(f"Compensation for '{step.description}' failed: {e}")
