from mpm2d.solvers.context import SolverContext
from mpm2d.errors import HandoffError


class SolverHandoff:
    """
    Carries the context of a released solver to the next one. The context is moved,
    not copied: it can be taken exactly once.
    """

    def __init__(self, context: SolverContext) -> None:
        self._context = context

    @property
    def is_consumed(self) -> bool:
        return self._context is None

    @property
    def particle_count(self) -> int:
        if self._context is None:
            raise HandoffError("this handoff has already been taken")
        return self._context.particle_count

    def take(self) -> SolverContext:
        if self._context is None:
            raise HandoffError("this handoff has already been taken")
        context, self._context = self._context, None
        return context
