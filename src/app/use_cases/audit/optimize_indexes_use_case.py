import logging

from libs.result import Result, Return
from src.app.services.unit_of_work import UnitOfWork

logger = logging.getLogger(__name__)


class OptimizeIndexesUseCase:
    """Recreate missing audit indexes and refresh query planner statistics"""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self) -> Result[bool]:
        async with self.uow:
            await self.uow.audit_events.optimize_indexes()
            await self.uow.commit()

        logger.info("Audit indexes optimized")
        return Return.ok(True)
