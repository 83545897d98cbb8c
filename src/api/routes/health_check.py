from fastapi import APIRouter, Request, status

router = APIRouter()


@router.get("/health", status_code=status.HTTP_200_OK)
async def health_check(request: Request):
    """Liveness probe with the number of registered cron jobs"""
    return {"status": "ok", "cron_jobs": len(request.app.state.cron.status())}
