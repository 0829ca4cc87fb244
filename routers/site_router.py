# routers/site_router.py
from fastapi import APIRouter
from fastapi.responses import RedirectResponse

router = APIRouter(tags=["site"])

SERVICE_NAME = "Employee Management API"

@router.get("/health")
async def health():
    return {"status": "ok", "service": SERVICE_NAME}

@router.get("/", include_in_schema=False)
async def console():
    """The GraphiQL console is served by the GraphQL router itself."""
    return RedirectResponse(url="/graphql")
