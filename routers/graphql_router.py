# routers/graphql_router.py
from fastapi import Request
from strawberry.fastapi import GraphQLRouter

from graphql_schema.schema import schema
from services.auth_service import get_context_user

async def get_context(request: Request):
    # Merged into strawberry's default context (request, response, background_tasks)
    return {"current_user": await get_context_user(request.headers.get("authorization"))}

router = GraphQLRouter(
    schema,
    path="/graphql",
    context_getter=get_context,
    tags=["graphql"],
)
