"""
Structured RPC transport: ``POST /rpc/{Operation}``.

The credential travels in the ``token`` header and the request message is
the JSON body (empty body means an all-default message). Every dispatched
call answers HTTP 200; the outcome is in ``error_code``/``error_message``.
Only an unusable envelope is rejected at the HTTP level.
"""

from typing import Optional
from fastapi import APIRouter, Depends, Header, HTTPException, Request
from pydantic import ValidationError
from starlette.concurrency import run_in_threadpool
from starlette.requests import ClientDisconnect
from inventory_service.application.dispatcher import AuthorizationDispatcher, UnknownOperation
from .routes import get_dispatcher

router = APIRouter(prefix="/rpc", tags=["rpc"])

@router.post("/{operation}")
async def invoke(operation: str, request: Request,
                 token: Optional[str] = Header(default=None),
                 dispatcher: AuthorizationDispatcher = Depends(get_dispatcher)):
    try:
        op = dispatcher.operation(operation)
    except UnknownOperation:
        raise HTTPException(status_code=404, detail=f"unknown operation: {operation}")

    try:
        body = await request.body()
    except ClientDisconnect:
        raise HTTPException(status_code=400, detail="request body unreadable")

    try:
        message = op.request_cls.model_validate_json(body) if body.strip() else op.request_cls()
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=f"invalid {operation} request: {e.error_count()} error(s)")

    response = await run_in_threadpool(dispatcher.call, operation, token, message)
    return response.model_dump(mode="json")
