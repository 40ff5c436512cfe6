import asyncio
import logging
from typing import Optional

import requests
from fastapi import APIRouter, Depends, HTTPException
from tracker import schemas
from tracker.api import deps
from tracker.core.exceptions import AuthenticationError
from tracker.database.client import StoreClient

router = APIRouter()
logger = logging.getLogger(__name__)


async def _call(func, *args):
    try:
        return await asyncio.to_thread(func, *args)
    except AuthenticationError as e:
        raise HTTPException(status_code=401, detail=str(e))
    except requests.RequestException as e:
        logger.error(f"Auth API unreachable: {e}")
        raise HTTPException(status_code=502, detail="Authentication service unavailable")


@router.post("/sign-in", response_model=schemas.User)
async def sign_in(credentials: schemas.Credentials, client: StoreClient = Depends(deps.get_client)):
    session = await _call(client.auth.sign_in_with_password, credentials.email, credentials.password)
    return session.user or schemas.User(id="", email=credentials.email)


@router.post("/sign-up", response_model=schemas.JobStatus)
async def sign_up(credentials: schemas.Credentials, client: StoreClient = Depends(deps.get_client)):
    await _call(client.auth.sign_up, credentials.email, credentials.password)
    return schemas.JobStatus(message=f"User {credentials.email} created")


@router.post("/sign-out", response_model=schemas.JobStatus)
async def sign_out(client: StoreClient = Depends(deps.get_client)):
    await _call(client.auth.sign_out)
    return schemas.JobStatus(message="Signed out")


@router.get("/user", response_model=Optional[schemas.User])
async def read_user(client: StoreClient = Depends(deps.get_client)):
    return await _call(client.auth.get_current_user)
