"""Login and e-mail OTP endpoints. None of these require a token."""

from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from superfarmer.core.cache import Cache, get_cache
from superfarmer.core.messaging import Publisher, get_publisher
from superfarmer.core.response import DataResponse
from superfarmer.db.base import get_db
from superfarmer.schemas.common import MessageOut
from superfarmer.schemas.identity import (
    LoginOut,
    LoginRequest,
    OTPSendRequest,
    OTPVerifyRequest,
    UserOut,
)
from superfarmer.services.identity import AuthService

router = APIRouter(prefix="/auth", tags=["Auth"])


@router.post("/login", response_model=DataResponse[LoginOut])
async def login(
    body: LoginRequest,
    session: AsyncSession = Depends(get_db),
    cache: Cache = Depends(get_cache),
):
    user, token = await AuthService(session, cache).login(body.email, body.password)
    return {"data": LoginOut(user=UserOut.model_validate(user), token=token)}


@router.post("/otp/send", response_model=DataResponse[MessageOut])
async def send_otp(
    body: OTPSendRequest,
    session: AsyncSession = Depends(get_db),
    cache: Cache = Depends(get_cache),
    publisher: Publisher = Depends(get_publisher),
):
    await AuthService(session, cache, publisher).send_otp(body.email)
    return {"data": MessageOut(message="OTP sent")}


@router.post("/otp/verify", response_model=DataResponse[MessageOut])
async def verify_otp(
    body: OTPVerifyRequest,
    session: AsyncSession = Depends(get_db),
    cache: Cache = Depends(get_cache),
):
    await AuthService(session, cache).verify_otp(body.email, body.otp)
    return {"data": MessageOut(message="OTP verified")}
