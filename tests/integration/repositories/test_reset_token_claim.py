"""
Integration tests for single-use reset token claims against SQLite.
"""
import asyncio
from datetime import timedelta

import pytest

from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.app.services.reset_token_manager import ResetTokenManager
from src.domain.base import utcnow


async def issue(session_factory, email="alice@example.com", now=utcnow):
    async with session_factory() as session:
        async with SqlAlchemyUnitOfWork(session) as uow:
            token = await ResetTokenManager(uow.password_reset_tokens, now=now).issue(email)
            await uow.commit()
            return token.token


async def claim(session_factory, token, email="alice@example.com", now=utcnow):
    async with session_factory() as session:
        async with SqlAlchemyUnitOfWork(session) as uow:
            result = await ResetTokenManager(uow.password_reset_tokens, now=now).claim(token, email)
            await uow.commit()
            return result


@pytest.mark.asyncio
async def test_parallel_claims_have_exactly_one_winner(session_factory):
    token = await issue(session_factory)

    results = await asyncio.gather(*[claim(session_factory, token) for _ in range(5)])

    winners = [r for r in results if r.is_ok()]
    losers = [r.error.code for r in results if r.is_err()]
    assert len(winners) == 1
    assert losers == ["TOKEN_USED"] * 4


@pytest.mark.asyncio
async def test_second_claim_reports_used(session_factory):
    token = await issue(session_factory)

    first = await claim(session_factory, token)
    second = await claim(session_factory, token)

    assert first.is_ok()
    assert first.value.used is True
    assert second.error.code == "TOKEN_USED"


@pytest.mark.asyncio
async def test_expired_claim_does_not_consume(session_factory):
    token = await issue(session_factory)
    later = lambda: utcnow() + timedelta(minutes=31)  # noqa: E731

    expired = await claim(session_factory, token, now=later)
    fresh = await claim(session_factory, token)

    assert expired.error.code == "TOKEN_EXPIRED"
    assert fresh.is_ok()


@pytest.mark.asyncio
async def test_claim_with_other_email_is_invalid(session_factory):
    token = await issue(session_factory)

    result = await claim(session_factory, token, email="mallory@example.com")

    assert result.error.code == "INVALID_TOKEN"
