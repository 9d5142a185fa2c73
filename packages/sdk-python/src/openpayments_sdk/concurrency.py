import asyncio
from collections.abc import Awaitable, Mapping
from typing import Any

from openpayments_sdk.errors import BranchError


async def gather_branches(branches: Mapping[str, Awaitable[Any]]) -> dict[str, Any]:
    """Run named awaitables concurrently and join them.

    Every branch runs to completion; the first failure in declaration order is
    re-raised as :class:`BranchError` naming the branch.
    """
    names = list(branches)
    results = await asyncio.gather(*branches.values(), return_exceptions=True)
    for name, result in zip(names, results):
        if isinstance(result, BaseException):
            raise BranchError(name, result) from result
    return dict(zip(names, results))
