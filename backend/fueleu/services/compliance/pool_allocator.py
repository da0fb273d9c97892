"""
Pool Allocator

Redistributes surplus CB to deficit members of a pool with a single
deterministic greedy pass.

Preconditions:
- at least 2 members
- every cb_before is finite
- aggregate CB >= 0

Allocation:
1. Stable sort by cb_before, largest surplus first.
2. Walk forward. For each member still in surplus, scan backward from the
   tail for members still in deficit and move
   min(surplus, |deficit|) across. Stop scanning once the surplus is 0.
3. No backtracking: an exhausted surplus member is never revisited.

Post-conditions (checked, a failure means the inputs broke the contract
or the pass is defective):
- a deficit member never exits below its cb_before
- a surplus member never exits negative

Every transfer is a paired subtract/add, so sum(cb_after) == sum(cb_before).
"""
import logging
import math
from typing import List, Sequence

from ...models.domain import PoolAllocation, PoolMember, PoolResult
from .errors import (
    InvalidMemberCB,
    MemberExitsNegative,
    MemberExitsWorse,
    PoolMinimumMembers,
    PoolNegativeTotal,
)
from .ports import PoolRepository

logger = logging.getLogger(__name__)

MIN_POOL_MEMBERS = 2


def check_pool_preconditions(members: Sequence[PoolMember]) -> None:
    if len(members) < MIN_POOL_MEMBERS:
        raise PoolMinimumMembers(f"Pool must have at least {MIN_POOL_MEMBERS} members")

    for member in members:
        if not math.isfinite(member.cb_before):
            raise InvalidMemberCB(f"Ship {member.ship_id} has a non-finite CB ({member.cb_before})")

    total_cb = sum(member.cb_before for member in members)
    if total_cb < 0:
        raise PoolNegativeTotal("Pool total CB must be non-negative")


def greedy_allocate(members: Sequence[PoolMember]) -> List[PoolAllocation]:
    """Run the transfer pass. Assumes the preconditions already hold."""
    # sorted() is stable with reverse=True, equal CBs keep input order
    ordered = sorted(members, key=lambda m: m.cb_before, reverse=True)
    cb_after = [member.cb_before for member in ordered]

    for i in range(len(ordered)):
        if cb_after[i] <= 0:
            continue
        for j in range(len(ordered) - 1, -1, -1):
            if cb_after[j] >= 0:
                continue
            transfer = min(cb_after[i], abs(cb_after[j]))
            cb_after[i] -= transfer
            cb_after[j] += transfer
            if cb_after[i] == 0:
                break

    return [
        PoolAllocation(ship_id=member.ship_id, cb_before=member.cb_before, cb_after=after)
        for member, after in zip(ordered, cb_after)
    ]


def check_pooling_rules(allocations: Sequence[PoolAllocation]) -> None:
    for allocation in allocations:
        before = allocation.cb_before
        after = allocation.cb_after

        if before < 0 and after < before:
            raise MemberExitsWorse(
                f"Ship {allocation.ship_id} would exit worse ({after} < {before})"
            )

        if before > 0 and after < 0:
            raise MemberExitsNegative(
                f"Ship {allocation.ship_id} would exit negative ({after})"
            )


def allocate(members: Sequence[PoolMember]) -> List[PoolAllocation]:
    """
    Allocate surplus across pool members.

    Returns allocations in allocation order (cb_before descending).

    Raises:
        PoolMinimumMembers, InvalidMemberCB, PoolNegativeTotal: preconditions failed
        MemberExitsWorse, MemberExitsNegative: post-conditions failed
    """
    check_pool_preconditions(members)
    allocations = greedy_allocate(members)
    check_pooling_rules(allocations)
    return allocations


class PoolService:
    """Allocates a pool and persists it in one step."""

    def __init__(self, pool_repo: PoolRepository):
        self.pool_repo = pool_repo

    def create_pool(self, year: int, members: Sequence[PoolMember]) -> PoolResult:
        """
        Allocate and persist a pool for a year.

        Nothing is written unless allocation succeeds; the repository
        writes the pool and every member row atomically.
        """
        try:
            allocations = allocate(members)
        except PoolMinimumMembers:
            logger.warning(f"Pool rejected for year={year}: {len(members)} member(s)")
            raise
        except InvalidMemberCB:
            logger.warning(f"Pool rejected for year={year}: non-finite member CB")
            raise
        except PoolNegativeTotal:
            logger.warning(f"Pool rejected for year={year}: negative aggregate CB")
            raise

        pool_id = self.pool_repo.create(year=year, allocations=allocations)
        logger.info(f"Created pool {pool_id} for year={year} with {len(allocations)} members")

        return PoolResult(pool_id=pool_id, year=year, allocations=allocations)
