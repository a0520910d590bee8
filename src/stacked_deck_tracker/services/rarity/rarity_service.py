"""Rarity service: refreshes stored card rarities from a price snapshot."""

from __future__ import annotations

from collections import Counter
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any

import structlog

from stacked_deck_tracker.exceptions import InvalidExchangeRateError
from stacked_deck_tracker.models.price_snapshot import Confidence, PriceSnapshot
from stacked_deck_tracker.models.rarity import CardRarity, RarityTier
from stacked_deck_tracker.services.rarity.rarity_classifier import classify, is_valid_exchange_rate

if TYPE_CHECKING:
    from stacked_deck_tracker.persistence.repositories.interfaces.rarity_repository import (
        IRarityRepository,
    )


@dataclass(frozen=True)
class RarityUpdateResult:
    """Result of update_from_snapshot."""

    game: str
    league: str
    success: bool
    updated_count: int = 0
    distribution: dict[int, int] = field(default_factory=dict)
    """Number of cards per rarity tier written by this update."""
    error: str | None = None


class RarityService:
    """Keeps (game, league, card) rarities in sync with the snapshot in use."""

    def __init__(
        self,
        rarity_repository: IRarityRepository,
        *,
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: str | None = None,
    ) -> None:
        self._repo = rarity_repository
        self._logger = get_logger(logger_name or self.__class__.__name__)

    async def update_from_snapshot(
        self,
        game: str,
        league: str,
        snapshot: PriceSnapshot,
    ) -> RarityUpdateResult:
        """Classify every card of the exchange price table and store the tiers.

        An invalid exchange ratio rejects the whole update; nothing is written.
        Low confidence keeps a stored user override; medium/high confidence clears it.
        Cards already stored for the league but missing from the table become UNKNOWN.
        """
        ratio = snapshot.exchange.chaos_to_divine_ratio
        if not is_valid_exchange_rate(ratio):
            error = str(InvalidExchangeRateError(ratio))
            self._logger.error(
                "rarity_update_rejected",
                game=game,
                league=league,
                snapshot_id=snapshot.id,
                chaos_to_divine_ratio=ratio,
                error=error,
            )
            return RarityUpdateResult(game=game, league=league, success=False, error=error)

        existing = {r.card_name: r for r in await self._repo.list_by_league(game, league)}
        now = datetime.now(UTC)
        updates: list[CardRarity] = []

        for card_name, price in snapshot.exchange.card_prices.items():
            tier = classify(price.chaos_value, ratio, price.confidence)
            clear_override = price.confidence is not Confidence.LOW
            current = existing.get(card_name)
            if current is None:
                updates.append(
                    CardRarity(game=game, league=league, card_name=card_name, rarity=tier, last_updated=now)
                )
            else:
                updates.append(current.with_rarity(tier, clear_override=clear_override))

        priced = snapshot.exchange.card_prices.keys()
        for card_name, current in existing.items():
            if card_name not in priced:
                updates.append(current.with_rarity(RarityTier.UNKNOWN, clear_override=False))

        await self._repo.save_batch(updates)
        distribution = dict(Counter(int(u.rarity) for u in updates))
        self._logger.info(
            "rarity_updated",
            game=game,
            league=league,
            snapshot_id=snapshot.id,
            rarity_updated_count=len(updates),
            rarity_priced_count=len(priced),
            rarity_distribution=distribution,
        )
        return RarityUpdateResult(
            game=game,
            league=league,
            success=True,
            updated_count=len(updates),
            distribution=distribution,
        )

    async def set_override(
        self,
        game: str,
        league: str,
        card_name: str,
        override: RarityTier | None,
    ) -> CardRarity:
        """Store a user rarity correction (None removes it)."""
        current = await self._repo.get(game, league, card_name)
        if current is None:
            current = CardRarity(game=game, league=league, card_name=card_name, rarity=RarityTier.UNKNOWN)
        updated = current.with_override(override)
        await self._repo.save(updated)
        self._logger.info(
            "rarity_override_set",
            game=game,
            league=league,
            card_name=card_name,
            override_rarity=int(override) if override is not None else None,
        )
        return updated

    async def effective_rarity(self, game: str, league: str, card_name: str) -> RarityTier:
        """Override if present, else the stored rarity, else UNKNOWN."""
        current = await self._repo.get(game, league, card_name)
        if current is None:
            return RarityTier.UNKNOWN
        return current.effective
