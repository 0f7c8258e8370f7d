"""
Abilities attached to companies and corporations.

An ability may carry a number of remaining uses. Each use spends one; when
none are left the ability removes itself from its owner. What a use does
depends on the kind of ability and is handled by subclasses.
"""
from __future__ import annotations

import logging
from typing import Any, List, Optional

logger = logging.getLogger(__name__)


class AbilityOwner:
    """Mix-in for anything that can hold abilities."""

    def __init__(self) -> None:
        self.abilities: List[Ability] = []

    def add_ability(self, ability: Ability) -> None:
        ability.owner = self
        self.abilities.append(ability)

    def remove_ability(self, ability: Ability) -> None:
        if ability in self.abilities:
            self.abilities.remove(ability)
        ability.owner = None

    def abilities_of(self, type_: str) -> List[Ability]:
        return [ability for ability in self.abilities if ability.type == type_]


class Ability:
    def __init__(
        self,
        type: str,
        owner_type: Optional[str] = None,
        count: Optional[int] = None,
        **opts: Any,
    ) -> None:
        """
        Create an ability.

        :param type: Kind of ability (e.g. 'tile_lay', 'token').
        :param owner_type: Kind of owner allowed to use it ('player', 'corporation').
        :param count: Remaining uses, unlimited when None.
        :param opts: Options for the ability kind; ``when`` names the step it applies to.
        """
        self.type = type
        self.owner_type = owner_type
        self.when = opts.pop('when', None)
        self.count = count
        self.owner: Optional[AbilityOwner] = None
        self.setup(**opts)

    def setup(self, **opts: Any) -> None:
        pass

    def use(self) -> None:
        """Spend one use, detaching the ability from its owner when none are left."""
        if self.count is None:
            return

        self.count -= 1
        if self.count <= 0 and self.owner is not None:
            logger.debug("Ability %s used up, removing from %r", self.type, self.owner)
            self.owner.remove_ability(self)

    def __repr__(self) -> str:
        return f"<Ability: {self.type}, count: {self.count}>"
