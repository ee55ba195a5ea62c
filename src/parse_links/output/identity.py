"""Per-parse word-instance identifiers.

Every canonical word node that appears in the rendered output gets exactly
one identifier of the form ``<surface-word>@<token>``, e.g.
``dogs@0f6c3a1e-8d27-4b57-9a3f-2b3e1c9d7a44``. The token is a 128-bit random
value written as a UUID string; it only has to be unique within the
lifetime of one sentence.

The IdentityMap belongs to the caller. A fresh map per render gives fresh
identifiers; reusing one map across parses of the same sentence gives the
same word instance the same identifier in every parse.

Example:
    >>> identity_map = IdentityMap()
    >>> assigner = IdentityAssigner(identity_map, rng=random.Random(7))
    >>> assigner.ensure_identity(dogs_node)
    'dogs@...'
    >>> identity_map.get(dogs_node) == assigner.ensure_identity(dogs_node)
    True
"""

from __future__ import annotations

import logging
import random
import uuid
from typing import Iterator

from parse_links.exceptions import IdentityConflictError, MissingNameError
from parse_links.feature.models import FeatureNode

logger = logging.getLogger(__name__)


class IdentityMap:
    """Canonical node to identifier table, keyed on node identity.

    Entries are write-once: assigning a second identifier to a node that
    already has one raises IdentityConflictError.
    """

    def __init__(self) -> None:
        self._ids: dict[int, str] = {}

    def get(self, node: FeatureNode) -> str | None:
        """Identifier for ``node``, or None if it was never assigned."""
        return self._ids.get(node.handle)

    def assign(self, node: FeatureNode, identifier: str) -> str:
        """Record ``identifier`` for ``node``.

        Raises:
            IdentityConflictError: If the node already has an identifier
        """
        existing = self._ids.get(node.handle)
        if existing is not None:
            raise IdentityConflictError(existing, identifier)
        self._ids[node.handle] = identifier
        return identifier

    def identifiers(self) -> list[str]:
        """All identifiers, in assignment order."""
        return list(self._ids.values())

    def __contains__(self, node: object) -> bool:
        return isinstance(node, FeatureNode) and node.handle in self._ids

    def __len__(self) -> int:
        return len(self._ids)

    def __iter__(self) -> Iterator[int]:
        return iter(self._ids)

    def __repr__(self) -> str:
        return f"IdentityMap({len(self._ids)} entries)"


class IdentityAssigner:
    """Mints identifiers for canonical nodes into an IdentityMap.

    Args:
        identity_map: Table to read from and insert into
        rng: Random source for tokens; a seeded ``random.Random`` makes the
            identifiers reproducible
    """

    def __init__(self, identity_map: IdentityMap, rng: random.Random | None = None):
        self.identity_map = identity_map
        self.rng = rng or random.Random()

    def fresh_token(self) -> str:
        """A new 128-bit random token in UUID text form."""
        return str(uuid.UUID(int=self.rng.getrandbits(128), version=4))

    def ensure_identity(self, node: FeatureNode) -> str:
        """Return the node's identifier, minting one on first encounter.

        Raises:
            MissingNameError: If the node has no ``name`` value
        """
        existing = self.identity_map.get(node)
        if existing is not None:
            return existing

        word = node.get_value("name")
        if word is None:
            raise MissingNameError(node.handle)

        identifier = f"{word}@{self.fresh_token()}"
        logger.debug(f"Minted identifier {identifier} for node #{node.handle}")
        return self.identity_map.assign(node, identifier)
