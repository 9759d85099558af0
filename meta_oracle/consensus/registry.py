"""
Oracle Registry

Holds every registered oracle keyed by its stable id and partitions them
by role for pipeline dispatch.
"""

from typing import Iterator, Optional

import structlog

from meta_oracle.models import OracleHealth, OracleRole
from meta_oracle.oracles.base import Oracle

logger = structlog.get_logger()


class OracleRegistry:
    """
    Registered oracles keyed by id.

    Registration is idempotent by id: registering an oracle whose id is
    already known replaces the earlier instance, along with its weight,
    accuracy and private history.
    """

    def __init__(self, oracles: Optional[list[Oracle]] = None):
        self._oracles: dict[str, Oracle] = {}
        for oracle in oracles or []:
            self.register(oracle)

    def register(self, oracle: Oracle) -> None:
        replaced = oracle.id in self._oracles
        self._oracles[oracle.id] = oracle
        logger.info(
            "Registered oracle",
            oracle_id=oracle.id,
            role=oracle.role.value,
            replaced=replaced,
        )

    def unregister(self, oracle_id: str) -> Optional[Oracle]:
        oracle = self._oracles.pop(oracle_id, None)
        if oracle:
            logger.info("Unregistered oracle", oracle_id=oracle_id)
        return oracle

    def get(self, oracle_id: str) -> Optional[Oracle]:
        return self._oracles.get(oracle_id)

    def all(self) -> list[Oracle]:
        return list(self._oracles.values())

    def by_role(self, role: OracleRole) -> list[Oracle]:
        return [o for o in self._oracles.values() if o.role == role]

    def health(self) -> list[OracleHealth]:
        return [o.health() for o in self._oracles.values()]

    def __len__(self) -> int:
        return len(self._oracles)

    def __contains__(self, oracle_id: object) -> bool:
        return oracle_id in self._oracles

    def __iter__(self) -> Iterator[Oracle]:
        return iter(list(self._oracles.values()))
