from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import UtilityContract


class ContractRepository(Protocol):
    def list_all(self) -> Sequence[UtilityContract]:
        raise NotImplementedError

    def get_by_id(self, contract_id: int) -> Optional[UtilityContract]:
        raise NotImplementedError
