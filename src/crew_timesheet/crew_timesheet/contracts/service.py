from __future__ import annotations

from typing import Sequence

from ..core.exceptions import ValidationError
from .model import UtilityContract
from .repository import ContractRepository


class ContractService:
    def __init__(self, contracts: ContractRepository):
        self._contracts = contracts

    def list_contracts(self) -> Sequence[UtilityContract]:
        return self._contracts.list_all()

    def get_contract(self, contract_id: int) -> UtilityContract:
        contract = self._contracts.get_by_id(int(contract_id))
        if not contract:
            raise ValidationError("Contract not found")
        return contract
