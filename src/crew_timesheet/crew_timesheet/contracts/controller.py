from __future__ import annotations

from flask import Flask, jsonify, session

from ..common.casing import to_view
from ..common.web import app_store, login_required
from ..core.constants import SELECTED_CONTRACT_KEY
from ..container import Container
from ..state.app_state import SetSelectedContract, contract_crews


def register(app: Flask, container: Container) -> None:
    @app.route("/api/contracts", methods=["GET"], endpoint="list_contracts")
    @login_required
    def list_contracts():
        state = app_store(container).state
        selected = state.selected_contract
        return jsonify(
            {
                "contracts": [to_view(c) for c in state.utility_contracts],
                "selectedContractId": selected.id if selected else None,
            }
        )

    @app.route("/api/contracts/<int:contract_id>/select", methods=["POST"], endpoint="select_contract")
    @login_required
    def select_contract(contract_id: int):
        contract = container.contract_service.get_contract(contract_id)
        session[SELECTED_CONTRACT_KEY] = contract.id
        state = app_store(container).dispatch(SetSelectedContract(contract))
        return jsonify(
            {
                "selectedContract": to_view(contract),
                "crews": [to_view(c) for c in contract_crews(state)],
            }
        )
