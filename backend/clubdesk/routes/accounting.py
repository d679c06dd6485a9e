from datetime import date
from flask import Blueprint, request, jsonify
from clubdesk.extensions import db, limiter
from clubdesk.models import Transaction
from clubdesk.services import ledger

accounting_bp = Blueprint("accounting", __name__)


@accounting_bp.route('/transactions', methods=['GET'])
def list_transactions():
    year = request.args.get('year', type=int)
    month = request.args.get('month')

    try:
        transactions = ledger.list_transactions(year=year, month=month)
    except ValueError as e:
        return jsonify({"error": str(e)}), 400

    return jsonify([ledger.serialize_transaction(t) for t in transactions]), 200


@accounting_bp.route('/transactions', methods=['POST'])
@limiter.limit("60 per minute")
def add_transaction():
    data = request.get_json(silent=True) or {}

    try:
        tx = ledger.add_transaction(data)
    except ValueError as e:
        return jsonify({"error": str(e)}), 400

    return jsonify({"message": "Transaction recorded", "transaction": ledger.serialize_transaction(tx)}), 201


@accounting_bp.route('/transactions/<int:transaction_id>', methods=['DELETE'])
def delete_transaction(transaction_id):
    tx = db.get_or_404(Transaction, transaction_id)
    ledger.delete_transaction(tx)
    return jsonify({"message": "Deleted"}), 200


@accounting_bp.route('/summary', methods=['GET'])
def summary():
    return jsonify(ledger.summary()), 200


@accounting_bp.route('/yearly', methods=['GET'])
def yearly():
    year = request.args.get('year', date.today().year, type=int)
    return jsonify(ledger.yearly_balance(year)), 200


@accounting_bp.route('/categories', methods=['GET'])
def categories():
    return jsonify({
        "income": list(ledger.INCOME_CATEGORIES),
        "expense": list(ledger.EXPENSE_CATEGORIES),
    }), 200
