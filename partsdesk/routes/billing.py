# partsdesk/routes/billing.py
from flask import Blueprint, jsonify, request
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from partsdesk.db.session import get_session
from partsdesk.logger import get_logger
from partsdesk.routes.auth import require_login
from partsdesk.schemas.bill_dto import BillCreate, BillDTO, BillUpdate
from partsdesk.services.bill_editor import BillEditor
from partsdesk.services.bill_service import BillService, DuplicateBillNumberError

billing_bp = Blueprint('billing', __name__, url_prefix='/billing')
logger = get_logger(__name__)


def _enum_value(value):
    return value.value if value is not None else None


@billing_bp.route('', methods=['GET'])
def list_bills():
    """Saved bills, newest first"""
    check = require_login()
    if check:
        return check

    db = get_session()
    try:
        bills = BillService(db).list_bills()
        return jsonify(data=[BillDTO.from_domain_model(b).model_dump(mode='json') for b in bills])
    except SQLAlchemyError:
        logger.exception("Failed to load saved bills")
        return jsonify(data=[], error='Failed to load saved bills')
    finally:
        db.close()


@billing_bp.route('', methods=['POST'])
def create_bill():
    check = require_login()
    if check:
        return check

    payload = BillCreate.model_validate(request.get_json(silent=True) or {})

    db = get_session()
    try:
        service = BillService(db)
        bill = service.create_bill(
            bill_number=payload.bill_number,
            customer_name=payload.customer_name,
            payment_mode=_enum_value(payload.payment_mode),
            status=payload.status.value,
            items=[item.model_dump(exclude={'id', 'total'}) for item in payload.items],
        )
        db.commit()
        dto = BillDTO.from_domain_model(bill, service.get_items(bill.id))
        return jsonify(message='Bill saved', data=dto.model_dump(mode='json')), 201
    except (DuplicateBillNumberError, IntegrityError):
        db.rollback()
        return jsonify(message='Bill number already exists'), 409
    except ValueError as e:
        db.rollback()
        return jsonify(message=str(e)), 400
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Failed to save bill")
        return jsonify(message='Failed to save bill'), 500
    finally:
        db.close()


@billing_bp.route('/<bill_id>', methods=['GET'])
def view_bill(bill_id):
    check = require_login()
    if check:
        return check

    db = get_session()
    try:
        service = BillService(db)
        bill = service.get_bill(bill_id)
        if not bill:
            return jsonify(message='Bill not found'), 404
        dto = BillDTO.from_domain_model(bill, service.get_items(bill_id))
        return jsonify(data=dto.model_dump(mode='json'))
    except SQLAlchemyError:
        logger.exception("Failed to load bill %s", bill_id)
        return jsonify(data=None, error='Failed to load bill')
    finally:
        db.close()


@billing_bp.route('/<bill_id>', methods=['PUT'])
def update_bill(bill_id):
    """Save an edited bill: header plus the full submitted item set"""
    check = require_login()
    if check:
        return check

    payload = BillUpdate.model_validate(request.get_json(silent=True) or {})

    db = get_session()
    try:
        service = BillService(db)
        try:
            editor = BillEditor(service, bill_id).load()
        except ValueError:
            return jsonify(message='Bill not found'), 404

        try:
            editor.set_header(
                customer_name=payload.customer_name,
                payment_mode=_enum_value(payload.payment_mode) or '',
                status=payload.status.value,
            )
            editor.apply_rows(item.model_dump(exclude={'total'}) for item in payload.items)
        except ValueError as e:
            return jsonify(message=str(e)), 400

        if not editor.save():
            return jsonify(message='Failed to update bill'), 500

        dto = BillDTO.from_domain_model(service.get_bill(bill_id), service.get_items(bill_id))
        return jsonify(message='Bill updated successfully!', data=dto.model_dump(mode='json'))
    finally:
        db.close()


@billing_bp.route('/<bill_id>', methods=['DELETE'])
def delete_bill(bill_id):
    """Delete a bill and its items together"""
    check = require_login()
    if check:
        return check

    db = get_session()
    try:
        service = BillService(db)
        if not service.get_bill(bill_id):
            return jsonify(message='Bill not found'), 404

        service.delete_bill(bill_id)
        db.commit()
        return jsonify(message='Bill deleted successfully!')
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Error deleting bill %s", bill_id)
        return jsonify(message='Error deleting bill.'), 500
    finally:
        db.close()
