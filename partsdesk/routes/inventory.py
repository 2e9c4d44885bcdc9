# partsdesk/routes/inventory.py
from flask import Blueprint, jsonify, request
from sqlalchemy.exc import SQLAlchemyError

from partsdesk.db.session import get_session
from partsdesk.logger import get_logger
from partsdesk.routes.auth import require_login
from partsdesk.schemas.spare_part_dto import SparePartCreate, SparePartDTO, SparePartUpdate
from partsdesk.services.inventory_summary_service import summarize_inventory
from partsdesk.services.spare_part_service import SparePartService

inventory_bp = Blueprint('inventory', __name__, url_prefix='')
logger = get_logger(__name__)


@inventory_bp.route('/', methods=['GET'])
def index():
    """Dashboard home: stock figures from one fresh snapshot"""
    check = require_login()
    if check:
        return check

    db = get_session()
    try:
        parts = SparePartService(db).list_parts()
        error = None
    except SQLAlchemyError:
        logger.exception("Error fetching stock data")
        parts, error = [], 'Failed to load stock data'
    finally:
        db.close()

    summary = summarize_inventory(parts)
    return jsonify(
        summary=summary.model_dump(mode='json'),
        parts=[SparePartDTO.from_domain_model(p).model_dump(mode='json') for p in parts],
        error=error,
    )


@inventory_bp.route('/parts', methods=['GET'])
def list_parts():
    check = require_login()
    if check:
        return check

    db = get_session()
    try:
        parts = SparePartService(db).list_parts()
        return jsonify(data=[SparePartDTO.from_domain_model(p).model_dump(mode='json') for p in parts])
    except SQLAlchemyError:
        logger.exception("Error fetching spare parts")
        return jsonify(data=[], error='Failed to load stock data')
    finally:
        db.close()


@inventory_bp.route('/parts/low-stock', methods=['GET'])
def low_stock():
    """Parts below their minimum stock, critical ones flagged"""
    check = require_login()
    if check:
        return check

    db = get_session()
    try:
        parts = SparePartService(db).list_parts()
    except SQLAlchemyError:
        logger.exception("Error fetching spare parts")
        return jsonify(data=[], error='Failed to load stock data')
    finally:
        db.close()

    summary = summarize_inventory(parts)
    data = [p.model_dump(mode='json') for p in summary.low_stock]
    message = None if data else 'All items are sufficiently stocked.'
    return jsonify(data=data, count=summary.low_stock_count, message=message)


@inventory_bp.route('/parts', methods=['POST'])
def create_part():
    check = require_login()
    if check:
        return check

    payload = SparePartCreate.model_validate(request.get_json(silent=True) or {})

    db = get_session()
    try:
        part = SparePartService(db).create_part(**payload.model_dump())
        db.commit()
        return jsonify(data=SparePartDTO.from_domain_model(part).model_dump(mode='json')), 201
    except ValueError as e:
        db.rollback()
        return jsonify(message=str(e)), 400
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Failed to add spare part")
        return jsonify(message='Failed to add part'), 500
    finally:
        db.close()


@inventory_bp.route('/parts/<part_id>', methods=['GET'])
def get_part(part_id):
    check = require_login()
    if check:
        return check

    db = get_session()
    try:
        part = SparePartService(db).get_part(part_id)
        if not part:
            return jsonify(message='Spare part not found'), 404
        return jsonify(data=SparePartDTO.from_domain_model(part).model_dump(mode='json'))
    finally:
        db.close()


@inventory_bp.route('/parts/<part_id>', methods=['PUT', 'PATCH'])
def update_part(part_id):
    check = require_login()
    if check:
        return check

    payload = SparePartUpdate.model_validate(request.get_json(silent=True) or {})

    db = get_session()
    try:
        service = SparePartService(db)
        if not service.get_part(part_id):
            return jsonify(message='Spare part not found'), 404

        part = service.update_part(part_id, payload.model_dump(exclude_unset=True))
        db.commit()
        return jsonify(data=SparePartDTO.from_domain_model(part).model_dump(mode='json'))
    except ValueError as e:
        db.rollback()
        return jsonify(message=str(e)), 400
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Failed to update spare part %s", part_id)
        return jsonify(message='Failed to update part'), 500
    finally:
        db.close()


@inventory_bp.route('/parts/<part_id>', methods=['DELETE'])
def delete_part(part_id):
    check = require_login()
    if check:
        return check

    db = get_session()
    try:
        service = SparePartService(db)
        if not service.get_part(part_id):
            return jsonify(message='Spare part not found'), 404

        service.delete_part(part_id)
        db.commit()
        return jsonify(ok=True)
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Failed to delete spare part %s", part_id)
        return jsonify(message='Failed to delete part'), 500
    finally:
        db.close()
