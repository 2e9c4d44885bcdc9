# partsdesk/routes/profit.py
import io

import pandas as pd
from flask import Blueprint, jsonify, request, send_file
from sqlalchemy.exc import SQLAlchemyError

from partsdesk.db.session import get_session
from partsdesk.logger import get_logger
from partsdesk.routes.auth import require_login
from partsdesk.services.profit_ledger_service import ledger_dataframe, ledger_report
from partsdesk.services.spare_part_service import SparePartService

profit_bp = Blueprint('profit', __name__, url_prefix='/profit')
logger = get_logger(__name__)


def _filters():
    category = request.args.get('category', '').strip()
    gsm = request.args.get('gsm', '').strip()
    return category or None, gsm or None


@profit_bp.route('', methods=['GET'])
def profit_dashboard():
    """Profit ledger, summary cards and chart data"""
    check = require_login()
    if check:
        return check

    category, gsm = _filters()

    db = get_session()
    try:
        parts = SparePartService(db).list_parts()
        error = None
    except SQLAlchemyError:
        logger.exception("Failed to load inventory data")
        parts, error = [], 'Failed to load inventory data'
    finally:
        db.close()

    report = ledger_report(parts, category=category, gsm=gsm)
    return jsonify(data=report.model_dump(mode='json'), error=error)


@profit_bp.route('/export', methods=['GET'])
def export_ledger():
    """Download the filtered ledger as an Excel workbook"""
    check = require_login()
    if check:
        return check

    category, gsm = _filters()

    db = get_session()
    try:
        parts = SparePartService(db).list_parts()
    except SQLAlchemyError:
        logger.exception("Failed to load inventory data for export")
        return jsonify(message='Failed to load inventory data'), 500
    finally:
        db.close()

    report = ledger_report(parts, category=category, gsm=gsm)
    df = ledger_dataframe(report.rows)

    output = io.BytesIO()
    with pd.ExcelWriter(output, engine='openpyxl') as writer:
        df.to_excel(writer, index=False, sheet_name='Profit Ledger')
    output.seek(0)

    return send_file(
        output,
        mimetype='application/vnd.openxmlformats-officedocument.spreadsheetml.sheet',
        as_attachment=True,
        download_name='profit_ledger.xlsx',
    )
