import logging
from flask import Blueprint, request, jsonify
from parkease.errors import ParkingError, InternalError
from parkease.services.parking_service import ParkingService

logger = logging.getLogger(__name__)

scan_bp = Blueprint('scan', __name__, url_prefix='/scan-license-plate')


@scan_bp.route('', methods=['POST'])
def scan_license_plate():
    try:
        data = ParkingService.handle_scan(request.files.get('image'))
        return jsonify({
            'success': True,
            'message': 'License plate recognized and data saved successfully',
            'data': data
        }), 200

    except ParkingError as e:
        logger.warning(f"Scan rejected ({e.status_code}): {e.message}")
        return jsonify(e.to_dict()), e.status_code

    except Exception:
        logger.exception("Error processing license plate")
        error = InternalError('Error processing license plate image')
        return jsonify(error.to_dict()), error.status_code


@scan_bp.route('', methods=['GET'])
def recent_scans():
    try:
        scans = ParkingService.list_recent_projected(limit=10)
        return jsonify({'success': True, 'data': scans}), 200

    except ParkingError as e:
        logger.error(f"Error fetching recent scans: {e.message}")
        return jsonify(e.to_dict()), e.status_code
