import logging
from flask import Blueprint, request, jsonify
from parkease.errors import ParkingError
from parkease.services.parking_service import ParkingService

logger = logging.getLogger(__name__)

parking_bp = Blueprint('parking', __name__)

MAX_LIST_LIMIT = 100


@parking_bp.route('/parkingData', methods=['GET'])
def get_parking_data():
    try:
        limit = request.args.get('limit', 20, type=int)
        limit = max(1, min(limit, MAX_LIST_LIMIT))
        plate = request.args.get('plate', None)

        return jsonify(ParkingService.list_recent(limit=limit, plate=plate)), 200

    except ParkingError as e:
        logger.error(f"Failed to retrieve parking data: {e.message}")
        return jsonify(e.to_dict()), e.status_code


@parking_bp.route('/parkingData/<record_id>', methods=['DELETE'])
def delete_parking_data(record_id):
    try:
        deleted = ParkingService.delete_by_id(record_id)
        if deleted is None:
            return jsonify({'success': False, 'message': 'Parking entry not found'}), 404

        return jsonify({
            'success': True,
            'message': 'Parking entry deleted successfully',
            'deletedEntry': deleted
        }), 200

    except ParkingError as e:
        logger.error(f"Error deleting parking entry {record_id}: {e.message}")
        return jsonify(e.to_dict()), e.status_code


@parking_bp.route('/occupancy', methods=['GET'])
def occupancy():
    try:
        days = request.args.get('days', 7, type=int)
        days = max(1, min(days, 31))

        return jsonify(ParkingService.occupancy_by_day(days=days)), 200

    except ParkingError as e:
        logger.error(f"Failed to retrieve occupancy data: {e.message}")
        return jsonify(e.to_dict()), e.status_code
