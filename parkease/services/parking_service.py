import os
import logging
from collections import Counter
from datetime import datetime, time, timedelta
from flask import current_app
from sqlalchemy.exc import SQLAlchemyError
from werkzeug.utils import secure_filename
from parkease.extensions import db, recognizer
from parkease.errors import ValidationError, NotFoundError, PersistenceError
from parkease.models.parking_db import ParkingRecord, UNKNOWN
from parkease.utils import (
    is_image_mimetype, verify_image, format_clock, format_duration,
    synthesize_time_out, random_block_id
)

logger = logging.getLogger(__name__)


class ParkingService:

    @staticmethod
    def handle_scan(file):
        if file is None or not file.filename:
            raise ValidationError("No image file provided")

        if not is_image_mimetype(file.mimetype):
            raise ValidationError("Only image files are allowed")

        image_bytes = file.read()
        if not image_bytes:
            raise ValidationError("Uploaded image is empty")

        max_size = current_app.config['MAX_IMAGE_SIZE']
        if len(image_bytes) > max_size:
            raise ValidationError(f"Image exceeds the {max_size // (1024 * 1024)}MB size limit")

        image_path = ParkingService._save_upload(file)
        logger.info(f"File uploaded: {file.filename} Size: {len(image_bytes)} bytes")

        try:
            if not verify_image(image_path):
                raise ValidationError("Uploaded file is not a valid image")

            result = recognizer.recognize(image_bytes, os.path.basename(image_path))
            if not result.detected:
                raise NotFoundError("No license plate detected in the image")

            record = ParkingService._build_record(result.best, image_path)
            ParkingService._persist(record)
        except Exception:
            ParkingService._discard_upload(image_path)
            raise

        ParkingService._discard_upload(image_path)
        logger.info(f"Recorded plate {record.plate_number} as {record.id}")

        return {
            'plate': record.plate_number,
            'confidence': record.confidence,
            'parkingId': record.id,
            'timeIn': record.time_in,
            'timeOut': record.time_out,
            'duration': record.duration,
            'blockId': record.block_id
        }

    @staticmethod
    def _save_upload(file):
        upload_folder = current_app.config['UPLOAD_FOLDER']
        os.makedirs(upload_folder, exist_ok=True)

        filename = secure_filename(file.filename) or 'upload'
        timestamp = datetime.now().strftime('%Y%m%d_%H%M%S_%f')
        image_path = os.path.join(upload_folder, f"scan_{timestamp}_{filename}")

        file.stream.seek(0)
        file.save(image_path)
        return image_path

    @staticmethod
    def _discard_upload(image_path):
        try:
            if os.path.exists(image_path):
                os.remove(image_path)
        except OSError as e:
            logger.error(f"Could not remove upload {image_path}: {e}")

    @staticmethod
    def _build_record(candidate, image_path):
        now = datetime.now()
        # timeIn is shown to the second, duration must agree with it
        time_in = now.replace(microsecond=0)

        if current_app.config.get('SYNTHESIZE_TIME_OUT', True):
            time_out = synthesize_time_out(time_in)
            time_out_text = format_clock(time_out)
            duration = format_duration(time_in, time_out)
        else:
            time_out_text = UNKNOWN
            duration = UNKNOWN

        return ParkingRecord(
            sequence_number=int(now.timestamp() * 1000),
            vehicle_type='Car',
            plate_number=candidate.plate.upper(),
            time_in=format_clock(time_in),
            time_out=time_out_text,
            duration=duration,
            block_id=random_block_id(),
            confidence=candidate.confidence,
            image_path=image_path,
            created_at=now,
            updated_at=now
        )

    @staticmethod
    def _persist(record):
        try:
            db.session.add(record)
            db.session.commit()
        except SQLAlchemyError as e:
            db.session.rollback()
            logger.error(f"Failed to save parking record: {e}")
            raise PersistenceError("Failed to save parking data") from e

    @staticmethod
    def _newest_first(query):
        return query.order_by(
            ParkingRecord.created_at.desc(),
            ParkingRecord.sequence_number.desc()
        )

    @staticmethod
    def list_recent(limit=20, plate=None):
        try:
            query = ParkingRecord.query
            if plate:
                query = query.filter(ParkingRecord.plate_number.ilike(f"%{plate.strip()}%"))

            records = ParkingService._newest_first(query).limit(limit).all()
        except SQLAlchemyError as e:
            raise PersistenceError("Failed to retrieve parking data") from e

        return [r.to_dict() for r in records]

    @staticmethod
    def list_recent_projected(limit=10):
        try:
            query = db.session.query(
                ParkingRecord.id,
                ParkingRecord.plate_number,
                ParkingRecord.time_in,
                ParkingRecord.block_id,
                ParkingRecord.created_at
            )
            rows = ParkingService._newest_first(query).limit(limit).all()
        except SQLAlchemyError as e:
            raise PersistenceError("Error fetching recent scans") from e

        return [{
            '_id': row.id,
            'noPlate': row.plate_number,
            'timeIn': row.time_in,
            'blockId': row.block_id,
            'createdAt': row.created_at.isoformat() if row.created_at else None
        } for row in rows]

    @staticmethod
    def latest_record():
        records = ParkingService.list_recent(limit=1)
        return records[0] if records else None

    @staticmethod
    def delete_by_id(record_id):
        try:
            record = db.session.get(ParkingRecord, record_id)
            if record is None:
                return None

            snapshot = record.to_dict()
            db.session.delete(record)
            db.session.commit()
        except SQLAlchemyError as e:
            db.session.rollback()
            raise PersistenceError("Failed to delete parking entry") from e

        logger.info(f"Deleted parking entry {record_id}")
        return snapshot

    @staticmethod
    def occupancy_by_day(days=7, today=None):
        today = today or datetime.now().date()
        first_day = today - timedelta(days=days - 1)

        try:
            rows = db.session.query(ParkingRecord.created_at).filter(
                ParkingRecord.created_at >= datetime.combine(first_day, time.min)
            ).all()
        except SQLAlchemyError as e:
            raise PersistenceError("Failed to retrieve occupancy data") from e

        counts = Counter(row.created_at.date() for row in rows if row.created_at)

        occupancy = []
        for offset in range(days):
            day = first_day + timedelta(days=offset)
            occupancy.append({'time': f"{day.month}/{day.day}", 'value': counts.get(day, 0)})
        return occupancy
