import uuid
from datetime import datetime
from parkease.extensions import db

UNKNOWN = 'unknown'


def _new_id():
    return uuid.uuid4().hex


class ParkingRecord(db.Model):
    __tablename__ = 'parking_records'

    id = db.Column(db.String(32), primary_key=True, default=_new_id)
    sequence_number = db.Column(db.BigInteger, nullable=False)
    vehicle_type = db.Column(db.String(20), nullable=False, default='Car')
    plate_number = db.Column(db.String(20), nullable=False, index=True)
    time_in = db.Column(db.String(20), nullable=False)
    time_out = db.Column(db.String(20), nullable=False, default=UNKNOWN)
    duration = db.Column(db.String(20), nullable=False, default=UNKNOWN)
    block_id = db.Column(db.String(12), nullable=False)
    confidence = db.Column(db.Float)
    image_path = db.Column(db.String(500))
    created_at = db.Column(db.DateTime, default=datetime.now, index=True)
    updated_at = db.Column(db.DateTime, default=datetime.now, onupdate=datetime.now)

    def to_dict(self):
        return {
            '_id': self.id,
            'no': self.sequence_number,
            'type': self.vehicle_type,
            'noPlate': self.plate_number,
            'timeIn': self.time_in,
            'timeOut': self.time_out,
            'duration': self.duration,
            'blockId': self.block_id,
            'confidence': self.confidence,
            'imagePath': self.image_path,
            'createdAt': self.created_at.isoformat() if self.created_at else None,
            'updatedAt': self.updated_at.isoformat() if self.updated_at else None
        }
