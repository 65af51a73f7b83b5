import random
import secrets
from datetime import datetime, time, timedelta
from PIL import Image, UnidentifiedImageError

OPENING_TIME = time(8, 0, 0)
CLOSING_TIME = time(18, 59, 59)


def is_image_mimetype(mimetype):
    return bool(mimetype) and mimetype.lower().startswith('image/')


def verify_image(image_path):
    try:
        with Image.open(image_path) as img:
            img.verify()
        return True
    except (UnidentifiedImageError, OSError, SyntaxError, ValueError):
        return False


def format_clock(moment):
    # 9:05:02 AM
    return moment.strftime('%I:%M:%S %p').lstrip('0')


def format_duration(start, end):
    minutes = int((end - start).total_seconds() // 60)
    if minutes < 0:
        raise ValueError("end must not be before start")
    hours, minutes = divmod(minutes, 60)
    return f"{hours}h {minutes}m"


def synthesize_time_out(time_in, rng=random):
    """Pick a fake exit time for a vehicle that entered at ``time_in``.

    A random second between opening and closing time on the same day; when
    that is not after ``time_in`` the vehicle stays 1 to 6 hours instead.
    """
    day = time_in.date()
    start = datetime.combine(day, OPENING_TIME)
    end = datetime.combine(day, CLOSING_TIME)
    span = int((end - start).total_seconds())

    candidate = start + timedelta(seconds=rng.randint(0, span))
    if candidate <= time_in:
        candidate = time_in + timedelta(hours=rng.randint(1, 6))
    return candidate


def random_block_id():
    return '0x' + secrets.token_hex(4)
