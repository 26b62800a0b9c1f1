"""
Video Service for turning YouTube links into embeddable player URLs
"""
import logging
import re
from typing import Optional
from urllib.parse import urlparse, parse_qs

logger = logging.getLogger(__name__)

EMBED_BASE = 'https://www.youtube.com/embed/'
_TIME_PART = re.compile(r'(\d+)([hms])')
_VIDEO_ID = re.compile(r'^[A-Za-z0-9_-]+$')


class VideoService:
    """Helpers for section video URLs"""

    @staticmethod
    def to_seconds(value: Optional[str]) -> Optional[int]:
        """
        Convert a YouTube time marker to seconds

        Accepts plain seconds ("90", "90s") and h/m/s combinations ("1h2m3s").
        Returns None when the value cannot be read.
        """
        if value is None:
            return None
        value = value.strip().lower()
        if value.isdigit():
            return int(value)

        parts = _TIME_PART.findall(value)
        if not parts or ''.join(amount + unit for amount, unit in parts) != value:
            return None

        multipliers = {'h': 3600, 'm': 60, 's': 1}
        return sum(int(amount) * multipliers[unit] for amount, unit in parts)

    @staticmethod
    def extract_video(url: str) -> tuple:
        """
        Extract (video_id, start_marker) from a YouTube URL

        Supports youtube.com/watch?v=ID&t=..., youtu.be/ID?t=... and
        youtube.com/embed/ID?start=... forms. Returns ('', None) otherwise.
        """
        if not url:
            return '', None

        try:
            parsed = urlparse(url.strip())
        except ValueError:
            return '', None

        host = (parsed.hostname or '').lower()
        query = parse_qs(parsed.query)

        def first(key):
            values = query.get(key)
            return values[0] if values else None

        video_id, start = '', None
        if host == 'youtu.be':
            video_id = parsed.path.lstrip('/').split('/')[0]
            start = first('t')
        elif host == 'youtube.com' or host.endswith('.youtube.com'):
            if parsed.path.startswith('/embed/'):
                video_id = parsed.path[len('/embed/'):].split('/')[0]
                start = first('start')
            elif parsed.path.startswith('/watch'):
                video_id = first('v') or ''
                start = first('t')
        else:
            logger.debug("Unsupported video URL: %s", url)

        if video_id and not _VIDEO_ID.match(video_id):
            return '', None
        return video_id, start

    @classmethod
    def embed_url(cls, url: str) -> str:
        """Embeddable URL for a YouTube link, '' if the link is not supported"""
        video_id, start = cls.extract_video(url)
        if not video_id:
            return ''

        seconds = cls.to_seconds(start)
        if seconds:
            return f'{EMBED_BASE}{video_id}?start={seconds}'
        return f'{EMBED_BASE}{video_id}'
