"""Thumbnail derivation for URL content."""

import re

YOUTUBE_VIDEO_ID = re.compile(r"(?:youtube\.com/watch\?v=|youtu\.be/)([^&\n?#/]+)")
YOUTUBE_THUMBNAIL = "https://img.youtube.com/vi/{video_id}/maxresdefault.jpg"
TIKTOK_PLACEHOLDER = "https://via.placeholder.com/300x400/FF0050/FFFFFF?text=TikTok"


def derive_thumbnail(url: str) -> str | None:
    """Best-effort thumbnail for a shared link (YouTube or TikTok), else None."""
    match = YOUTUBE_VIDEO_ID.search(url)
    if match:
        return YOUTUBE_THUMBNAIL.format(video_id=match.group(1))
    if "tiktok.com" in url:
        return TIKTOK_PLACEHOLDER
    return None
