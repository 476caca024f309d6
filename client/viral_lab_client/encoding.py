import asyncio
import base64
import logging
import mimetypes
from pathlib import Path
from typing import Optional, Union

from pydantic import BaseModel

logger = logging.getLogger(__name__)


class EncodedVideo(BaseModel):
    data: str
    mime_type: Optional[str] = None
    size_bytes: int


def guess_video_mime_type(path: Union[str, Path]) -> Optional[str]:
    mime_type, _ = mimetypes.guess_type(str(path))
    return mime_type


def is_video_file(path: Union[str, Path]) -> bool:
    mime_type = guess_video_mime_type(path)
    return bool(mime_type and mime_type.startswith("video/"))


async def encode_video_file(path: Union[str, Path]) -> EncodedVideo:
    """
    Reads a local video and base64-encodes it for transfer.

    The read happens off the event loop. OSError from the read propagates.
    """
    video_path = Path(path)
    raw = await asyncio.to_thread(video_path.read_bytes)
    encoded = await asyncio.to_thread(base64.b64encode, raw)
    logger.debug(f"Encoded {video_path.name}: {len(raw)} bytes")
    return EncodedVideo(
        data=encoded.decode("ascii"),
        mime_type=guess_video_mime_type(video_path),
        size_bytes=len(raw),
    )
