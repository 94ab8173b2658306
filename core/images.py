from __future__ import annotations

import base64
import io
from typing import Optional

from PIL import Image, UnidentifiedImageError

PREVIEW_SIDE = 160


def image_url(base_url: str, file_name: Optional[str], image_path: str = "/images/", placeholder: Optional[str] = None) -> Optional[str]:
    """Resolve a stored image file name to a full URL on the backend."""
    if not file_name:
        return placeholder
    if file_name.startswith("http://") or file_name.startswith("https://") or file_name.startswith("data:"):
        return file_name
    prefix = "/" + image_path.strip("/") + "/"
    return f"{base_url.rstrip('/')}{prefix}{file_name.lstrip('/')}"


def _square(img: Image.Image) -> Image.Image:
    w, h = img.size
    side = min(w, h)
    left = (w - side) // 2
    top = (h - side) // 2
    return img.crop((left, top, left + side, top + side))


def data_url_preview(raw: bytes, side: int = PREVIEW_SIDE) -> Optional[str]:
    """Centre-cropped PNG thumbnail as a data URL; None for non-images."""
    if not raw:
        return None
    try:
        img = Image.open(io.BytesIO(raw)).convert("RGBA")
    except (UnidentifiedImageError, OSError):
        return None
    img = _square(img)
    img.thumbnail((side, side))
    buf = io.BytesIO()
    img.save(buf, format="PNG")
    return "data:image/png;base64," + base64.b64encode(buf.getvalue()).decode("ascii")
