"""Screenshot encoding. Playwright only emits PNG/JPEG, we store WebP."""
from PIL import Image
import io


# libwebp refuses images taller or wider than this
WEBP_MAX_DIMENSION = 16383


def png_to_webp(screenshot_bytes: bytes, quality: int = 80) -> bytes:
    """
    Re-encode a PNG screenshot as lossy WebP.
    Very tall full-page captures are cropped to the WebP size limit.
    """
    img = Image.open(io.BytesIO(screenshot_bytes))

    w, h = img.size
    if w > WEBP_MAX_DIMENSION or h > WEBP_MAX_DIMENSION:
        img = img.crop((0, 0, min(w, WEBP_MAX_DIMENSION), min(h, WEBP_MAX_DIMENSION)))

    if img.mode not in ('RGB', 'RGBA'):
        img = img.convert('RGB')

    buf = io.BytesIO()
    img.save(buf, format='WEBP', quality=quality, method=4)
    return buf.getvalue()
