"""Decode, normalise and store images uploaded as data URLs."""

from __future__ import annotations

import base64
import binascii
import io
import logging
import re
from pathlib import Path

from PIL import Image, ImageOps

from ..errors import ValidationError

log = logging.getLogger(__name__)

DATA_URL_RE = re.compile(r"^data:([A-Za-z-+/]+);base64,(.+)$")


class ImageStore:
    """Store uploads as JPEGs of bounded width in ``directory``.

    Every upload is re-encoded regardless of its original format, which also
    serves as validation: anything Pillow cannot decode is rejected.
    """

    url_prefix = "/uploads"
    extension = "jpg"

    def __init__(self, directory: Path, max_width: int = 800, quality: int = 80) -> None:
        self.directory = Path(directory)
        self.max_width = max_width
        self.quality = quality

    def ensure(self) -> None:
        self.directory.mkdir(parents=True, exist_ok=True)

    # ------------------------------------------------------------------
    def ingest(self, data_url: str, record_id: str) -> str:
        """Transcode ``data_url`` and store it for ``record_id``.

        Returns the reference (``/uploads/<record_id>.jpg``) under which the
        file is served. Nothing is written unless transcoding succeeds.
        """
        match = DATA_URL_RE.match(data_url)
        if not match:
            raise ValidationError("Invalid image format")

        try:
            raw = base64.b64decode(match.group(2))
        except (binascii.Error, ValueError) as exc:
            log.warning("Image payload is not valid base64: %s", exc)
            raise ValidationError("Invalid image data") from exc

        jpeg = self.transcode(raw)

        filename = f"{record_id}.{self.extension}"
        self.ensure()
        (self.directory / filename).write_bytes(jpeg)
        log.info("Stored image %s (%d bytes)", filename, len(jpeg))
        return f"{self.url_prefix}/{filename}"

    def transcode(self, raw: bytes) -> bytes:
        """Return ``raw`` re-encoded as a JPEG no wider than ``max_width``."""
        try:
            with Image.open(io.BytesIO(raw)) as img:
                img = ImageOps.exif_transpose(img)

                # Flatten transparency onto white before dropping the alpha channel
                if img.mode in ("RGBA", "LA", "P"):
                    img = img.convert("RGBA")
                    background = Image.new("RGB", img.size, (255, 255, 255))
                    background.paste(img, mask=img.split()[-1])
                    img = background
                elif img.mode != "RGB":
                    img = img.convert("RGB")

                width, height = img.size
                if width > self.max_width:
                    new_height = max(1, round(height * self.max_width / width))
                    img = img.resize((self.max_width, new_height), Image.Resampling.LANCZOS)

                out = io.BytesIO()
                img.save(out, "JPEG", quality=self.quality, optimize=True)
        except (OSError, ValueError, SyntaxError, Image.DecompressionBombError) as exc:
            log.warning("Image processing failed: %s", exc)
            raise ValidationError("Invalid image data") from exc
        return out.getvalue()

    def remove(self, ref: str | None) -> None:
        """Best-effort removal of the file behind ``ref``; never raises."""
        if not ref:
            return
        path = self.directory / Path(ref).name
        try:
            path.unlink(missing_ok=True)
        except OSError:
            log.exception("Error deleting image %s", path)
