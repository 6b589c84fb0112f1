from __future__ import annotations

import io
from pathlib import Path

from rasterplot.raster.canvas import Canvas


TGA_HEADER_SIZE = 18
TGA_FOOTER = b"\x00" * 8 + b"TRUEVISION-XFILE.\x00"


def encode_tga(canvas: Canvas, *, rle: bool = True) -> bytes:
    """Encode ``canvas`` as a 32-bit BGRA TGA with a bottom-left origin.

    With ``rle`` the header declares image type 10 and the body is made of
    run-length packets; otherwise type 2 with raw pixels. Pillow writes the
    header, body and TGA 2.0 footer.
    """
    buf = io.BytesIO()
    canvas.to_image().save(buf, format="TGA", rle=rle)
    return buf.getvalue()


def save_canvas(canvas: Canvas, path: str | Path, *, rle: bool = True) -> Path:
    """Write ``canvas`` to ``path``; ``.tga`` uses the TGA encoder, other suffixes go through Pillow."""
    out = Path(path)
    out.parent.mkdir(parents=True, exist_ok=True)
    if out.suffix.lower() in {".tga", ".icb", ".vda", ".vst"}:
        out.write_bytes(encode_tga(canvas, rle=rle))
    else:
        canvas.to_image().save(out)
    return out
