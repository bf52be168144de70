"""Exports that never leave the client: plain text and a raster snapshot."""

import io

from PIL import Image, ImageDraw, ImageFont

from docextract.services.generation.base import split_lines

# Matches the on-screen preview: 800px wide, 40px padding, 14px/20px mono, 2x scale
IMAGE_SCALE = 2
IMAGE_WIDTH = 800 * IMAGE_SCALE
IMAGE_PADDING = 40 * IMAGE_SCALE
FONT_SIZE = 14 * IMAGE_SCALE
LINE_HEIGHT = 20 * IMAGE_SCALE
MONOSPACE_FONTS = ("DejaVuSansMono.ttf", "LiberationMono-Regular.ttf", "Courier New.ttf")

IMAGE_FORMATS = {"png": "PNG", "jpeg": "JPEG"}


def export_txt(text: str) -> bytes:
    return text.encode("utf-8")


def load_font(size: int = FONT_SIZE) -> ImageFont.ImageFont | ImageFont.FreeTypeFont:
    for name in MONOSPACE_FONTS:
        try:
            return ImageFont.truetype(name, size)
        except OSError:
            continue
    return ImageFont.load_default(size=size)


def wrap_line(line: str, font, max_width: float) -> list[str]:
    """Greedy wrap on spaces, breaking words that are wider than a full line."""
    if not line:
        return [""]

    wrapped = []
    current = ""
    for word in line.split(" "):
        candidate = f"{current} {word}" if current else word
        if font.getlength(candidate) <= max_width:
            current = candidate
            continue
        if current:
            wrapped.append(current)
        current = ""
        for char in word:
            if current and font.getlength(current + char) > max_width:
                wrapped.append(current)
                current = ""
            current += char
    wrapped.append(current)
    return wrapped


def render_text_image(text: str, fmt: str = "png") -> bytes:
    if fmt not in IMAGE_FORMATS:
        raise ValueError(f"Unsupported image format: {fmt}")

    font = load_font()
    max_width = IMAGE_WIDTH - 2 * IMAGE_PADDING
    lines = [part for line in split_lines(text) for part in wrap_line(line, font, max_width)]
    height = 2 * IMAGE_PADDING + LINE_HEIGHT * len(lines)

    image = Image.new("RGB", (IMAGE_WIDTH, height), "#ffffff")
    draw = ImageDraw.Draw(image)
    y = IMAGE_PADDING
    for line in lines:
        draw.text((IMAGE_PADDING, y), line, font=font, fill="#000000")
        y += LINE_HEIGHT

    buffer = io.BytesIO()
    image.save(buffer, format=IMAGE_FORMATS[fmt])
    return buffer.getvalue()
