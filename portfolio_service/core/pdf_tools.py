# core/pdf_tools.py

"""
PDF operations on in-memory documents, built on PyPDF2 and Pillow.
"""

import io
import zipfile
from pathlib import PurePath
from typing import Iterable, List, Optional, Sequence, Tuple

from PIL import Image
from PyPDF2 import PdfReader, PdfWriter
from PyPDF2.errors import DependencyError, PdfReadError

from ..schemas.pdf_schemas import (
    COMPRESSION_QUALITY,
    CompressionLevel,
    CompressionResult,
    ImageToPdfOptions,
    MergeResult,
    NamedFile,
    Orientation,
    PageSize,
    SplitMode,
    SplitResult,
)
from ..utils.exceptions import DecryptionError, PdfProcessingError, ValidationFailure

PAGE_SIZES_PT = {
    PageSize.A4: (595.28, 841.89),
    PageSize.LETTER: (612.0, 792.0),
}
MAX_PIXELS_PER_POINT = 4.0
RANGES_ERROR = 'Please enter valid page ranges (e.g., "1-3,5,7-10")'


def open_pdf(data: bytes, name: str = "PDF") -> PdfReader:
    try:
        return PdfReader(io.BytesIO(data))
    except (PdfReadError, ValueError, OSError) as e:
        raise PdfProcessingError(
            f"Failed to load {name}. The file might be corrupted.", {"error": str(e)}
        )


def write_pdf(writer: PdfWriter) -> bytes:
    buffer = io.BytesIO()
    writer.write(buffer)
    return buffer.getvalue()


def stem(filename: str) -> str:
    return PurePath(filename).stem or "document"


def parse_page_ranges(text: str, page_count: int) -> List[int]:
    """
    Parse "1-3,5,7-10" into sorted unique 1-based page numbers

    Parts that are malformed, inverted or outside 1..page_count are ignored.
    """
    pages = set()
    for part in (text or "").split(","):
        part = part.strip()
        if not part:
            continue
        if "-" in part:
            start_str, _, end_str = part.partition("-")
            try:
                start, end = int(start_str), int(end_str)
            except ValueError:
                continue
            if 1 <= start <= end <= page_count:
                pages.update(range(start, end + 1))
        else:
            try:
                page = int(part)
            except ValueError:
                continue
            if 1 <= page <= page_count:
                pages.add(page)
    return sorted(pages)


def group_consecutive(pages: Sequence[int]) -> List[Tuple[int, int]]:
    """Collapse sorted page numbers into (start, end) runs"""
    runs: List[Tuple[int, int]] = []
    for page in pages:
        if runs and page == runs[-1][1] + 1:
            runs[-1] = (runs[-1][0], page)
        else:
            runs.append((page, page))
    return runs


def _run_name(start: int, end: int) -> str:
    return f"page_{start}.pdf" if start == end else f"pages_{start}-{end}.pdf"


def _extract(reader: PdfReader, start: int, end: int) -> bytes:
    writer = PdfWriter()
    for index in range(start - 1, end):
        writer.add_page(reader.pages[index])
    return write_pdf(writer)


def split_pdf(
    data: bytes,
    mode: SplitMode,
    ranges: Optional[str] = None,
    every: Optional[int] = None,
) -> SplitResult:
    """
    Split a PDF

    Args:
        data: PDF bytes
        mode: ``pages`` one file per page, ``ranges`` grouped runs, ``every`` fixed chunks
        ranges: Range expression for ``ranges`` mode
        every: Chunk size for ``every`` mode

    Returns:
        SplitResult with the output files in page order
    """
    reader = open_pdf(data)
    page_count = len(reader.pages)

    if mode == SplitMode.PAGES:
        targets = [(f"page_{i:03d}.pdf", i, i) for i in range(1, page_count + 1)]
        message = f"Split into {page_count} individual pages"
    elif mode == SplitMode.RANGES:
        pages = parse_page_ranges(ranges or "", page_count)
        if not pages:
            raise ValidationFailure(RANGES_ERROR)
        targets = [(_run_name(s, e), s, e) for s, e in group_consecutive(pages)]
        message = f"Split into {len(targets)} file(s) from the selected ranges"
    else:
        if not every or every < 1 or every > page_count:
            raise ValidationFailure(
                f"Please enter a valid number between 1 and {page_count}"
            )
        targets = []
        for start in range(1, page_count + 1, every):
            end = min(start + every - 1, page_count)
            targets.append((_run_name(start, end), start, end))
        message = f"Split into {len(targets)} file(s) of up to {every} pages"

    files = [NamedFile(name=name, content=_extract(reader, s, e)) for name, s, e in targets]
    return SplitResult(files=files, page_count=page_count, message=message)


def build_zip(files: Iterable[NamedFile]) -> bytes:
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w", compression=zipfile.ZIP_DEFLATED, compresslevel=6) as archive:
        for item in files:
            archive.writestr(item.name, item.content)
    return buffer.getvalue()


def merge_pdfs(files: Sequence[NamedFile]) -> MergeResult:
    """
    Merge PDFs in the given order

    Unreadable inputs are skipped and reported rather than failing the merge.
    """
    if len(files) < 2:
        raise ValidationFailure("Please select at least 2 PDF files to merge.")

    for item in files:
        if not item.name.lower().endswith(".pdf"):
            raise ValidationFailure(
                f"{item.name} is not a PDF file. Only PDF files are allowed."
            )

    writer = PdfWriter()
    merged, skipped = [], []
    for item in files:
        try:
            reader = PdfReader(io.BytesIO(item.content))
            for page in reader.pages:
                writer.add_page(page)
            merged.append(item.name)
        except (PdfReadError, ValueError, OSError):
            skipped.append(item.name)

    if not merged:
        raise PdfProcessingError("None of the selected files could be read.")

    return MergeResult(
        content=write_pdf(writer),
        page_count=len(writer.pages),
        merged_files=merged,
        skipped_files=skipped,
    )


def _recompress_page_images(page, quality: int) -> int:
    """Re-encode JPEG XObjects on a page in place; returns the number replaced"""
    resources = page.get("/Resources")
    if resources is None:
        return 0
    xobjects = resources.get_object().get("/XObject")
    if xobjects is None:
        return 0

    replaced = 0
    xobjects = xobjects.get_object()
    for name in list(xobjects.keys()):
        obj = xobjects[name].get_object()
        image_filter = obj.get("/Filter")
        if isinstance(image_filter, list) and len(image_filter) == 1:
            image_filter = image_filter[0]
        if obj.get("/Subtype") != "/Image" or image_filter != "/DCTDecode":
            continue
        original = obj._data
        try:
            with Image.open(io.BytesIO(original)) as img:
                if img.mode not in ("RGB", "L"):
                    continue
                out = io.BytesIO()
                img.save(out, "JPEG", quality=quality, optimize=True)
        except OSError:
            continue
        if out.tell() < len(original):
            # the writer recomputes /Length from _data
            obj._data = out.getvalue()
            replaced += 1
    return replaced


def compress_pdf(data: bytes, level: CompressionLevel) -> CompressionResult:
    """
    Compress a PDF

    All levels drop document metadata and deflate content streams; ``high`` and
    ``maximum`` also re-encode embedded JPEG images at the level's quality.
    The smaller of input and output is returned.
    """
    reader = open_pdf(data)
    if reader.is_encrypted:
        raise ValidationFailure("This PDF is password protected. Decrypt it first.")

    quality = COMPRESSION_QUALITY[level]
    writer = PdfWriter()
    for page in reader.pages:
        if level in (CompressionLevel.HIGH, CompressionLevel.MAXIMUM):
            _recompress_page_images(page, int(quality * 100))
        writer.add_page(page)
    for page in writer.pages:
        page.compress_content_streams()

    output = write_pdf(writer)
    if len(output) >= len(data):
        output = data

    original_size = len(data)
    reduction = (original_size - len(output)) / original_size * 100 if original_size else 0.0
    return CompressionResult(
        content=output,
        level=level,
        original_size=original_size,
        compressed_size=len(output),
        reduction_percent=round(reduction, 1),
    )


def decrypt_pdf(data: bytes, password: str) -> bytes:
    """Remove the password from a protected PDF"""
    reader = open_pdf(data)
    if not reader.is_encrypted:
        raise ValidationFailure("This PDF is not password protected.")
    if not password:
        raise ValidationFailure("Enter the PDF password")

    try:
        if not reader.decrypt(password):
            raise DecryptionError("Incorrect password for this PDF.")
    except (NotImplementedError, DependencyError) as e:
        raise PdfProcessingError(f"Unsupported PDF encryption: {e}")

    writer = PdfWriter()
    for page in reader.pages:
        writer.add_page(page)
    return write_pdf(writer)


def extract_images(data: bytes) -> List[NamedFile]:
    """Extract embedded images, named ``page_<n>_<index>.<ext>``"""
    reader = open_pdf(data)
    if reader.is_encrypted:
        raise ValidationFailure("This PDF is password protected. Decrypt it first.")

    images: List[NamedFile] = []
    for page_number, page in enumerate(reader.pages, start=1):
        for index, image in enumerate(page.images, start=1):
            suffix = PurePath(image.name).suffix.lstrip(".") or "png"
            images.append(
                NamedFile(name=f"page_{page_number}_{index}.{suffix}", content=image.data)
            )

    if not images:
        raise PdfProcessingError("No embedded images found in this PDF.")
    return images


def _page_dimensions(
    image_size: Tuple[int, int], options: ImageToPdfOptions
) -> Tuple[float, float]:
    # orientation applies to fixed page sizes only
    if options.page_size == PageSize.AUTO:
        return image_size[0] + 2 * options.margin, image_size[1] + 2 * options.margin

    width, height = PAGE_SIZES_PT[options.page_size]
    if options.orientation == Orientation.LANDSCAPE:
        return height, width
    return width, height


def render_image_page(image: Image.Image, options: ImageToPdfOptions) -> bytes:
    """Place one image centred on a page, scaled to fit, as a single page PDF"""
    page_w, page_h = _page_dimensions(image.size, options)
    avail_w = max(1.0, page_w - 2 * options.margin)
    avail_h = max(1.0, page_h - 2 * options.margin)
    scale = min(avail_w / image.width, avail_h / image.height)
    draw_w, draw_h = image.width * scale, image.height * scale

    # keep the image's native pixels where possible
    pixels_per_point = min(MAX_PIXELS_PER_POINT, max(1.0, 1.0 / scale))

    canvas = Image.new(
        "RGB",
        (round(page_w * pixels_per_point), round(page_h * pixels_per_point)),
        "white",
    )
    resized = image.resize(
        (max(1, round(draw_w * pixels_per_point)), max(1, round(draw_h * pixels_per_point)))
    )
    offset = (
        round((page_w - draw_w) / 2 * pixels_per_point),
        round((page_h - draw_h) / 2 * pixels_per_point),
    )
    canvas.paste(resized, offset)

    out = io.BytesIO()
    canvas.save(out, "PDF", resolution=72.0 * pixels_per_point, quality=options.quality)
    return out.getvalue()


def images_to_pdf(images: Sequence[NamedFile], options: ImageToPdfOptions) -> bytes:
    """
    Convert images to a PDF, one image per page in the given order
    """
    if not images:
        raise ValidationFailure("Please select one or more images")

    writer = PdfWriter()
    for item in images:
        try:
            with Image.open(io.BytesIO(item.content)) as img:
                rgb = _flatten(img)
        except OSError:
            raise ValidationFailure(f"{item.name} is not a supported image.")
        page_pdf = PdfReader(io.BytesIO(render_image_page(rgb, options)))
        for page in page_pdf.pages:
            writer.add_page(page)
    return write_pdf(writer)


def _flatten(img: Image.Image) -> Image.Image:
    if img.mode in ("RGBA", "LA") or (img.mode == "P" and "transparency" in img.info):
        rgba = img.convert("RGBA")
        background = Image.new("RGB", rgba.size, "white")
        background.paste(rgba, mask=rgba.split()[-1])
        return background
    return img.convert("RGB")


def pdf_info(data: bytes) -> Tuple[int, bool, Optional[str], Optional[str]]:
    """Return page count, encryption flag, title and author"""
    reader = open_pdf(data)
    if reader.is_encrypted:
        # owner-password-only files open with an empty user password
        try:
            unlocked = bool(reader.decrypt(""))
        except (NotImplementedError, DependencyError):
            unlocked = False
        return (len(reader.pages) if unlocked else 0), True, None, None
    metadata = reader.metadata
    title = metadata.title if metadata else None
    author = metadata.author if metadata else None
    return len(reader.pages), False, title, author
