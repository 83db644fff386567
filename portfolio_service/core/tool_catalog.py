# core/tool_catalog.py

from typing import Dict, List, Optional

from ..schemas.portfolio_schemas import ToolCategory

TOOL_CATEGORIES: List[str] = [
    "News Aggregator",
    "PDF Converter",
    "File Secure",
    "Text Secure",
    "Image Compress",
    "Nepali Unicode",
]

FEATURED_SLUGS: List[str] = ["news-aggregator", "nepali-unicode", "file-secure"]

SUBTOOLS: Dict[str, List[str]] = {
    "news-aggregator": ["Global News", "Nepali News"],
    "pdf-converter": [
        "Image to PDF",
        "PDF to Images",
        "Merge PDFs",
        "Split PDF",
        "Compress PDF",
        "Decrypt PDF",
    ],
    "file-secure": [
        "File Encryption",
        "Image Encryption",
        "Audio Encryption",
        "Video Encryption",
        "PDF Encryption",
    ],
    "text-secure": ["Text Encryption", "Text Decryption"],
    "image-compress": ["Image Compressor"],
    "nepali-unicode": ["Nepali Unicode"],
}

PREVIEW_SIZE = 3


def slugify(name: str) -> str:
    return "-".join(name.lower().split())


def build_category(name: str) -> ToolCategory:
    slug = slugify(name)
    subtools = SUBTOOLS.get(slug, [])
    return ToolCategory(
        name=name,
        slug=slug,
        featured=slug in FEATURED_SLUGS,
        subtools=subtools,
        preview=subtools[:PREVIEW_SIZE],
        has_more=len(subtools) > PREVIEW_SIZE,
    )


def list_categories() -> List[ToolCategory]:
    """Featured categories first, each group in display order"""
    categories = [build_category(name) for name in TOOL_CATEGORIES]
    return [c for c in categories if c.featured] + [c for c in categories if not c.featured]


def get_category(slug: str) -> Optional[ToolCategory]:
    for name in TOOL_CATEGORIES:
        if slugify(name) == slug:
            return build_category(name)
    return None
