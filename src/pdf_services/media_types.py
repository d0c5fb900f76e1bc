"""
Static mapping between file extensions and media types.
"""

from pathlib import Path
from typing import Optional, Union

EXTENSION_MEDIA_TYPES = {
    "pdf": "application/pdf",
    "doc": "application/msword",
    "docx": "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
    "ppt": "application/vnd.ms-powerpoint",
    "pptx": "application/vnd.openxmlformats-officedocument.presentationml.presentation",
    "xls": "application/vnd.ms-excel",
    "xlsx": "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
    "rtf": "text/rtf",
    "txt": "text/plain",
    "html": "text/html",
    "htm": "text/html",
    "zip": "application/zip",
    "json": "application/json",
    "bmp": "image/bmp",
    "gif": "image/gif",
    "jpeg": "image/jpeg",
    "jpg": "image/jpeg",
    "png": "image/png",
    "tif": "image/tiff",
    "tiff": "image/tiff",
}

# First extension listed wins when several share a media type
MEDIA_TYPE_EXTENSIONS = {}
for _extension, _media_type in EXTENSION_MEDIA_TYPES.items():
    MEDIA_TYPE_EXTENSIONS.setdefault(_media_type, _extension)


class MediaType:
    """Media type constants used by operations."""

    PDF = EXTENSION_MEDIA_TYPES["pdf"]
    DOC = EXTENSION_MEDIA_TYPES["doc"]
    DOCX = EXTENSION_MEDIA_TYPES["docx"]
    PPT = EXTENSION_MEDIA_TYPES["ppt"]
    PPTX = EXTENSION_MEDIA_TYPES["pptx"]
    XLS = EXTENSION_MEDIA_TYPES["xls"]
    XLSX = EXTENSION_MEDIA_TYPES["xlsx"]
    RTF = EXTENSION_MEDIA_TYPES["rtf"]
    TXT = EXTENSION_MEDIA_TYPES["txt"]
    HTML = EXTENSION_MEDIA_TYPES["html"]
    ZIP = EXTENSION_MEDIA_TYPES["zip"]
    JSON = EXTENSION_MEDIA_TYPES["json"]
    BMP = EXTENSION_MEDIA_TYPES["bmp"]
    GIF = EXTENSION_MEDIA_TYPES["gif"]
    JPEG = EXTENSION_MEDIA_TYPES["jpeg"]
    PNG = EXTENSION_MEDIA_TYPES["png"]
    TIFF = EXTENSION_MEDIA_TYPES["tiff"]


def get_media_type(extension: Optional[str]) -> Optional[str]:
    """Look up the media type for an extension, with or without the leading dot."""
    if not extension:
        return None
    return EXTENSION_MEDIA_TYPES.get(extension.lower().lstrip("."))


def get_extension(media_type: Optional[str]) -> Optional[str]:
    if not media_type:
        return None
    return MEDIA_TYPE_EXTENSIONS.get(media_type.split(";")[0].strip().lower())


def media_type_from_path(path: Union[str, Path]) -> Optional[str]:
    return get_media_type(Path(path).suffix)
